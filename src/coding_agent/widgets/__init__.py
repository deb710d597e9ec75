"""
Terminal widgets: the transcript log and the input line.
"""
from coding_agent.widgets.chat_log import ChatLog
from coding_agent.widgets.input_area import InputArea

__all__ = ["ChatLog", "InputArea"]
