"""
Input line for the coding agent.
"""
from textual import on
from textual.message import Message
from textual.reactive import reactive
from textual.widgets import Input


class InputArea(Input):
    """
    One submitted line is one user message. While ``busy`` is set a turn is
    still running and submissions are ignored.
    """

    busy: reactive[bool] = reactive(False)

    class Submit(Message, bubble=True):
        def __init__(self, value: str) -> None:
            super().__init__()
            self.value = value

    def watch_busy(self, busy: bool) -> None:
        self.placeholder = "working..." if busy else "how can i help you"

    @on(Input.Submitted)
    def _submitted(self, event: Input.Submitted) -> None:
        event.stop()
        if self.busy:
            return
        self.post_message(self.Submit(event.value))
        self.value = ""
