"""
Coding Agent terminal front end.
"""

import asyncio
import logging
import os
import sys

from dotenv import load_dotenv
from textual import work
from textual.app import App, ComposeResult
from textual.logging import TextualHandler

from coding_agent.config import Settings
from coding_agent.core.gemini import GeminiClient
from coding_agent.core.orchestrator import Orchestrator
from coding_agent.errors import ConfigError
from coding_agent.widgets import ChatLog, InputArea

load_dotenv()


class ChatApp(App):
    TITLE = "Coding Agent"

    def __init__(self, settings: Settings, client=None):
        """Initialize the chat application. ``client`` defaults to a GeminiClient."""
        super().__init__()
        self.settings = settings
        self.event_q: asyncio.Queue = asyncio.Queue()
        self.client = client if client is not None else GeminiClient(settings)
        self.orchestrator = Orchestrator(self.client, self.event_q)

    def compose(self) -> ComposeResult:
        yield ChatLog(id="chat_log", wrap=True)
        yield InputArea(id="input_text", placeholder="how can i help you")

    async def on_mount(self) -> None:
        chat_log = self.query_one("#chat_log", ChatLog)
        chat_log.welcome("Welcome to the CLI Coding Agent! Type 'exit' to quit.")
        chat_log.line(" ", f"cwd: {os.getcwd()}  model: {self.settings.model}", "dim")
        self.query_one("#input_text", InputArea).focus()
        self._pump()

    async def on_unmount(self) -> None:
        aclose = getattr(self.client, "aclose", None)
        if aclose is not None:
            await aclose()

    async def on_input_area_submit(self, message: InputArea.Submit) -> None:
        """
        Echo the line, lock the input and hand the line to the orchestrator.
        The input unlocks when the orchestrator reports 'done'.
        """
        self.query_one("#input_text", InputArea).busy = True
        self.query_one("#chat_log", ChatLog).user(message.value)
        self.run_turn(message.value)

    @work(exclusive=True, group='turn')
    async def run_turn(self, user_input: str):
        await self.orchestrator.run(user_input)

    @work(exclusive=True, group='pump')
    async def _pump(self):
        """
        Event processing loop. Renders orchestrator events into the chat log.
        """
        chat_log = self.query_one("#chat_log", ChatLog)
        input_area = self.query_one("#input_text", InputArea)

        while True:
            ev = await self.event_q.get()
            type = ev.get("type", '')

            if type == 'reply':
                chat_log.model(ev.get('text', ''))
            elif type == 'tool_start':
                chat_log.tool_start(ev.get('tool', ''), ev.get('args') or {})
            elif type == 'tool_end':
                chat_log.tool_end(ev.get('tool', ''), ev.get('output', ''))
            elif type == 'tool_error':
                chat_log.tool_error(ev.get('tool', ''), ev.get('message', ''))
            elif type == 'unknown_tool':
                chat_log.unknown_tool(ev.get('tool', ''))
            elif type == 'error':
                chat_log.error(ev.get('message', ''))
                if 'status' in ev:
                    chat_log.error(f"Status: {ev['status']}")
                if ev.get('details'):
                    chat_log.error(f"Details: {ev['details']}")
            elif type == 'done':
                input_area.busy = False
                input_area.focus()
            elif type == 'closed':
                self.exit()
                return


def main():
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)

    logging.basicConfig(level=settings.log_level, handlers=[TextualHandler()])

    app = ChatApp(settings)
    app.run()


if __name__ == "__main__":
    main()
