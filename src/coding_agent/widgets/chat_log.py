"""
Scrolling transcript. Each line starts with a status glyph.
"""
from typing import Any, Optional

from rich.text import Text
from textual.widgets import RichLog


class ChatLog(RichLog):
    def line(self, glyph: str, text: str, style: Optional[str] = None) -> None:
        self.write(Text.assemble(f"{glyph} ", (text, style or "")))

    def welcome(self, text: str) -> None:
        self.line("🚀", text, "bold green")

    def user(self, text: str) -> None:
        self.line("🧑", f"You: {text}", "dim")

    def model(self, text: str) -> None:
        self.line("🤖", f"Gemini: {text}")

    def tool_start(self, tool: str, args: dict[str, Any]) -> None:
        self.line("🛠", f'Running tool "{tool}" with args: {args}', "cyan")

    def tool_end(self, tool: str, output: str) -> None:
        self.line("✅", f'Tool "{tool}" result:\n{output}', "green")

    def tool_error(self, tool: str, message: str) -> None:
        self.line("💥", f'Tool "{tool}" error: {message}', "red")

    def unknown_tool(self, tool: str) -> None:
        self.line("❓", f"Unknown tool: {tool}", "yellow")

    def error(self, text: str) -> None:
        self.line("❌", text, "bold red")
