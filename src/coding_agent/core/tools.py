"""
Local tools the model can ask the agent to run.

Every tool works relative to the current working directory unless given an
absolute path. Paths are not validated or confined, and ``exec`` runs any
command through the system shell with the agent's own privileges. That is
the agent's trust boundary: whatever the model asks for, it gets.
"""
import asyncio
import logging
import os
import re

from langchain.tools import tool
from pydantic import BaseModel, Field, StrictStr

from coding_agent.errors import ArgumentError, CommandExecutionError, FilesystemError

logger = logging.getLogger(__name__)


class ReadFileArgs(BaseModel):
    path: StrictStr = Field(description="path of the file to read")


class EditFileArgs(BaseModel):
    path: StrictStr = Field(description="path of the file to edit")
    oldStr: StrictStr = Field(description="pattern to replace, every match is replaced")
    newStr: StrictStr = Field(description="replacement text")


class CreateFileArgs(BaseModel):
    path: StrictStr = Field(description="path of the file to create")
    content: StrictStr = Field(description="full content of the new file")


class ExecArgs(BaseModel):
    command: StrictStr = Field(description="shell command line to run")


@tool("list_files", description="List all files and folders in the current directory.")
def list_files() -> str:
    try:
        entries = os.listdir(".")
    except OSError as e:
        raise FilesystemError(f"Cannot list current directory: {e}") from e
    return "\n".join(sorted(entries))


@tool(
    "read_file",
    args_schema=ReadFileArgs,
    description="Read and return the content of a file using its path.",
)
def read_file(path: str) -> str:
    try:
        with open(path, encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FilesystemError(f"Cannot read '{path}': {e}") from e


@tool(
    "edit_file",
    args_schema=EditFileArgs,
    description=(
        "Find and replace all instances of a specific string in a file. "
        "You must provide: the file path, the exact string to replace (oldStr), "
        "and the new string to use (newStr)."
    ),
)
def edit_file(path: str, oldStr: str, newStr: str) -> str:
    # oldStr is a regular expression; newStr goes in as-is
    try:
        pattern = re.compile(oldStr)
    except re.error as e:
        raise ArgumentError(f"Invalid oldStr pattern {oldStr!r}: {e}") from e

    try:
        with open(path, encoding="utf-8") as f:
            content = f.read()
        content = pattern.sub(lambda _: newStr, content)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
    except (OSError, UnicodeDecodeError) as e:
        raise FilesystemError(f"Cannot edit '{path}': {e}") from e
    return f"✏️ Successfully edited '{path}'"


@tool(
    "create_file",
    args_schema=CreateFileArgs,
    description="Create a new file with the specified content.",
)
def create_file(path: str, content: str) -> str:
    try:
        parent = os.path.dirname(path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        raise FilesystemError(f"Cannot create '{path}': {e}") from e
    return f"📁 Created {path}"


@tool(
    "exec",
    args_schema=ExecArgs,
    description="Execute a terminal or shell command.",
)
async def exec_command(command: str) -> str:
    logger.info("running shell command: %s", command)
    try:
        proc = await asyncio.create_subprocess_shell(
            command,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise CommandExecutionError(str(e)) from e

    stdout, stderr = await proc.communicate()
    if proc.returncode != 0:
        err = stderr.decode(errors="replace")
        if not err:
            err = f"Command failed with exit status {proc.returncode}: {command}"
        raise CommandExecutionError(err, proc.returncode)
    return stdout.decode(errors="replace")


DEFAULT_TOOLS = [list_files, read_file, edit_file, create_file, exec_command]
