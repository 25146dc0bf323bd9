"""Console helpers for the interactive todo assistant."""
from __future__ import annotations

import asyncio
import contextlib
import itertools
import json
import re
import sys
from typing import Iterable

from langchain_core.messages import AIMessage, BaseMessage, ToolMessage

from .text import clamp_text

RESET = "\x1b[0m"
PRIMARY_COLOR = "\x1b[38;2;120;200;255m"
ACCENT_COLOR = "\x1b[38;2;150;140;255m"
INFO_COLOR = "\x1b[38;2;110;110;110m"
ERROR_COLOR = "\x1b[38;2;230;90;90m"
TODO_OPEN_COLOR = "\x1b[38;2;176;176;176m"
TODO_DONE_COLOR = "\x1b[38;2;34;139;34m"

MD_BOLD = re.compile(r"\*\*(.+?)\*\*")
MD_CODE = re.compile(r"`([^`]+)`")
MD_HEADING = re.compile(r"^(#{1,6})\s*(.+)$", re.MULTILINE)
MD_BULLET = re.compile(r"^\s*[-\*]\s+", re.MULTILINE)


def clear_screen() -> None:
    if sys.stdout.isatty():
        sys.stdout.write("\033c")
        sys.stdout.flush()


def render_banner(title: str, subtitle: str | None = None) -> None:
    print(f"{PRIMARY_COLOR}{title}{RESET}")
    if subtitle:
        print(f"{ACCENT_COLOR}{subtitle}{RESET}")
    print()


def user_prompt_label() -> str:
    return f"{PRIMARY_COLOR}Du{RESET}{INFO_COLOR} >> {RESET}"


def format_markdown(text: str) -> str:
    """Turn the little markdown the model uses into ANSI styling."""
    if not text:
        return text

    formatted = MD_BOLD.sub(lambda m: f"\x1b[1m{m.group(1)}{RESET}", text)
    formatted = MD_CODE.sub(lambda m: f"\x1b[38;2;255;214;102m{m.group(1)}{RESET}", formatted)
    formatted = MD_HEADING.sub(lambda m: f"\x1b[1m{m.group(2)}{RESET}", formatted)
    return MD_BULLET.sub("• ", formatted)


def print_error(text: str) -> None:
    print(f"{ERROR_COLOR}Error: {text}{RESET}")


def pretty_tool_line(kind: str, title: str | None) -> None:
    body = f"{kind}({title})" if title else kind
    print(f"{ACCENT_COLOR}\x1b[1m⏺ {body}{RESET}")


def pretty_sub_line(text: str) -> None:
    for line in text.splitlines() or [""]:
        print(f"  ⎿ {line}")


def todo_lines(payload: str) -> list[str]:
    """Render a ``get_todos`` result as checkbox lines."""
    try:
        items = json.loads(payload)
    except ValueError:
        return [payload]
    if not items:
        return [f"{TODO_OPEN_COLOR}☐ Keine Todos{RESET}"]

    lines = []
    for item in items:
        if item.get("isDone"):
            lines.append(f"{TODO_DONE_COLOR}\x1b[9m☒ {item.get('title')}{RESET}")
        else:
            lines.append(f"{TODO_OPEN_COLOR}☐ {item.get('title')}{RESET}")
    return lines


def print_tool_activity(messages: Iterable[BaseMessage]) -> None:
    """Echo the tool requests and results of one agent run."""
    for message in messages:
        if isinstance(message, AIMessage):
            for call in message.tool_calls:
                pretty_tool_line(call["name"], call["args"].get("title"))
            for call in message.invalid_tool_calls:
                pretty_tool_line(call.get("name") or "?", "ungültige Argumente")
        elif isinstance(message, ToolMessage):
            content = str(message.content)
            if message.status == "error":
                pretty_sub_line(f"{ERROR_COLOR}{clamp_text(content, 500)}{RESET}")
            elif message.name == "get_todos":
                for line in todo_lines(content):
                    pretty_sub_line(line)
            else:
                pretty_sub_line(clamp_text(content, 500))


class Spinner:
    """Async status line shown while the agent works.

    The label can change while it spins; the CLI switches it from waiting on
    the model to the name of the tool being executed. Output that is printed
    between frames should call :meth:`clear` first.
    """

    frames = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"
    color = "\x1b[38;2;255;229;92m"

    def __init__(self, label: str = "Warte auf das Modell", interval: float = 0.08) -> None:
        self.label = label
        self.interval = interval
        self.enabled = sys.stdout.isatty()
        self._task: asyncio.Task | None = None

    async def __aenter__(self) -> "Spinner":
        if self.enabled:
            self._task = asyncio.create_task(self._spin())
        return self

    async def __aexit__(self, *exc_info) -> None:
        if self._task is not None:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
            self._task = None
        self.clear()

    def show_tools(self, message: BaseMessage) -> None:
        """Point the label at the tools ``message`` requests, or back at the model."""
        names = [call["name"] for call in getattr(message, "tool_calls", [])]
        self.label = f"Führe {', '.join(names)} aus" if names else "Warte auf das Modell"

    def clear(self) -> None:
        if self.enabled:
            sys.stdout.write("\r\x1b[2K")
            sys.stdout.flush()

    async def _spin(self) -> None:
        loop = asyncio.get_running_loop()
        started = loop.time()
        for frame in itertools.cycle(self.frames):
            elapsed = loop.time() - started
            sys.stdout.write(f"\r\x1b[2K{self.color}{frame} {self.label} ({elapsed:.1f}s){RESET}")
            sys.stdout.flush()
            await asyncio.sleep(self.interval)


__all__ = [
    "Spinner",
    "clear_screen",
    "format_markdown",
    "pretty_sub_line",
    "pretty_tool_line",
    "print_error",
    "print_tool_activity",
    "render_banner",
    "todo_lines",
    "user_prompt_label",
    "INFO_COLOR",
    "RESET",
]
