"""Shared building blocks for status bar blocks: widgets, events, errors."""

from __future__ import annotations

import enum
import re
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Mapping, Optional

_PLACEHOLDER = re.compile(r"\{[^{}]+\}")


class State(enum.Enum):
    """Visual state of a widget."""

    IDLE = "idle"
    INFO = "info"
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"


class MouseButton(enum.Enum):
    """Mouse buttons reported in click events."""

    LEFT = 1
    MIDDLE = 2
    RIGHT = 3
    WHEEL_UP = 4
    WHEEL_DOWN = 5
    FORWARD = 8
    BACK = 9
    UNKNOWN = 0


@dataclass(frozen=True)
class ClickEvent:
    """A click on a named widget of the bar."""

    name: Optional[str]
    button: MouseButton


class BlockError(Exception):
    """An error raised by a block while creating, updating or handling clicks."""

    def __init__(self, block: str, message: str) -> None:
        super().__init__(f"{block}: {message}")
        self.block = block
        self.message = message


@dataclass
class Widget:
    """A displayable piece of a block: text with an optional icon and state."""

    text: str = ""
    icon: Optional[str] = None
    state: State = State.IDLE
    name: Optional[str] = None


UpdateRequest = Callable[[str], None]


class Block:
    """Base class of all blocks."""

    def __init__(self, request_update: Optional[UpdateRequest] = None) -> None:
        self.id = new_block_id()
        self._request_update = request_update

    def update(self) -> Optional[float]:
        """Refresh internal state; return seconds until the next update, or None."""
        return None

    def view(self) -> list[Widget]:
        """Return the widgets currently shown by this block."""
        return []

    def click(self, event: ClickEvent) -> None:
        """Handle a click event; the default ignores it."""

    def request(self) -> None:
        """Ask the scheduler to update this block as soon as possible."""
        if self._request_update is not None:
            self._request_update(self.id)


def new_block_id() -> str:
    """Return a fresh unique block id."""
    return uuid.uuid4().hex


def render_format(template: str, values: Mapping[str, str]) -> str:
    """Replace ``{name}`` placeholders whose braced key is in ``values``."""

    def substitute(match: re.Match) -> str:
        key = match.group(0)
        return str(values[key]) if key in values else key

    return _PLACEHOLDER.sub(substitute, template)


def read_text(path: Path | str, block: str) -> str:
    """Read a small text file, dropping one trailing newline."""
    try:
        content = Path(path).read_text()
    except OSError as exc:
        raise BlockError(block, f"failed to read {path}") from exc
    if content.endswith("\n"):
        content = content[:-1]
    return content