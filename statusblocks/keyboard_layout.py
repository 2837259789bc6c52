"""Block showing the current keyboard layout."""

from __future__ import annotations

import re
import subprocess
from dataclasses import dataclass
from typing import Callable, Optional

from .base import Block, BlockError, UpdateRequest, Widget

_BLOCK = "keyboard_layout"
_DRIVERS = ("setxkbmap", "localebus", "kbddbus")


def parse_setxkbmap(output: str) -> str:
    """Extract the layout from the output of ``setxkbmap -query``."""
    for line in output.split("\n"):
        if line.startswith("layout"):
            return re.split(r"\s", line)[-1]
    raise BlockError(_BLOCK, "Could not find the layout entry from setxkbmap.")


def setxkbmap_layouts() -> str:
    """Query setxkbmap for the current layout(s)."""
    try:
        completed = subprocess.run(["setxkbmap", "-query"], capture_output=True)
    except OSError as exc:
        raise BlockError(_BLOCK, "Failed to exectute setxkbmap.") from exc
    try:
        output = completed.stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise BlockError(_BLOCK, "Non-UTF8 input.") from exc
    return parse_setxkbmap(output)


@dataclass
class KeyboardLayoutConfig:
    driver: str = "setxkbmap"
    interval: float = 60.0


class KeyboardLayout(Block):
    """Shows the keyboard layout reported by the configured driver."""

    def __init__(
        self,
        config: Optional[KeyboardLayoutConfig] = None,
        request_update: Optional[UpdateRequest] = None,
        query: Optional[Callable[[], str]] = None,
    ) -> None:
        super().__init__(request_update)
        config = config or KeyboardLayoutConfig()
        if config.driver not in _DRIVERS:
            raise BlockError(_BLOCK, f"Unknown driver '{config.driver}'")
        if query is None:
            if config.driver != "setxkbmap":
                raise BlockError(_BLOCK, f"Driver '{config.driver}' is not available")
            query = setxkbmap_layouts
        self.query = query
        # Only setxkbmap has to be polled; the bus drivers push updates.
        self.update_interval = config.interval if config.driver == "setxkbmap" else None
        self.output = Widget()

    def update(self) -> Optional[float]:
        self.output.text = self.query()
        return self.update_interval

    def view(self) -> list[Widget]:
        return [self.output]