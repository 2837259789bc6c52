"""Block that shows the output of a shell command, optionally cycling commands on click."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from typing import Optional

from .base import Block, ClickEvent, UpdateRequest, Widget


def _shell() -> str:
    return os.environ.get("SHELL", "sh")


def run_shell(command: str) -> str:
    """Run ``command`` with the user's shell and return its trimmed stdout.

    If the shell cannot be started, the error description is returned instead.
    """
    try:
        completed = subprocess.run([_shell(), "-c", command], capture_output=True)
    except OSError as exc:
        return exc.strerror or str(exc)
    return completed.stdout.decode("utf-8", errors="replace").strip()


@dataclass
class CustomConfig:
    interval: float = 10.0
    command: Optional[str] = None
    on_click: Optional[str] = None
    cycle: Optional[list[str]] = None


class Custom(Block):
    """Shows the output of a command; clicks run a command or advance the cycle."""

    def __init__(
        self,
        config: Optional[CustomConfig] = None,
        request_update: Optional[UpdateRequest] = None,
    ) -> None:
        super().__init__(request_update)
        config = config or CustomConfig()
        self.update_interval = config.interval
        self.output = Widget(name=self.id)
        self.on_click = config.on_click
        self._cycle: Optional[list[str]] = list(config.cycle) if config.cycle is not None else None
        self._position = 0
        # A cycle takes precedence over a single command.
        self.command = config.command if self._cycle is None else None

    def current_command(self) -> str:
        """The command that the next update will run."""
        if self._cycle is not None:
            return self._cycle[self._position] if self._cycle else ""
        return self.command or ""

    def update(self) -> Optional[float]:
        self.output.text = run_shell(self.current_command())
        return self.update_interval

    def view(self) -> list[Widget]:
        return [self.output]

    def click(self, event: ClickEvent) -> None:
        if event.name is None or event.name != self.id:
            return

        needs_update = False
        if self.on_click is not None:
            try:
                subprocess.run([_shell(), "-c", self.on_click], capture_output=True)
            except OSError:
                pass
            needs_update = True

        if self._cycle is not None:
            if self._cycle:
                self._position = (self._position + 1) % len(self._cycle)
            needs_update = True

        if needs_update:
            self.request()