"""Block showing container counts reported by the local Docker daemon."""

from __future__ import annotations

import json
import subprocess
from dataclasses import dataclass
from typing import Callable, Optional

from .base import Block, BlockError, UpdateRequest, Widget, render_format

_BLOCK = "docker"
_QUERY = "curl --fail --unix-socket /var/run/docker.sock http:/api/info"

_FIELDS = {
    "{total}": "Containers",
    "{running}": "ContainersRunning",
    "{stopped}": "ContainersStopped",
    "{paused}": "ContainersPaused",
    "{images}": "Images",
}


def parse_status(payload: str) -> dict[str, str]:
    """Turn the daemon's info JSON into placeholder values."""
    try:
        info = json.loads(payload)
    except ValueError as exc:
        raise BlockError(_BLOCK, "Failed to parse JSON response.") from exc
    if not isinstance(info, dict):
        raise BlockError(_BLOCK, "Failed to parse JSON response.")
    values = {}
    for placeholder, key in _FIELDS.items():
        value = info.get(key)
        if not isinstance(value, int) or isinstance(value, bool):
            raise BlockError(_BLOCK, "Failed to parse JSON response.")
        values[placeholder] = str(value)
    return values


def _query_daemon() -> Optional[str]:
    try:
        completed = subprocess.run(["sh", "-c", _QUERY], capture_output=True)
    except OSError:
        return None
    try:
        return completed.stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise BlockError(_BLOCK, "Failed to decode") from exc


@dataclass
class DockerConfig:
    interval: float = 5.0
    format: str = "{running}%"


class Docker(Block):
    """Shows Docker container and image counts."""

    def __init__(
        self,
        config: Optional[DockerConfig] = None,
        request_update: Optional[UpdateRequest] = None,
        fetch: Optional[Callable[[], Optional[str]]] = None,
    ) -> None:
        super().__init__(request_update)
        config = config or DockerConfig()
        self.format = config.format
        self.update_interval = config.interval
        self.fetch = fetch or _query_daemon
        self.text = Widget(text="N/A", icon="docker")

    def update(self) -> Optional[float]:
        output = self.fetch()
        # An unreachable daemon must not break the bar.
        if not output:
            self.text.text = "N/A"
            return self.update_interval
        self.text.text = render_format(self.format, parse_status(output))
        return self.update_interval

    def view(self) -> list[Widget]:
        return [self.text]