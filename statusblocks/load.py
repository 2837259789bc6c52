"""Block showing the system load average."""

from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .base import Block, BlockError, State, UpdateRequest, Widget, render_format

_BLOCK = "load"


def logical_cores(cpuinfo_text: str) -> int:
    """Number of logical cores from the first ``siblings`` line (0 if absent)."""
    for line in cpuinfo_text.splitlines():
        if line.startswith("siblings"):
            parts = line.split(" ")
            try:
                return int(parts[1])
            except (IndexError, ValueError) as exc:
                raise BlockError(_BLOCK, "Invalid Cpu info format!") from exc
    return 0


def load_state(ratio: float) -> State:
    """State for the one-minute load divided by the number of cores."""
    if 0.0 <= ratio < 0.3:
        return State.IDLE
    if 0.3 <= ratio < 0.6:
        return State.INFO
    if 0.6 <= ratio < 0.9:
        return State.WARNING
    return State.IDLE


@dataclass
class LoadConfig:
    format: str = "{1m}"
    interval: float = 5.0


class Load(Block):
    """Shows the 1, 5 and 15 minute load averages."""

    def __init__(
        self,
        config: Optional[LoadConfig] = None,
        request_update: Optional[UpdateRequest] = None,
        cpuinfo_path: Path | str = "/proc/cpuinfo",
        loadavg_path: Path | str = "/proc/loadavg",
    ) -> None:
        super().__init__(request_update)
        config = config or LoadConfig()
        self.format = config.format
        self.update_interval = config.interval
        self.loadavg_path = Path(loadavg_path)
        self.text = Widget(icon="cogs", state=State.INFO)
        try:
            cpuinfo = Path(cpuinfo_path).read_text()
        except OSError as exc:
            raise BlockError(_BLOCK, "Your system doesn't support /proc/cpuinfo") from exc
        self.logical_cores = logical_cores(cpuinfo)

    def update(self) -> Optional[float]:
        try:
            loadavg = self.loadavg_path.read_text()
        except OSError as exc:
            raise BlockError(
                _BLOCK,
                "Your system does not support reading the load average from /proc/loadavg",
            ) from exc

        fields = loadavg.split(" ")
        if len(fields) < 3:
            raise BlockError(_BLOCK, "Failed to read the load average of your system!")
        values = {"{1m}": fields[0], "{5m}": fields[1], "{15m}": fields[2]}

        try:
            one_minute = float(values["{1m}"])
        except ValueError as exc:
            raise BlockError(_BLOCK, "failed to parse float percentage") from exc
        if self.logical_cores:
            ratio = one_minute / self.logical_cores
        else:
            ratio = math.inf if one_minute > 0 else math.nan

        self.text.state = load_state(ratio)
        self.text.text = render_format(self.format, values)
        return self.update_interval

    def view(self) -> list[Widget]:
        return [self.text]