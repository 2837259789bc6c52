"""CPU utilisation block reading /proc/stat and /proc/cpuinfo."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from .base import Block, BlockError, State, UpdateRequest, Widget, render_format

_BLOCK = "cpu"
_MAX_CPUS = 32
_BOXCHARS = "▁▂▃▄▅▆▇█"


def average_frequency(cpuinfo_text: str) -> float:
    """Average ``cpu MHz`` value of all cores, in GHz (0.0 if none are listed)."""
    frequencies = []
    for line in cpuinfo_text.splitlines():
        if line.startswith("cpu MHz"):
            last = line.split(" ")[-1]
            try:
                frequencies.append(float(last))
            except ValueError as exc:
                raise BlockError(_BLOCK, "failed to parse cpu frequency") from exc
    if not frequencies:
        return 0.0
    return sum(frequencies) / len(frequencies) / 1000.0


def parse_stat_line(line: str, skip: int) -> list[int]:
    """Numbers of a ``cpu`` line of /proc/stat, after skipping ``skip`` fields."""
    values = []
    for field in line.split(" ")[skip:]:
        try:
            values.append(int(field))
        except ValueError:
            continue
    return values


def barchart(utilizations: Iterable[float]) -> str:
    """One box character per utilisation ratio."""
    return "".join(
        _BOXCHARS[min(max(int(7.5 * value), 0), len(_BOXCHARS) - 1)]
        for value in utilizations
    )


@dataclass
class CpuConfig:
    interval: float = 1.0
    info: int = 30
    warning: int = 60
    critical: int = 90
    frequency: bool = False
    format: str = "{utilization}%"


class Cpu(Block):
    """Shows CPU utilisation, optionally with frequency and a per-core barchart."""

    def __init__(
        self,
        config: Optional[CpuConfig] = None,
        request_update: Optional[UpdateRequest] = None,
        stat_path: Path | str = "/proc/stat",
        cpuinfo_path: Path | str = "/proc/cpuinfo",
    ) -> None:
        super().__init__(request_update)
        config = config or CpuConfig()
        self.format = "{utilization}% {frequency}GHz" if config.frequency else config.format
        self.update_interval = config.interval
        self.minimum_info = config.info
        self.minimum_warning = config.warning
        self.minimum_critical = config.critical
        self.has_frequency = "{frequency}" in self.format
        self.has_barchart = "{barchart}" in self.format
        self.stat_path = Path(stat_path)
        self.cpuinfo_path = Path(cpuinfo_path)
        self.prev_idles = [0] * _MAX_CPUS
        self.prev_non_idles = [0] * _MAX_CPUS
        self.output = Widget(icon="cpu")

    def _state_for(self, utilization: int) -> State:
        if utilization > self.minimum_critical:
            return State.CRITICAL
        if utilization > self.minimum_warning:
            return State.WARNING
        if utilization > self.minimum_info:
            return State.INFO
        return State.IDLE

    def update(self) -> Optional[float]:
        try:
            stat_text = self.stat_path.read_text()
        except OSError as exc:
            raise BlockError(_BLOCK, "Your system doesn't support /proc/stat") from exc

        frequency = 0.0
        if self.has_frequency:
            try:
                frequency = average_frequency(self.cpuinfo_path.read_text())
            except OSError as exc:
                raise BlockError(_BLOCK, "failed to read /proc/cpuinfo") from exc

        max_cpus = _MAX_CPUS if self.has_barchart else 1
        utilizations = [0.0] * max_cpus
        cpu_count = 0
        for line in stat_text.splitlines():
            if not line.startswith("cpu"):
                continue
            data = parse_stat_line(line, 2 if cpu_count == 0 else 1)
            if len(data) < 8:
                raise BlockError(_BLOCK, "malformed /proc/stat line")
            user, nice, system, idle_time, iowait, irq, softirq, steal = data[:8]
            idle = idle_time + iowait
            non_idle = user + nice + system + irq + softirq + steal

            prev_idle = self.prev_idles[cpu_count]
            prev_total = prev_idle + self.prev_non_idles[cpu_count]
            total = idle + non_idle
            # Counters may reset, e.g. after hibernation.
            if prev_total < total and prev_idle <= idle:
                total_delta, idle_delta = total - prev_total, idle - prev_idle
            else:
                total_delta, idle_delta = 1, 1
            utilizations[cpu_count] = (total_delta - idle_delta) / total_delta

            self.prev_idles[cpu_count] = idle
            self.prev_non_idles[cpu_count] = non_idle
            cpu_count += 1
            if cpu_count >= max_cpus:
                break

        average = int(100.0 * utilizations[0])
        self.output.state = self._state_for(average)
        chart = barchart(utilizations[1:cpu_count]) if self.has_barchart else ""
        values = {
            "{frequency}": f"{frequency:.1f}",
            "{barchart}": chart,
            "{utilization}": f"{average:02d}",
        }
        self.output.text = render_format(self.format, values)
        return self.update_interval

    def view(self) -> list[Widget]:
        return [self.output]