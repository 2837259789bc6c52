"""Block showing disk usage of a file system."""

from __future__ import annotations

import enum
import math
import os
from dataclasses import dataclass, field
from typing import Any, Optional

from .base import Block, BlockError, State, UpdateRequest, Widget

_BLOCK = "disk_space"


class Unit(enum.Enum):
    MB = "MB"
    GB = "GB"
    TB = "TB"
    TIB = "TiB"
    GIB = "GiB"
    MIB = "MiB"
    PERCENT = "Percent"

    def convert(self, value: float) -> float:
        """Express ``value`` bytes in this unit (percentages pass through)."""
        return float(value) / _DIVISORS[self]


_DIVISORS = {
    Unit.MB: 1000.0**2,
    Unit.GB: 1000.0**3,
    Unit.TB: 1000.0**4,
    Unit.MIB: 1024.0**2,
    Unit.GIB: 1024.0**3,
    Unit.TIB: 1024.0**4,
    Unit.PERCENT: 1.0,
}


class InfoType(enum.Enum):
    AVAILABLE = "available"
    FREE = "free"
    TOTAL = "total"
    USED = "used"


def compute_state(unit: Unit, value: float, warning: float, alert: float) -> State:
    """State for a byte count (or a percentage when ``unit`` is PERCENT).

    Byte counts are compared in GB against the thresholds.
    """
    if unit is Unit.PERCENT:
        amount = float(value)
        if amount > alert:
            return State.CRITICAL
        if amount > warning:
            return State.WARNING
        return State.IDLE
    amount = Unit.GB.convert(value)
    if 0.0 <= amount < alert:
        return State.CRITICAL
    if alert <= amount < warning:
        return State.WARNING
    return State.IDLE


def _format_float(value: float) -> str:
    return "NaN" if math.isnan(value) else f"{value:.2f}"


def describe_usage(
    stats: Any,
    info_type: InfoType,
    unit: Unit,
    alias: str,
    show_percentage: bool,
) -> tuple[str, float]:
    """Text for a statvfs result and the value the state is computed from."""
    total = stats.f_blocks * stats.f_frsize
    used = (stats.f_blocks - stats.f_bfree) * stats.f_frsize

    if info_type is InfoType.AVAILABLE:
        result = stats.f_bavail * stats.f_bsize
    elif info_type is InfoType.FREE:
        result = stats.f_bfree * stats.f_bsize
    else:
        result = used

    if info_type is InfoType.TOTAL:
        converted = f"{unit.convert(result):.2f}/{unit.convert(total):.2f}"
    else:
        converted = f"{unit.convert(result):.2f}"

    percentage = result / total * 100.0 if total else math.nan

    if unit is Unit.PERCENT:
        text = f"{alias} {_format_float(percentage)}%"
        value: float = 0 if math.isnan(percentage) else int(percentage)
    elif show_percentage:
        text = f"{alias} {converted} ({_format_float(percentage)}%) {unit.value}"
        value = result
    else:
        text = f"{alias} {converted} {unit.value}"
        value = result
    return text, value


@dataclass
class DiskSpaceConfig:
    path: str = "/"
    alias: str = "/"
    info_type: InfoType = field(default=InfoType.AVAILABLE)
    unit: Unit = field(default=Unit.GB)
    interval: float = 20.0
    warning: float = 20.0
    alert: float = 10.0
    show_percentage: bool = False


class DiskSpace(Block):
    """Shows available, free, used or total space of a file system."""

    def __init__(
        self,
        config: Optional[DiskSpaceConfig] = None,
        request_update: Optional[UpdateRequest] = None,
    ) -> None:
        super().__init__(request_update)
        self.config = config or DiskSpaceConfig()
        self.update_interval = self.config.interval
        self.disk_space = Widget(text="DiskSpace")

    def update(self) -> Optional[float]:
        cfg = self.config
        try:
            stats = os.statvfs(cfg.path)
        except OSError as exc:
            raise BlockError(_BLOCK, "failed to retrieve statvfs") from exc
        text, value = describe_usage(stats, cfg.info_type, cfg.unit, cfg.alias, cfg.show_percentage)
        self.disk_space.text = text
        self.disk_space.state = compute_state(cfg.unit, value, cfg.warning, cfg.alert)
        return self.update_interval

    def view(self) -> list[Widget]:
        return [self.disk_space]