"""Memory and swap usage block reading /proc/meminfo."""

from __future__ import annotations

import enum
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

from .base import (
    Block,
    BlockError,
    ClickEvent,
    MouseButton,
    State,
    UpdateRequest,
    Widget,
    render_format,
)

_BLOCK = "memory"
_WIDGET_NAME = "memory"

_MEMINFO_KEYS = {
    "MemTotal:": "mem_total",
    "MemFree:": "mem_free",
    "Buffers:": "buffers",
    "Cached:": "cached",
    "SReclaimable:": "s_reclaimable",
    "Shmem:": "shmem",
    "SwapTotal:": "swap_total",
    "SwapFree:": "swap_free",
}


class Memtype(enum.Enum):
    """Which view the block shows."""

    MEMORY = "memory"
    SWAP = "swap"


@dataclass
class Memstate:
    """The /proc/meminfo figures the block needs, in KiB."""

    mem_total: int = 0
    mem_free: int = 0
    buffers: int = 0
    cached: int = 0
    s_reclaimable: int = 0
    shmem: int = 0
    swap_total: int = 0
    swap_free: int = 0


def parse_meminfo(text: str) -> Memstate:
    """Extract the relevant fields of /proc/meminfo; missing ones stay 0."""
    state = Memstate()
    seen: set[str] = set()
    for line in text.splitlines():
        if len(seen) == len(_MEMINFO_KEYS):
            break
        parts = line.split()
        if not parts or parts[0] not in _MEMINFO_KEYS:
            continue
        field_name = _MEMINFO_KEYS[parts[0]]
        try:
            value = int(parts[1])
        except (IndexError, ValueError) as exc:
            raise BlockError(_BLOCK, f"failed to parse {field_name}") from exc
        if value < 0:
            raise BlockError(_BLOCK, f"failed to parse {field_name}")
        setattr(state, field_name, value)
        seen.add(field_name)
    return state


def percent(value: int, reference: int) -> float:
    """``value`` as a percentage of ``reference``; 100 when the reference is empty."""
    if reference < 1:
        return 100.0
    return value / reference * 100.0


def _gib(kib: int) -> str:
    return f"{kib / 1024.0**2:.1f}"


def _mib(kib: int) -> str:
    return str(kib // 1024)


def _sub(minuend: int, subtrahend: int, what: str) -> int:
    result = minuend - subtrahend
    if result < 0:
        raise BlockError(_BLOCK, f"inconsistent memory figures for {what}")
    return result


def _quantities(state: Memstate) -> dict[str, int]:
    mem_total_used = _sub(state.mem_total, state.mem_free, "used memory")
    cached = _sub(state.cached + state.s_reclaimable, state.shmem, "cached memory")
    mem_used = _sub(mem_total_used, state.buffers + cached, "used memory")
    return {
        "mem_total": state.mem_total,
        "mem_free": state.mem_free,
        "mem_total_used": mem_total_used,
        "mem_used": mem_used,
        "mem_avail": _sub(state.mem_total, mem_used, "available memory"),
        "buffers": state.buffers,
        "cached": cached,
        "swap_total": state.swap_total,
        "swap_free": state.swap_free,
        "swap_used": _sub(state.swap_total, state.swap_free, "used swap"),
    }


def memory_values(state: Memstate) -> dict[str, str]:
    """All format placeholders with their values for ``state``."""
    q = _quantities(state)
    values: dict[str, str] = {}

    def add(prefix: str, amount: int, reference: Optional[int], with_int: bool = True) -> None:
        values[f"{{{prefix}g}}"] = _gib(amount)
        values[f"{{{prefix}m}}"] = _mib(amount)
        if reference is not None:
            share = percent(amount, reference)
            values[f"{{{prefix}p}}"] = f"{share:.2f}"
            if with_int:
                values[f"{{{prefix}pi}}"] = f"{int(share):02d}"

    add("MT", q["mem_total"], None)
    add("MF", q["mem_free"], q["mem_total"])
    add("MU", q["mem_total_used"], q["mem_total"])
    add("Mu", q["mem_used"], q["mem_total"])
    add("MA", q["mem_avail"], q["mem_total"])
    add("ST", q["swap_total"], None)
    add("SF", q["swap_free"], q["swap_total"])
    add("SU", q["swap_used"], q["swap_total"])
    add("B", q["buffers"], q["mem_total"])
    add("C", q["cached"], q["mem_total"])
    return values


@dataclass
class MemoryConfig:
    format_mem: str = "{MFm}MB/{MTm}MB({MUp}%)"
    format_swap: str = "{SFm}MB/{STm}MB({SUp}%)"
    display_type: Memtype = Memtype.MEMORY
    icons: bool = True
    clickable: bool = True
    interval: float = 5.0
    warning_mem: float = 80.0
    warning_swap: float = 80.0
    critical_mem: float = 95.0
    critical_swap: float = 95.0


def _threshold_state(share: float, warning: float, critical: float) -> State:
    if share > critical:
        return State.CRITICAL
    if share > warning:
        return State.WARNING
    return State.IDLE


class Memory(Block):
    """Shows memory or swap usage; a left click switches between them."""

    def __init__(
        self,
        config: Optional[MemoryConfig] = None,
        request_update: Optional[UpdateRequest] = None,
        meminfo_path: Path | str = "/proc/meminfo",
    ) -> None:
        super().__init__(request_update)
        self.config = config or MemoryConfig()
        self.memtype = self.config.display_type
        self.clickable = self.config.clickable
        self.update_interval = self.config.interval
        self.meminfo_path = Path(meminfo_path)
        icons = self.config.icons
        self.outputs = {
            Memtype.MEMORY: Widget(name=_WIDGET_NAME, icon="memory_mem" if icons else None),
            Memtype.SWAP: Widget(name=_WIDGET_NAME, icon="memory_swap" if icons else None),
        }
        self.values: dict[str, str] = {}

    def switch(self) -> None:
        """Toggle between the memory and the swap view."""
        self.memtype = Memtype.SWAP if self.memtype is Memtype.MEMORY else Memtype.MEMORY

    def render(self, state: Memstate) -> str:
        """Set the widget state for ``state`` and return the text of the current view."""
        self.values.update(memory_values(state))
        q = _quantities(state)
        cfg = self.config
        if self.memtype is Memtype.MEMORY:
            share = percent(q["mem_used"], q["mem_total"])
            self.outputs[Memtype.MEMORY].state = _threshold_state(
                share, cfg.warning_mem, cfg.critical_mem
            )
            return render_format(cfg.format_mem, self.values)
        share = percent(q["swap_used"], q["swap_total"])
        self.outputs[Memtype.SWAP].state = _threshold_state(
            share, cfg.warning_swap, cfg.critical_swap
        )
        return render_format(cfg.format_swap, self.values)

    def update(self) -> Optional[float]:
        try:
            text = self.meminfo_path.read_text()
        except OSError as exc:
            raise BlockError(_BLOCK, "/proc/meminfo does not exist") from exc
        self.outputs[self.memtype].text = self.render(parse_meminfo(text))
        return self.update_interval

    def view(self) -> list[Widget]:
        return [self.outputs[self.memtype]]

    def click(self, event: ClickEvent) -> None:
        if (
            event.name == _WIDGET_NAME
            and self.clickable
            and event.button is MouseButton.LEFT
        ):
            self.switch()
            self.update()
            self.request()