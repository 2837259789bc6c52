"""Display and adjust the brightness of a backlit device through sysfs."""

from __future__ import annotations

import math
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .base import Block, BlockError, ClickEvent, MouseButton, UpdateRequest, Widget, read_text

DEFAULT_ROOT = Path("/sys/class/backlight")
_BLOCK = "backlight"


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def read_brightness(path: Path | str) -> int:
    """Read an integer brightness value from a sysfs file."""
    content = read_text(path, _BLOCK)
    try:
        return int(content)
    except ValueError as exc:
        raise BlockError(_BLOCK, "Failed to read value from brightness file") from exc


def icon_for_brightness(brightness: int) -> str:
    """Pick the icon name for a brightness percentage."""
    if brightness <= 19:
        return "backlight_empty"
    if brightness <= 39:
        return "backlight_partial1"
    if brightness <= 59:
        return "backlight_partial2"
    if brightness <= 79:
        return "backlight_partial3"
    return "backlight_full"


class BacklitDevice:
    """A backlit device whose brightness can be queried and set."""

    def __init__(self, device_path: Path | str, max_brightness: int) -> None:
        self.device_path = Path(device_path)
        self.max_brightness = max_brightness

    @classmethod
    def default(cls, root: Path | str = DEFAULT_ROOT) -> "BacklitDevice":
        """Use the first device found under ``root``."""
        try:
            entries = sorted(Path(root).iterdir())
        except OSError as exc:
            raise BlockError(_BLOCK, "Failed to read backlight device directory") from exc
        if not entries:
            raise BlockError(_BLOCK, "No backlit devices found")
        device_path = entries[0]
        return cls(device_path, read_brightness(device_path / "max_brightness"))

    @classmethod
    def from_device(cls, device: str, root: Path | str = DEFAULT_ROOT) -> "BacklitDevice":
        """Use the named device under ``root``."""
        device_path = Path(root) / device
        if not device_path.exists():
            raise BlockError(_BLOCK, f"Backlight device '{device_path}' does not exist")
        return cls(device_path, read_brightness(device_path / "max_brightness"))

    def brightness(self) -> int:
        """Current brightness as a percentage, capped at 100."""
        raw = read_brightness(self.brightness_file())
        if self.max_brightness == 0:
            return 100 if raw > 0 else 0
        return min(_round_half_up(raw / self.max_brightness * 100.0), 100)

    def set_brightness(self, value: int) -> None:
        """Set the brightness as a percentage; silently gives up if not writable."""
        try:
            fd = os.open(self.brightness_file(), os.O_WRONLY | os.O_TRUNC)
        except OSError:
            return
        safe_value = min(max(value, 0), 100)
        raw = _round_half_up(safe_value / 100.0 * self.max_brightness)
        try:
            with os.fdopen(fd, "w") as handle:
                handle.write(str(raw))
        except OSError as exc:
            raise BlockError(_BLOCK, "Failed to write into brightness file") from exc

    def brightness_file(self) -> Path:
        """Path of the brightness file."""
        return self.device_path / "brightness"


@dataclass
class BacklightConfig:
    device: Optional[str] = None
    step_width: int = 5


class Backlight(Block):
    """Shows the brightness of a backlit device; the mouse wheel adjusts it."""

    POLL_INTERVAL = 0.25

    def __init__(
        self,
        config: Optional[BacklightConfig] = None,
        request_update: Optional[UpdateRequest] = None,
        root: Path | str = DEFAULT_ROOT,
    ) -> None:
        super().__init__(request_update)
        config = config or BacklightConfig()
        if config.device is not None:
            self.device = BacklitDevice.from_device(config.device, root)
        else:
            self.device = BacklitDevice.default(root)
        self.step_width = config.step_width
        self.output = Widget(name=self.id)

    def update(self) -> Optional[float]:
        brightness = self.device.brightness()
        self.output.text = f"{brightness}%"
        self.output.icon = icon_for_brightness(brightness)
        return None

    def view(self) -> list[Widget]:
        return [self.output]

    def click(self, event: ClickEvent) -> None:
        if event.name != self.id:
            return
        brightness = self.device.brightness()
        if event.button is MouseButton.WHEEL_UP:
            if brightness < 100:
                self.device.set_brightness(brightness + self.step_width)
        elif event.button is MouseButton.WHEEL_DOWN:
            if brightness > self.step_width:
                self.device.set_brightness(brightness - self.step_width)

    def watch(self) -> threading.Event:
        """Start a background watcher on the brightness file.

        An update is requested whenever the file changes. Set the returned
        event to stop watching.
        """
        stop = threading.Event()
        path = self.device.brightness_file()

        def stamp() -> Optional[int]:
            try:
                return path.stat().st_mtime_ns
            except OSError:
                return None

        def loop() -> None:
            last = stamp()
            while not stop.wait(self.POLL_INTERVAL):
                current = stamp()
                if current != last:
                    last = current
                    self.request()

        threading.Thread(target=loop, daemon=True).start()
        return stop