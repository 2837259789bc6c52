import os
import threading

import pytest

from statusblocks.backlight import (
    BacklightConfig,
    Backlight,
    BacklitDevice,
    icon_for_brightness,
    read_brightness,
)
from statusblocks.base import BlockError, ClickEvent, MouseButton


def make_device(root, name="panel", value=500, maximum=1000):
    path = root / name
    path.mkdir()
    (path / "brightness").write_text(f"{value}\n")
    (path / "max_brightness").write_text(f"{maximum}\n")
    return path


def test_read_brightness_parses(tmp_path):
    path = tmp_path / "b"
    path.write_text("123\n")
    assert read_brightness(path) == 123


def test_read_brightness_invalid(tmp_path):
    path = tmp_path / "b"
    path.write_text("abc\n")
    with pytest.raises(BlockError):
        read_brightness(path)


@pytest.mark.parametrize(
    "value,icon",
    [
        (0, "backlight_empty"),
        (19, "backlight_empty"),
        (20, "backlight_partial1"),
        (40, "backlight_partial2"),
        (60, "backlight_partial3"),
        (80, "backlight_full"),
        (100, "backlight_full"),
    ],
)
def test_icon_for_brightness(value, icon):
    assert icon_for_brightness(value) == icon


def test_brightness_percent(tmp_path):
    make_device(tmp_path, value=500, maximum=1000)
    device = BacklitDevice.from_device("panel", tmp_path)
    assert device.brightness() == 50


def test_brightness_capped(tmp_path):
    make_device(tmp_path, value=2000, maximum=1000)
    device = BacklitDevice.from_device("panel", tmp_path)
    assert device.brightness() == 100


def test_set_brightness_round_trip(tmp_path):
    path = make_device(tmp_path, value=500, maximum=1000)
    device = BacklitDevice.from_device("panel", tmp_path)
    device.set_brightness(30)
    assert device.brightness() == 30
    device.set_brightness(150)
    assert (path / "brightness").read_text() == "1000"


def test_default_picks_first(tmp_path):
    make_device(tmp_path, "b_dev")
    make_device(tmp_path, "a_dev")
    device = BacklitDevice.default(tmp_path)
    assert device.device_path.name == "a_dev"
    assert device.max_brightness == 1000


def test_default_without_devices(tmp_path):
    with pytest.raises(BlockError):
        BacklitDevice.default(tmp_path)


def test_from_device_missing(tmp_path):
    with pytest.raises(BlockError) as info:
        BacklitDevice.from_device("nothing", tmp_path)
    assert "does not exist" in info.value.message


def test_update_sets_text_and_icon(tmp_path):
    make_device(tmp_path, value=500, maximum=1000)
    block = Backlight(BacklightConfig(device="panel"), None, tmp_path)
    assert block.update() is None
    assert block.view()[0].text == "50%"
    assert block.view()[0].icon == "backlight_partial2"


def test_wheel_adjusts_brightness(tmp_path):
    make_device(tmp_path, value=500, maximum=1000)
    block = Backlight(BacklightConfig(device="panel", step_width=5), None, tmp_path)
    block.click(ClickEvent(block.id, MouseButton.WHEEL_UP))
    assert block.device.brightness() == 55
    block.click(ClickEvent(block.id, MouseButton.WHEEL_DOWN))
    block.click(ClickEvent(block.id, MouseButton.WHEEL_DOWN))
    assert block.device.brightness() == 45


def test_click_other_name_ignored(tmp_path):
    make_device(tmp_path, value=500, maximum=1000)
    block = Backlight(BacklightConfig(device="panel"), None, tmp_path)
    block.click(ClickEvent("someone-else", MouseButton.WHEEL_UP))
    assert block.device.brightness() == 50