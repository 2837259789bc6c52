import pytest

from statusblocks.base import BlockError
from statusblocks.keyboard_layout import (
    KeyboardLayout,
    KeyboardLayoutConfig,
    parse_setxkbmap,
)

SAMPLE = "rules:      evdev\nmodel:      pc105\nlayout:     us,de\noptions:    grp:alt_shift_toggle\n"


def test_parse_setxkbmap_takes_last_word():
    assert parse_setxkbmap(SAMPLE) == "us,de"


def test_parse_setxkbmap_without_layout_line():
    with pytest.raises(BlockError):
        parse_setxkbmap("rules:      evdev\n")


def test_update_uses_query_and_polls():
    block = KeyboardLayout(KeyboardLayoutConfig(interval=12.0), query=lambda: "fr")
    assert block.update() == 12.0
    (widget,) = block.view()
    assert widget.text == "fr"


def test_bus_driver_does_not_poll():
    block = KeyboardLayout(KeyboardLayoutConfig(driver="localebus"), query=lambda: "de")
    assert block.update() is None
    assert block.view()[0].text == "de"


def test_bus_driver_without_query_is_an_error():
    with pytest.raises(BlockError):
        KeyboardLayout(KeyboardLayoutConfig(driver="kbddbus"))


def test_unknown_driver_is_an_error():
    with pytest.raises(BlockError):
        KeyboardLayout(KeyboardLayoutConfig(driver="nonsense"), query=lambda: "us")


def test_query_errors_propagate():
    def failing() -> str:
        raise BlockError("keyboard_layout", "boom")

    block = KeyboardLayout(query=failing)
    with pytest.raises(BlockError):
        block.update()