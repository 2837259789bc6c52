import pytest

from statusblocks.base import BlockError, State
from statusblocks.load import Load, LoadConfig, load_state, logical_cores

CPUINFO = "processor\t: 0\nmodel name\t: Some CPU\nsiblings\t: 4\ncpu cores\t: 2\nsiblings\t: 9\n"


def test_logical_cores_reads_first_siblings_line():
    assert logical_cores(CPUINFO) == 4


def test_logical_cores_missing_gives_zero():
    assert logical_cores("processor\t: 0\n") == 0


def test_logical_cores_bad_value_raises():
    with pytest.raises(BlockError):
        logical_cores("siblings\t: many\n")


@pytest.mark.parametrize(
    "ratio, state",
    [
        (0.0, State.IDLE),
        (0.1, State.IDLE),
        (0.3, State.INFO),
        (0.5, State.INFO),
        (0.6, State.WARNING),
        (0.8, State.WARNING),
        (0.95, State.IDLE),
    ],
)
def test_load_state(ratio, state):
    assert load_state(ratio) is state


@pytest.fixture
def proc(tmp_path):
    cpuinfo = tmp_path / "cpuinfo"
    cpuinfo.write_text(CPUINFO)
    loadavg = tmp_path / "loadavg"
    return cpuinfo, loadavg


def test_update_renders_all_averages(proc):
    cpuinfo, loadavg = proc
    loadavg.write_text("1.60 0.50 0.25 1/100 1234\n")
    block = Load(LoadConfig(format="{1m} {5m} {15m}", interval=3.0), None, cpuinfo, loadavg)
    assert block.update() == 3.0
    widget = block.view()[0]
    assert widget.text == "1.60 0.50 0.25"
    assert widget.state is load_state(1.60 / 4)
    assert widget.icon == "cogs"


def test_default_format_shows_one_minute(proc):
    cpuinfo, loadavg = proc
    loadavg.write_text("0.10 0.20 0.30 1/100 1234\n")
    block = Load(None, None, cpuinfo, loadavg)
    block.update()
    assert block.view()[0].text == "0.10"


def test_initial_state_is_info(proc):
    cpuinfo, loadavg = proc
    assert Load(None, None, cpuinfo, loadavg).view()[0].state is State.INFO


def test_missing_cpuinfo_raises(tmp_path):
    with pytest.raises(BlockError):
        Load(None, None, tmp_path / "nope", tmp_path / "loadavg")


def test_missing_loadavg_raises(proc):
    cpuinfo, loadavg = proc
    block = Load(None, None, cpuinfo, loadavg)
    with pytest.raises(BlockError):
        block.update()


def test_unparsable_load_raises(proc):
    cpuinfo, loadavg = proc
    loadavg.write_text("x y z 1/100 1234\n")
    block = Load(None, None, cpuinfo, loadavg)
    with pytest.raises(BlockError):
        block.update()