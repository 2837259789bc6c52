import pytest

from statusblocks.base import BlockError, State
from statusblocks.cpu import Cpu, CpuConfig, average_frequency, barchart, parse_stat_line


def test_average_frequency():
    text = "processor : 0\ncpu MHz : 2000.000\nprocessor : 1\ncpu MHz : 3000.000\n"
    assert average_frequency(text) == pytest.approx(2.5)


def test_average_frequency_without_entries():
    assert average_frequency("processor : 0\n") == 0.0


def test_average_frequency_bad_value():
    with pytest.raises(BlockError):
        average_frequency("cpu MHz : fast\n")


def test_parse_stat_line_total_and_core():
    assert parse_stat_line("cpu  1 2 3 4 5 6 7 8 9 10", 2) == [1, 2, 3, 4, 5, 6, 7, 8, 9, 10]
    assert parse_stat_line("cpu0 4 5 6", 1) == [4, 5, 6]


def test_barchart_bounds():
    assert barchart([0.0, 1.0]) == "▁█"
    assert barchart([-0.5, 2.0]) == "▁█"
    assert barchart([]) == ""


def write_stat(path, *lines):
    path.write_text("\n".join(lines) + "\nintr 1 2 3\n")


def test_update_utilization_and_state(tmp_path):
    stat = tmp_path / "stat"
    write_stat(stat, "cpu  100 0 0 100 0 0 0 0 0 0")
    block = Cpu(CpuConfig(interval=2.0), None, stat, tmp_path / "cpuinfo")
    assert block.update() == 2.0
    assert block.view()[0].text == "50%"
    assert block.view()[0].state is State.INFO


def test_update_unchanged_counters_is_idle(tmp_path):
    stat = tmp_path / "stat"
    write_stat(stat, "cpu  100 0 0 100 0 0 0 0 0 0")
    block = Cpu(CpuConfig(), None, stat, tmp_path / "cpuinfo")
    block.update()
    block.update()
    assert block.view()[0].text == "00%"
    assert block.view()[0].state is State.IDLE


def test_update_full_load_is_critical(tmp_path):
    stat = tmp_path / "stat"
    write_stat(stat, "cpu  100 0 0 100 0 0 0 0 0 0")
    block = Cpu(CpuConfig(), None, stat, tmp_path / "cpuinfo")
    block.update()
    write_stat(stat, "cpu  200 0 0 100 0 0 0 0 0 0")
    block.update()
    assert block.view()[0].text == "100%"
    assert block.view()[0].state is State.CRITICAL


def test_barchart_per_core(tmp_path):
    stat = tmp_path / "stat"
    write_stat(
        stat,
        "cpu  10 0 0 10 0 0 0 0 0 0",
        "cpu0 10 0 0 0 0 0 0 0 0 0",
        "cpu1 0 0 0 10 0 0 0 0 0 0",
    )
    block = Cpu(CpuConfig(format="{barchart}"), None, stat, tmp_path / "cpuinfo")
    block.update()
    assert block.view()[0].text == "█▁"


def test_frequency_format(tmp_path):
    stat = tmp_path / "stat"
    write_stat(stat, "cpu  1 0 0 1 0 0 0 0 0 0")
    cpuinfo = tmp_path / "cpuinfo"
    cpuinfo.write_text("cpu MHz : 1500.000\n")
    block = Cpu(CpuConfig(frequency=True), None, stat, cpuinfo)
    block.update()
    assert block.view()[0].text.endswith(" 1.5GHz")
    assert block.view()[0].icon == "cpu"


def test_missing_stat_file(tmp_path):
    block = Cpu(CpuConfig(), None, tmp_path / "absent", tmp_path / "cpuinfo")
    with pytest.raises(BlockError):
        block.update()


def test_short_stat_line(tmp_path):
    stat = tmp_path / "stat"
    write_stat(stat, "cpu  1 2 3")
    block = Cpu(CpuConfig(), None, stat, tmp_path / "cpuinfo")
    with pytest.raises(BlockError):
        block.update()