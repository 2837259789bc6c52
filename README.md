# statusblocks

Building blocks for a Linux status bar. Each block reads part of the
system, such as `/proc`, `/sys`, a file system or the output of a helper
program. It turns what it finds into widgets that a bar can draw. A widget
(`statusblocks.base.Widget`) has `text`, an optional `icon` name, a `state`
and an optional `name`. The state is a `statusblocks.base.State`: `IDLE`,
`INFO`, `GOOD`, `WARNING` or `CRITICAL`.

## Blocks

| Module                         | Block            | Config class           | Shows                                                  |
|--------------------------------|------------------|------------------------|--------------------------------------------------------|
| `statusblocks.backlight`       | `Backlight`      | `BacklightConfig`      | Screen brightness; the mouse wheel changes it          |
| `statusblocks.cpu`             | `Cpu`            | `CpuConfig`            | CPU use, an optional per-core bar chart and frequency  |
| `statusblocks.custom`          | `Custom`         | `CustomConfig`         | The output of a shell command, or a cycle of commands  |
| `statusblocks.disk_space`      | `DiskSpace`      | `DiskSpaceConfig`      | Available, free, used or total space on a file system  |
| `statusblocks.docker`          | `Docker`         | `DockerConfig`         | Container and image counts from the Docker daemon      |
| `statusblocks.keyboard_layout` | `KeyboardLayout` | `KeyboardLayoutConfig` | The current keyboard layout                            |
| `statusblocks.load`            | `Load`           | `LoadConfig`           | The 1, 5 and 15 minute load averages                   |
| `statusblocks.maildir`         | `Maildir`        | `MaildirConfig`        | Message counts in one or more maildirs                 |
| `statusblocks.memory`          | `Memory`         | `MemoryConfig`         | Memory or swap use; a left click switches between them |

The configuration classes are dataclasses. Every field has a default, so
calling the class with no arguments gives a working configuration, and a
block built with `config=None` uses those defaults. Intervals are in
seconds.

## Using a block

A block takes a configuration and an optional callback. The callback gets
the block's `id` when the block wants to be redrawn before its next
scheduled update (for instance after a click, or when `Backlight.watch()`
sees the brightness file change).

```python
from statusblocks.cpu import Cpu, CpuConfig

def request_update(block_id):
    print("redraw requested by", block_id)

cpu = Cpu(CpuConfig(format="{utilization}% {barchart}"), request_update)

delay = cpu.update()        # seconds until the next update, or None
for widget in cpu.view():   # the widgets to draw right now
    print(widget.icon, widget.text, widget.state)
```

Pass mouse clicks to `click()` as a `statusblocks.base.ClickEvent(name,
button)`, where `button` is a `statusblocks.base.MouseButton`. Blocks
ignore clicks whose `name` is not one of their own widgets.

Several blocks take extra arguments to read from other places, which also
makes them easy to test: `Cpu(stat_path=..., cpuinfo_path=...)`,
`Load(cpuinfo_path=..., loadavg_path=...)`, `Memory(meminfo_path=...)`,
`Backlight(root=...)`, `Docker(fetch=...)` and `KeyboardLayout(query=...)`.

## Notes on particular blocks

- **Backlight** reads `brightness` and `max_brightness` under
  `/sys/class/backlight/<device>`; with no `device` it uses the first
  device found. Wheel up and wheel down change the brightness by
  `step_width` percent. If the brightness file cannot be opened for
  writing, the change is silently skipped. `watch()` starts a background
  thread that polls the file and returns a `threading.Event`; set it to
  stop watching.
- **Cpu** placeholders: `{utilization}`, `{frequency}` (GHz) and
  `{barchart}` (one character per core, up to 31 cores). `frequency=True`
  replaces the format with `{utilization}% {frequency}GHz`.
- **Custom** runs commands with `$SHELL -c` (or `sh`). Clicking runs
  `on_click` and, when `cycle` is set, moves on to the next command.
- **DiskSpace** units are in `Unit`: `MB`, `GB`, `TB`, `MiB`, `GiB`,
  `TiB` and `PERCENT`. `warning` and `alert` are GB thresholds below which
  the state becomes warning or critical; with `PERCENT` they are
  percentages above which it does.
- **Docker** queries the daemon with `curl` on `/var/run/docker.sock`.
  Placeholders: `{total}`, `{running}`, `{stopped}`, `{paused}`,
  `{images}`. It shows `N/A` when the daemon does not answer.
- **KeyboardLayout** runs `setxkbmap -query` for the `setxkbmap` driver.
  The `localebus` and `kbddbus` drivers are accepted only with a `query`
  callable supplied by the caller; such blocks are not polled.
- **Load** placeholders: `{1m}`, `{5m}`, `{15m}`.
- **Maildir** counts entries in the `new` directory, the `cur` directory,
  or both (`MailType.NEW`, `CUR`, `ALL`).
- **Memory** placeholders end in `g` (GiB), `m` (MiB), `p` (percent) and
  `pi` (percent as an integer): `MT`, `MF`, `MU`, `Mu`, `MA`, `ST`, `SF`,
  `SU`, `B` and `C`. The totals `MT` and `ST` have no percentage forms.
  Its widgets are named `memory`.

## Format strings

`statusblocks.base.render_format` replaces each `{name}` placeholder whose
braced key appears in the mapping and leaves the others as they are:

```python
from statusblocks.base import render_format

render_format("{1m} {5m}", {"{1m}": "0.42", "{5m}": "0.30"})  # "0.42 0.30"
```

## Errors

When a block cannot read or parse what it needs, for example because a
device is missing or a file is malformed, it raises
`statusblocks.base.BlockError`. The error's `block` attribute names the
block that failed.

## What this package does not do

- It has no bar program or command: nothing schedules the blocks, reads
  click events or prints the bar protocol. Those are up to the caller.
- There are no battery, network interface or network-connection blocks.
- There are no D-Bus clients; keyboard layout drivers other than
  `setxkbmap` need a query function from the caller.

## Requirements

Python 3.10 or later, with no dependencies outside the standard library.
Most blocks read Linux-specific files. `Custom`, `Docker` and
`KeyboardLayout` run a shell, `curl` or `setxkbmap`, and need them
installed. Install `statusblocks[test]` to run the tests with pytest.