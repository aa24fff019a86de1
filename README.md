# rvipc

Building blocks for a network camera running on embedded Linux: sysfs and
IIO/ADC access, a thread-safe frame queue, stream settings, resource
monitoring, and device/user settings kept in an INI file.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `rvipc.sysfs`: `write_sysfs_int`, `write_sysfs_string`, `read_sysfs_posint`,
  `read_sysfs_float` and `read_sysfs_string` read and write single values in
  attribute files (`basedir/filename`). The `*_and_verify` writers read the
  value back and raise `SysfsVerifyError` if it differs. Reads of an empty
  file raise `OSError` with `ENODATA`.
- `rvipc.iio`: `iio_find_type_by_name(name, type_prefix, sysfs_path)` returns
  the number of the Industrial I/O instance whose `name` file matches, or
  raises `OSError` (`ENODEV` when nothing matches).
- `rvipc.adc`: `get_devnum(name)` finds an ADC device number and
  `get_value(dev_num, channel)` reads `in_voltage<channel>_raw` from it.
- `rvipc.frame_queue`: `FrameQueue`, a bounded, thread-safe FIFO of
  `FrameData` items (default capacity 8). `push` and `pop` wait, with an
  optional timeout in seconds, and raise `queue.Full` / `queue.Empty` when it
  runs out. `try_push` returns a bool and `try_pop` returns a frame or `None`.
  After `close`, waiting callers wake, `push` raises `QueueClosed`, and `pop`
  raises `QueueClosed` once the queue is drained.
- `rvipc.config`: `VideoConfig` and `VideoCodec` describe the encoded
  streams. `main_stream_config`, `sub_stream_config` and `stream_configs`
  return the built-in settings (1920x1080 at 30 fps, H.264, 4 Mbit/s).
- `rvipc.perf_monitor`: `PerfMonitor` gathers CPU usage, memory, thermal
  zone temperatures, video throughput (set with `update_video_stats`) and
  uptime from `/proc` and `/sys` (both roots can be changed). `report`
  returns a `PerfReport`, `format_report` renders it as lines, and
  `print_report` logs them. `start(interval_sec)` logs a report at that
  interval on a background thread until `stop`. `parse_cpu_times`,
  `calc_cpu_usage` and `parse_meminfo` are the parsers it uses.
- `rvipc.system`: `ParamStore` is an INI-backed parameter store addressed by
  `section:key`. `SystemService` reads device information fields, manages
  user entries (`add_user`, `del_user` and per-field getters and setters),
  joins the numbered entries of `capability.<name>` sections, and runs
  maintenance actions (`reboot`, `factory_reset`, `export_log`, `export_db`,
  `import_db`, `upgrade`) as shell commands through its `runner`, which by
  default runs them with the system shell.

## Examples

```python
from rvipc.frame_queue import FrameData, FrameQueue, FrameType

queue = FrameQueue(4)
queue.push(FrameData(type=FrameType.ENCODED, data=b"\x00\x00\x00\x01"), timeout=1.0)
frame = queue.pop(timeout=1.0)
```

```python
from rvipc.perf_monitor import PerfMonitor, format_report

monitor = PerfMonitor()
print("\n".join(format_report(monitor.report())))
```

```python
from rvipc.system import ParamStore, SystemService

commands = []
service = SystemService(ParamStore("settings.ini"), runner=lambda cmd: commands.append(cmd) or 0)
service.set_device_name("camera-1")
service.reboot()          # records "reboot" instead of running it
```

## What it does not do

The package does not capture or encode video, drive image-signal or 2-D
graphics hardware, draw on-screen overlays, or serve RTSP/RTMP streams; the
stream settings in `rvipc.config` only describe them. It installs no
command-line program.