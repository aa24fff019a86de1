"""System resource and video throughput monitoring."""

from __future__ import annotations

import logging
import os
import re
import threading
from dataclasses import dataclass, field, replace
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_SEC = 5

_CPU_RE = re.compile(r"cpu" + r"\s+(\d+)" * 8)
_UINT_RE = re.compile(r"\+?(\d+)")
_INT_RE = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class CpuTimes:
    """Aggregate CPU time counters from the first line of /proc/stat."""

    user: int = 0
    nice: int = 0
    system: int = 0
    idle: int = 0
    iowait: int = 0
    irq: int = 0
    softirq: int = 0
    steal: int = 0

    @property
    def idle_total(self) -> int:
        return self.idle + self.iowait

    @property
    def total(self) -> int:
        return (
            self.user + self.nice + self.system + self.idle
            + self.iowait + self.irq + self.softirq + self.steal
        )


@dataclass
class CpuStats:
    usage_percent: float = 0.0
    core_count: int = 0


@dataclass
class MemStats:
    total_kb: int = 0
    free_kb: int = 0
    available_kb: int = 0
    used_kb: int = 0
    usage_percent: float = 0.0


@dataclass
class TempStats:
    """Temperatures in degrees Celsius; -1.0 where a sensor is unavailable."""

    cpu_temp: float = 0.0
    gpu_temp: float = 0.0


@dataclass
class VideoStats:
    vi_fps: float = 0.0
    venc_fps: float = 0.0
    venc_bitrate_kbps: int = 0


@dataclass
class PerfReport:
    cpu: CpuStats = field(default_factory=CpuStats)
    mem: MemStats = field(default_factory=MemStats)
    temp: TempStats = field(default_factory=TempStats)
    video: VideoStats = field(default_factory=VideoStats)
    uptime_sec: int = 0


def parse_cpu_times(line: str) -> CpuTimes | None:
    """Parse a ``cpu`` summary line; return None if it does not carry eight counters."""
    match = _CPU_RE.match(line)
    if match is None:
        return None
    return CpuTimes(*(int(v) for v in match.groups()))


def calc_cpu_usage(prev: CpuTimes, curr: CpuTimes) -> float:
    """Percentage of non-idle time between two samples."""
    total_diff = curr.total - prev.total
    idle_diff = curr.idle_total - prev.idle_total
    if total_diff <= 0 or idle_diff < 0 or idle_diff > total_diff:
        return 0.0
    return 100.0 * (1.0 - idle_diff / total_diff)


def parse_meminfo(text: str) -> MemStats:
    """Build memory statistics from the contents of /proc/meminfo."""
    stats = MemStats()
    for line in text.splitlines():
        parts = line.split()
        if len(parts) < 2:
            continue
        match = _UINT_RE.match(parts[1])
        if match is None:
            continue
        value = int(match.group(1))
        key = parts[0]
        if key == "MemTotal:":
            stats.total_kb = value
        elif key == "MemFree:":
            stats.free_kb = value
        elif key == "MemAvailable:":
            stats.available_kb = value
    stats.used_kb = stats.total_kb - stats.available_kb
    if stats.total_kb > 0:
        stats.usage_percent = 100.0 * stats.used_kb / stats.total_kb
    return stats


def format_report(report: PerfReport) -> list[str]:
    """Render a report as the lines that are logged."""
    lines = [
        "==== Performance Report ====",
        f"CPU: {report.cpu.usage_percent:.1f}% ({report.cpu.core_count} cores)",
        f"MEM: {report.mem.usage_percent:.1f}% "
        f"({report.mem.used_kb // 1024}/{report.mem.total_kb // 1024} MB used)",
    ]
    if report.temp.cpu_temp >= 0:
        temp = f"TEMP: CPU={report.temp.cpu_temp:.1f}°C"
        if report.temp.gpu_temp >= 0:
            temp += f", GPU={report.temp.gpu_temp:.1f}°C"
        lines.append(temp)
    if report.video.venc_fps > 0:
        lines.append(
            f"VIDEO: VI={report.video.vi_fps:.1f}fps, VENC={report.video.venc_fps:.1f}fps, "
            f"Bitrate={report.video.venc_bitrate_kbps}Kbps"
        )
    up = report.uptime_sec
    lines.append(f"UPTIME: {up // 3600}h {(up % 3600) // 60}m {up % 60}s")
    lines.append("============================")
    return lines


def _read_int_file(path: Path) -> int:
    with open(path, encoding="utf-8") as fp:
        match = _INT_RE.match(fp.read())
    if match is None:
        raise ValueError(f"no integer in {path}")
    return int(match.group(1))


class PerfMonitor:
    """Samples CPU, memory, temperature and uptime, and optionally logs them periodically."""

    def __init__(self, proc_root: str | os.PathLike = "/proc",
                 sys_root: str | os.PathLike = "/sys") -> None:
        self._proc = Path(proc_root)
        self._sys = Path(sys_root)
        self._video = VideoStats()
        self._video_lock = threading.Lock()
        self._cpu_lock = threading.Lock()
        self._thread: threading.Thread | None = None
        self._stop_event = threading.Event()
        self.interval_sec = DEFAULT_INTERVAL_SEC
        try:
            self._last_cpu = self._read_cpu_times()
        except OSError:
            self._last_cpu = CpuTimes()
        logger.info("Performance monitor initialized")

    def _read_cpu_times(self) -> CpuTimes:
        with open(self._proc / "stat", encoding="utf-8") as fp:
            first = fp.readline()
        return parse_cpu_times(first) or CpuTimes()

    def _core_count(self) -> int:
        try:
            with open(self._proc / "cpuinfo", encoding="utf-8") as fp:
                count = sum(1 for line in fp if line.startswith("processor"))
        except OSError:
            return 1
        return count if count > 0 else 1

    def cpu_stats(self) -> CpuStats:
        """CPU usage since the previous sample, and the number of cores."""
        with self._cpu_lock:
            curr = self._read_cpu_times()
            usage = calc_cpu_usage(self._last_cpu, curr)
            self._last_cpu = curr
        return CpuStats(usage_percent=usage, core_count=self._core_count())

    def mem_stats(self) -> MemStats:
        """Memory statistics from /proc/meminfo."""
        with open(self._proc / "meminfo", encoding="utf-8") as fp:
            return parse_meminfo(fp.read())

    def temp_stats(self) -> TempStats:
        """Thermal zone 0 and 1 temperatures in degrees Celsius."""
        zones = self._sys / "class" / "thermal"
        temps = []
        for zone in ("thermal_zone0", "thermal_zone1"):
            try:
                temps.append(_read_int_file(zones / zone / "temp") / 1000.0)
            except (OSError, ValueError):
                temps.append(-1.0)
        return TempStats(cpu_temp=temps[0], gpu_temp=temps[1])

    def _uptime(self) -> int:
        with open(self._proc / "uptime", encoding="utf-8") as fp:
            return int(float(fp.read().split()[0]))

    def report(self) -> PerfReport:
        """Collect every statistic; unavailable parts are left at their defaults."""
        report = PerfReport()
        try:
            report.cpu = self.cpu_stats()
        except OSError:
            pass
        try:
            report.mem = self.mem_stats()
        except OSError:
            pass
        report.temp = self.temp_stats()
        with self._video_lock:
            report.video = replace(self._video)
        try:
            report.uptime_sec = self._uptime()
        except (OSError, ValueError, IndexError):
            pass
        return report

    def print_report(self) -> None:
        """Log a full report."""
        for line in format_report(self.report()):
            logger.info("%s", line)

    def update_video_stats(self, vi_fps: float, venc_fps: float, bitrate_kbps: int) -> None:
        """Record the latest capture and encode throughput."""
        with self._video_lock:
            self._video = VideoStats(vi_fps=vi_fps, venc_fps=venc_fps,
                                     venc_bitrate_kbps=bitrate_kbps)

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self, interval_sec: int = DEFAULT_INTERVAL_SEC) -> None:
        """Start logging a report every ``interval_sec`` seconds in a background thread."""
        if self.running:
            logger.warning("Monitor already running")
            return
        self.interval_sec = interval_sec if interval_sec > 0 else DEFAULT_INTERVAL_SEC
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="perf-monitor", daemon=True)
        self._thread.start()
        logger.info("Performance monitor started, interval=%ds", self.interval_sec)

    def stop(self) -> None:
        """Stop the background thread and wait for it."""
        if self._thread is None:
            return
        self._stop_event.set()
        self._thread.join()
        self._thread = None

    def _run(self) -> None:
        logger.info("Performance monitor thread started")
        while not self._stop_event.wait(self.interval_sec):
            self.print_report()
        logger.info("Performance monitor thread stopped")

    def __enter__(self) -> PerfMonitor:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()