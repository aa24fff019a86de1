"""Device information, user accounts and maintenance actions backed by an INI parameter file."""

from __future__ import annotations

import logging
import os
import re
import shlex
import subprocess
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)

USER_CONFIG_PATH = "/userdata/rkipc.ini"
FACTORY_CONFIG_PATH = "/tmp/rkipc-factory-config.ini"

DEVICE_INFO_SECTION = "system.device_info"

# Public field name -> key in the parameter file (the file keeps its historical spelling).
DEVICE_INFO_FIELDS = {
    "device_name": "deivce_name",
    "telecontrol_id": "telecontrol_id",
    "model": "model",
    "serial_number": "serial_number",
    "firmware_version": "firmware_version",
    "encoder_version": "encoder_version",
    "web_version": "web_version",
    "plugin_version": "plugin_version",
    "channels_number": "channels_number",
    "hard_disks_number": "hard_disks_number",
    "alarm_inputs_number": "alarm_inputs_number",
    "alarm_outputs_number": "alarm_outputs_number",
    "firmware_version_info": "firmware_version_info",
    "manufacturer": "manufacturer",
    "hardware_id": "hardware_id",
}

CAPABILITIES = (
    "video",
    "image_adjustment",
    "image_blc",
    "image_enhancement",
    "image_exposure",
    "image_night_to_day",
    "image_video_adjustment",
    "image_white_blance",
)

EXPORT_LOG_COMMANDS = (
    "cat /tmp/messages",
    "cat /tmp/nginx/error.log",
    "cat /tmp/nginx/access.log",
    "cat /proc/uptime",
    "cat /proc/meminfo",
    "cat /proc/net/snmp",
    "cat /proc/interrupts",
    "cat /sys/kernel/debug/clk/clk_summary",
    "cat /sys/class/thermal/thermal_zone0/temp",
    "top -b -n 1",
    "cat /sys/class/net/eth0/speed",
    "netstat -an",
    "ifconfig -a",
    "route -n",
    "cat /etc/resolv.conf",
    "cat /proc/net/wireless",
    "cat /proc/mpp_service/session_summary",
    "cat /sys/kernel/debug/rkrga/driver_version",
    "cat /proc/rkrga/driver_version",
    "cat /sys/kernel/debug/rkrga/load",
    "cat /proc/rkrga/load",
    "media-ctl -p -d /dev/media0",
    "media-ctl -p -d /dev/media1",
    "media-ctl -p -d /dev/media2",
    "media-ctl -p -d /dev/media3",
    "media-ctl -p -d /dev/media4",
    "media-ctl -p -d /dev/media5",
    "cat /proc/rkcif*",
    "cat /proc/rkisp*",
    "dumpsys",
    "dumpsys version",
    "dumpsys mb d",
    "cat /proc/rk_dma_heap/dma_heap_info",
    "cat /dev/mpi/valloc",
    "cat /proc/vcodec/enc/venc_info",
    "cat /dev/mpi/vsys",
)

_INT_RE = re.compile(r"\s*([+-]?\d+)")


def _split_key(key: str) -> tuple[str, str | None]:
    section, sep, option = key.partition(":")
    return section, (option if sep else None)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


class ParamStore:
    """Parameters kept as ``section:key`` entries of an INI file."""

    def __init__(self, path: str | os.PathLike | None = None) -> None:
        self.path = Path(path) if path is not None else None
        self._sections: dict[str, dict[str, str]] = {}
        if self.path is not None and self.path.exists():
            self._load(self.path.read_text(encoding="utf-8"))

    def _load(self, text: str) -> None:
        section: str | None = None
        for raw in text.splitlines():
            line = raw.strip()
            if not line or line[0] in ";#":
                continue
            if line.startswith("[") and line.endswith("]"):
                section = line[1:-1].strip()
                self._sections.setdefault(section, {})
                continue
            if section is None or "=" not in line:
                continue
            option, _, value = line.partition("=")
            self._sections[section][option.strip()] = _unquote(value.strip())

    def get_string(self, key: str, default: str | None = None) -> str | None:
        """Return the value stored under ``section:key``, or ``default``."""
        section, option = _split_key(key)
        if option is None:
            return default
        return self._sections.get(section, {}).get(option, default)

    def get_int(self, key: str, default: int = 0) -> int:
        """Return the value under ``section:key`` as an integer, or ``default``."""
        value = self.get_string(key)
        if value is None:
            return default
        try:
            return int(value, 0)
        except ValueError:
            match = _INT_RE.match(value)
            return int(match.group(1)) if match else default

    def set_string(self, key: str, value: str | None) -> None:
        """Store a value; a key without ``:`` names a section, which is created."""
        section, option = _split_key(key)
        entries = self._sections.setdefault(section, {})
        if option is not None:
            entries[option] = "" if value is None else value

    def set_int(self, key: str, value: int) -> None:
        self.set_string(key, f"{value:d}")

    def section_key_count(self, section: str) -> int:
        """Number of keys in a section; 0 if it does not exist."""
        return len(self._sections.get(section, {}))

    def set_section(self, section: str) -> None:
        """Create an empty section if it does not exist."""
        self._sections.setdefault(section, {})

    def unset(self, key: str) -> None:
        """Remove one ``section:key`` entry, or a whole section with its keys."""
        section, option = _split_key(key)
        if option is None:
            self._sections.pop(section, None)
        else:
            self._sections.get(section, {}).pop(option, None)

    def save(self) -> None:
        """Write the parameters back to the file they were loaded from."""
        if self.path is None:
            return
        parts = []
        for section, entries in self._sections.items():
            parts.append(f"[{section}]\n")
            parts.extend(f"{option} = {value}\n" for option, value in entries.items())
            parts.append("\n")
        self.path.write_text("".join(parts), encoding="utf-8")


def _run_shell(command: str) -> int:
    return subprocess.run(command, shell=True, check=False).returncode


class SystemService:
    """Device information, users, capabilities and maintenance actions."""

    def __init__(self, params: ParamStore, runner: Callable[[str], int] | None = None) -> None:
        self.params = params
        self.runner = runner if runner is not None else _run_shell

    # device information

    def get_device_info(self, field: str) -> str | None:
        """Return one field of the device information section."""
        try:
            key = DEVICE_INFO_FIELDS[field]
        except KeyError:
            raise ValueError(f"unknown device info field {field!r}") from None
        return self.params.get_string(f"{DEVICE_INFO_SECTION}:{key}", None)

    def set_device_name(self, value: str) -> None:
        self.params.set_string(f"{DEVICE_INFO_SECTION}:deivce_name", value)

    def set_telecontrol_id(self, value: str) -> None:
        self.params.set_string(f"{DEVICE_INFO_SECTION}:telecontrol_id", value)

    # actions

    def reboot(self) -> None:
        self.runner("reboot")

    def factory_reset(self) -> None:
        self.runner(f"cp {FACTORY_CONFIG_PATH} {USER_CONFIG_PATH}")
        self.runner("sync")
        self.runner("reboot -f")

    def export_log(self, path: str) -> None:
        """Collect diagnostic command output into one file at ``path``."""
        target = shlex.quote(str(path))
        if os.path.exists(path):
            self.runner(f"rm -f {target}")
        for command in EXPORT_LOG_COMMANDS:
            self.runner(f"echo {command} >> {target}")
            self.runner(f"{command} >> {target}")

    def export_db(self, path: str) -> None:
        command = f"cp {USER_CONFIG_PATH} {shlex.quote(str(path))}"
        logger.info("cmd is %s", command)
        self.runner(command)

    def import_db(self, path: str) -> None:
        """Replace the parameter file and force a reboot so that it takes effect."""
        command = f"cp {shlex.quote(str(path))} {USER_CONFIG_PATH}"
        logger.info("cmd is %s", command)
        self.runner(command)
        self.runner("sync")
        self.runner("reboot -f")

    def upgrade(self, path: str) -> int:
        """Start a firmware upgrade from ``path``; return the launcher's exit status."""
        if not path:
            raise ValueError("upgrade needs an image path")
        command = (
            f"updateEngine --image_url={path} --misc=update --savepath={path} --reboot &"
        )
        logger.info("cmd is %s", command)
        return self.runner(command)

    # users

    def get_user_num(self) -> int:
        return self.params.get_int(f"{DEVICE_INFO_SECTION}:user_num", 1)

    def set_user_num(self, value: int) -> None:
        self.params.set_int(f"{DEVICE_INFO_SECTION}:user_num", value)

    def get_user_level(self, user_id: int) -> int:
        return self.params.get_int(f"user.{user_id:d}:user_level", -1)

    def set_user_level(self, user_id: int, value: int) -> None:
        self.params.set_int(f"user.{user_id:d}:user_level", value)

    def get_user_name(self, user_id: int) -> str | None:
        return self.params.get_string(f"user.{user_id:d}:user_name", None)

    def set_user_name(self, user_id: int, value: str) -> None:
        self.params.set_string(f"user.{user_id:d}:user_name", value)

    def get_password(self, user_id: int) -> str | None:
        return self.params.get_string(f"user.{user_id:d}:password", None)

    def set_password(self, user_id: int, value: str) -> None:
        self.params.set_string(f"user.{user_id:d}:password", value)

    def add_user(self, user_id: int, user_level: int, user_name: str, password: str) -> None:
        """Create a user section, bump the user count and save."""
        section = f"user.{user_id:d}"
        self.params.set_section(section)
        # The level is stored as a single character.
        self.params.set_string(f"{section}:user_level", f"{user_level:d}"[:1])
        self.params.set_string(f"{section}:user_name", user_name)
        self.params.set_string(f"{section}:password", password)
        self.set_user_num(self.get_user_num() + 1)
        self.params.save()

    def del_user(self, user_id: int) -> None:
        """Remove a user section, lower the user count and save."""
        self.params.unset(f"user.{user_id:d}")
        self.set_user_num(self.get_user_num() - 1)
        self.params.save()

    # capabilities

    def capability(self, name: str) -> str:
        """Concatenate the numbered entries of ``capability.<name>``."""
        section = f"capability.{name}"
        count = self.params.section_key_count(section)
        logger.debug("section_keys is %d", count)
        return "".join(
            self.params.get_string(f"{section}:{index}", None) or "" for index in range(count)
        )