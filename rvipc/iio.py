"""Locating Industrial I/O devices in sysfs by name."""

from __future__ import annotations

import errno
import os
import re

IIO_MAX_NAME_LENGTH = 30
IIO_SYSFS_PATH = "/sys/bus/iio/devices/"
IIO_TYPE_DEVICE = "iio:device"

_NUMBER_RE = re.compile(r"\s*([+-]?\d+)")


def iio_find_type_by_name(
    name: str, type_prefix: str, sysfs_path: str | os.PathLike = IIO_SYSFS_PATH
) -> int:
    """Return the number of the top-level IIO instance of the given type whose name matches.

    Raises OSError with ENODEV when nothing matches or the sysfs directory is missing,
    EIO when an entry has no element number, and ENODATA when a name file is empty.
    """
    try:
        entries = sorted(os.listdir(sysfs_path))
    except OSError as exc:
        raise OSError(errno.ENODEV, "No industrialio devices available", str(sysfs_path)) from exc

    for entry in entries:
        if len(entry) <= len(type_prefix) or not entry.startswith(type_prefix):
            continue
        match = _NUMBER_RE.match(entry, len(type_prefix))
        if match is None:
            raise OSError(errno.EIO, "failed to match element number", entry)
        number = int(match.group(1))
        if entry[match.end():].startswith(":"):
            continue

        name_path = os.path.join(sysfs_path, f"{type_prefix}{number}", "name")
        try:
            with open(name_path, encoding="utf-8") as fp:
                tokens = fp.read().split()
        except OSError:
            continue
        if not tokens:
            raise OSError(errno.ENODATA, os.strerror(errno.ENODATA), name_path)
        if tokens[0] == name:
            return number

    raise OSError(errno.ENODEV, f"no {type_prefix} named {name!r}", str(sysfs_path))