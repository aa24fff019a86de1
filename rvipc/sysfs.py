"""Reading and writing single values in sysfs attribute files."""

from __future__ import annotations

import errno
import os
import re
from pathlib import Path

_INT_RE = re.compile(r"\s*([+-]?\d+)")
_FLOAT_RE = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


class SysfsVerifyError(OSError):
    """A value read back after a write differs from the value written."""


def _path(filename: str, basedir: str | os.PathLike) -> Path:
    return Path(basedir) / filename


def _no_data(path: Path) -> OSError:
    return OSError(errno.ENODATA, os.strerror(errno.ENODATA), str(path))


def _read_text(path: Path) -> str:
    with open(path, encoding="utf-8") as fp:
        return fp.read()


def _write_text(filename: str, basedir: str | os.PathLike, text: str) -> Path:
    path = _path(filename, basedir)
    with open(path, "w", encoding="utf-8") as fp:
        fp.write(text)
    return path


def _parse_int(path: Path) -> int:
    match = _INT_RE.match(_read_text(path))
    if match is None:
        raise _no_data(path)
    return int(match.group(1))


def _parse_token(path: Path) -> str:
    tokens = _read_text(path).split()
    if not tokens:
        raise _no_data(path)
    return tokens[0]


def write_sysfs_int(filename: str, basedir: str | os.PathLike, val: int) -> None:
    """Write an integer to ``basedir/filename``."""
    _write_text(filename, basedir, f"{val:d}")


def write_sysfs_int_and_verify(filename: str, basedir: str | os.PathLike, val: int) -> None:
    """Write an integer and read it back; raise SysfsVerifyError on mismatch."""
    path = _write_text(filename, basedir, f"{val:d}")
    read_back = _parse_int(path)
    if read_back != val:
        raise SysfsVerifyError(f"possible failure in int write {val} to {path}: read {read_back}")


def write_sysfs_string(filename: str, basedir: str | os.PathLike, val: str) -> None:
    """Write a string to ``basedir/filename``."""
    _write_text(filename, basedir, val)


def write_sysfs_string_and_verify(filename: str, basedir: str | os.PathLike, val: str) -> None:
    """Write a string and read its first word back; raise SysfsVerifyError on mismatch."""
    path = _write_text(filename, basedir, val)
    read_back = _parse_token(path)
    if read_back != val:
        raise SysfsVerifyError(
            f"possible failure in string write of {read_back!r}, should be {val!r} written to {path}"
        )


def read_sysfs_posint(filename: str, basedir: str | os.PathLike) -> int:
    """Read the leading integer of ``basedir/filename``."""
    return _parse_int(_path(filename, basedir))


def read_sysfs_float(filename: str, basedir: str | os.PathLike) -> float:
    """Read the leading floating-point number of ``basedir/filename``."""
    path = _path(filename, basedir)
    match = _FLOAT_RE.match(_read_text(path))
    if match is None:
        raise _no_data(path)
    return float(match.group(1))


def read_sysfs_string(filename: str, basedir: str | os.PathLike) -> str:
    """Read the first whitespace-delimited word of ``basedir/filename``."""
    return _parse_token(_path(filename, basedir))