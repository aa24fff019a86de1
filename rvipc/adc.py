"""Reading raw samples from IIO analogue-to-digital converters."""

from __future__ import annotations

import os

from .iio import IIO_SYSFS_PATH, IIO_TYPE_DEVICE, iio_find_type_by_name
from .sysfs import read_sysfs_posint


def get_devnum(name: str, sysfs_path: str | os.PathLike = IIO_SYSFS_PATH) -> int:
    """Return the IIO device number of the ADC with the given name."""
    return iio_find_type_by_name(name, IIO_TYPE_DEVICE, sysfs_path)


def get_value(dev_num: int, channel: int, sysfs_path: str | os.PathLike = IIO_SYSFS_PATH) -> int:
    """Return the raw reading of one voltage channel of an IIO device."""
    device_dir = os.path.join(sysfs_path, f"{IIO_TYPE_DEVICE}{dev_num:d}")
    return read_sysfs_posint(f"in_voltage{channel:d}_raw", device_dir)