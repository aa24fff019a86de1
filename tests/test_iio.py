import errno

import pytest

from rvipc.iio import IIO_TYPE_DEVICE, iio_find_type_by_name


def _make_device(root, dirname, name=None):
    d = root / dirname
    d.mkdir()
    if name is not None:
        (d / "name").write_text(name + "\n")
    return d


@pytest.fixture
def iio_tree(tmp_path):
    _make_device(tmp_path, "iio:device0", "saradc")
    _make_device(tmp_path, "iio:device1", "tempsensor")
    _make_device(tmp_path, "iio:device1:buffer0", "tempsensor-buffer")
    _make_device(tmp_path, "trigger0", "sysfstrig")
    _make_device(tmp_path, "iio:device2")
    return tmp_path


def test_type_device_constant_finds_devices(iio_tree):
    assert iio_find_type_by_name("tempsensor", IIO_TYPE_DEVICE, iio_tree) == 1


def test_finds_first_device(iio_tree):
    assert iio_find_type_by_name("saradc", "iio:device", iio_tree) == 0


def test_finds_second_device(iio_tree):
    assert iio_find_type_by_name("tempsensor", "iio:device", iio_tree) == 1


def test_finds_trigger_type(iio_tree):
    assert iio_find_type_by_name("sysfstrig", "trigger", iio_tree) == 0


def test_colon_entries_are_not_matched(iio_tree):
    with pytest.raises(OSError) as info:
        iio_find_type_by_name("tempsensor-buffer", "iio:device", iio_tree)
    assert info.value.errno == errno.ENODEV


def test_unknown_name_raises_enodev(iio_tree):
    with pytest.raises(OSError) as info:
        iio_find_type_by_name("nothing", "iio:device", iio_tree)
    assert info.value.errno == errno.ENODEV


def test_missing_directory_raises_enodev(tmp_path):
    with pytest.raises(OSError) as info:
        iio_find_type_by_name("saradc", "iio:device", tmp_path / "absent")
    assert info.value.errno == errno.ENODEV


def test_entry_without_number_raises_eio(tmp_path):
    _make_device(tmp_path, "iio:devicex", "saradc")
    with pytest.raises(OSError) as info:
        iio_find_type_by_name("saradc", "iio:device", tmp_path)
    assert info.value.errno == errno.EIO


def test_empty_name_file_raises_nodata(tmp_path):
    d = _make_device(tmp_path, "iio:device3")
    (d / "name").write_text("")
    with pytest.raises(OSError) as info:
        iio_find_type_by_name("saradc", "iio:device", tmp_path)
    assert info.value.errno == errno.ENODATA


def test_multi_digit_number(tmp_path):
    _make_device(tmp_path, "iio:device12", "adc12")
    assert iio_find_type_by_name("adc12", "iio:device", tmp_path) == 12