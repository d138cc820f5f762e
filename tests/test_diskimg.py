import pytest

from syslabs.diskimg import SECTOR_SIZE, DiskImage, DiskImageError


def _make_image(tmp_path, sectors, tail=b""):
    path = tmp_path / "disk.img"
    data = b"".join(bytes([i + 1]) * SECTOR_SIZE for i in range(sectors)) + tail
    path.write_bytes(data)
    return path, data


def test_size_reports_file_length(tmp_path):
    path, data = _make_image(tmp_path, 3)
    with DiskImage(path) as disk:
        assert disk.size() == len(data)


def test_read_sector_returns_sector_contents(tmp_path):
    path, data = _make_image(tmp_path, 3)
    with DiskImage(path) as disk:
        assert disk.read_sector(1) == data[SECTOR_SIZE:2 * SECTOR_SIZE]
        assert disk.read_sector(0) == data[:SECTOR_SIZE]


def test_read_past_end_returns_empty(tmp_path):
    path, _ = _make_image(tmp_path, 2)
    with DiskImage(path) as disk:
        assert disk.read_sector(5) == b""


def test_partial_last_sector_is_short(tmp_path):
    path, _ = _make_image(tmp_path, 1, tail=b"xyz")
    with DiskImage(path) as disk:
        assert disk.read_sector(1) == b"xyz"


def test_negative_sector_raises(tmp_path):
    path, _ = _make_image(tmp_path, 1)
    with DiskImage(path) as disk:
        with pytest.raises(DiskImageError):
            disk.read_sector(-1)


def test_write_read_round_trip(tmp_path):
    path, _ = _make_image(tmp_path, 2)
    payload = bytes(range(256)) * 2
    with DiskImage(path, read_only=False) as disk:
        assert disk.write_sector(1, payload) == SECTOR_SIZE
        assert disk.read_sector(1) == payload
    assert path.read_bytes()[SECTOR_SIZE:] == payload


def test_write_on_read_only_raises(tmp_path):
    path, _ = _make_image(tmp_path, 1)
    with DiskImage(path) as disk:
        with pytest.raises(DiskImageError):
            disk.write_sector(0, bytes(SECTOR_SIZE))


def test_write_wrong_length_raises(tmp_path):
    path, _ = _make_image(tmp_path, 1)
    with DiskImage(path, read_only=False) as disk:
        with pytest.raises(ValueError):
            disk.write_sector(0, b"short")


def test_open_missing_file_raises(tmp_path):
    with pytest.raises(DiskImageError):
        DiskImage(tmp_path / "missing.img")


def test_use_after_close_raises(tmp_path):
    path, _ = _make_image(tmp_path, 1)
    with DiskImage(path) as disk:
        pass
    with pytest.raises(DiskImageError):
        disk.read_sector(0)
    with pytest.raises(DiskImageError):
        disk.size()