import struct

import pytest

from syslabs.diskimg import SECTOR_SIZE
from syslabs.file import get_block, read_file
from syslabs.layout import IALLOC, IFDIR, ILARG, DirEntry, Inode, Superblock
from syslabs.unixfs import FileSystemError, UnixFileSystem

ISIZE = 2


class _Image:
    def __init__(self):
        self.inodes = {}
        self.sectors = []

    def add_data(self, data):
        nums = []
        for pos in range(0, len(data), SECTOR_SIZE):
            nums.append(2 + ISIZE + len(self.sectors))
            self.sectors.append(data[pos:pos + SECTOR_SIZE].ljust(SECTOR_SIZE, b"\0"))
        return nums

    def add_inode(self, inumber, mode, size, addrs):
        addrs = list(addrs) + [0] * (8 - len(addrs))
        self.inodes[inumber] = Inode(mode=mode, size0=size >> 16, size1=size & 0xFFFF, addr=tuple(addrs))

    def add_file(self, inumber, data, mode=IALLOC):
        self.add_inode(inumber, mode, len(data), self.add_data(data))

    def add_dir(self, inumber, entries):
        data = b"".join(DirEntry(num, name.encode()).to_bytes() for name, num in entries)
        self.add_file(inumber, data, IALLOC | IFDIR)

    def write(self, path):
        boot = (0o407).to_bytes(2, "little").ljust(SECTOR_SIZE, b"\0")
        sb = Superblock(isize=ISIZE, fsize=2 + ISIZE + len(self.sectors)).to_bytes()
        table = bytearray(ISIZE * SECTOR_SIZE)
        for num, ino in self.inodes.items():
            table[(num - 1) * 32:num * 32] = ino.to_bytes()
        path.write_bytes(boot + sb + bytes(table) + b"".join(self.sectors))
        return path


HELLO = b"hello world\n"
DEEP = bytes(i % 251 for i in range(700))
LARGE = bytes((i * 7) % 256 for i in range(1000))


@pytest.fixture
def fs(tmp_path):
    img = _Image()
    img.add_dir(1, [(".", 1), ("..", 1), ("hello", 2), ("deep", 3), ("large", 6)])
    img.add_file(2, HELLO)
    img.add_file(3, DEEP)
    data_sectors = img.add_data(LARGE)
    indirect = img.add_data(struct.pack("<256H", *(data_sectors + [0] * (256 - len(data_sectors)))))
    img.add_inode(6, IALLOC | ILARG, len(LARGE), indirect)
    with UnixFileSystem.open(img.write(tmp_path / "disk.img")) as opened:
        yield opened


def test_small_file_single_block(fs):
    assert get_block(fs, 2, 0) == HELLO


def test_full_and_partial_blocks(fs):
    assert get_block(fs, 3, 0) == DEEP[:SECTOR_SIZE]
    assert get_block(fs, 3, 1) == DEEP[SECTOR_SIZE:]


def test_block_past_end_is_empty(fs):
    assert get_block(fs, 3, 2) == b""


def test_read_file_round_trip(fs):
    assert read_file(fs, 2) == HELLO
    assert read_file(fs, 3) == DEEP


def test_large_file_through_indirect_block(fs):
    assert read_file(fs, 6) == LARGE
    assert get_block(fs, 6, 1) == LARGE[SECTOR_SIZE:]


def test_unallocated_inode_raises(fs):
    with pytest.raises(FileSystemError):
        get_block(fs, 5, 0)
    with pytest.raises(FileSystemError):
        read_file(fs, 5)


@pytest.mark.parametrize("inumber, block", [(0, 0), (-1, 0), (2, -1)])
def test_invalid_arguments_raise(fs, inumber, block):
    with pytest.raises(FileSystemError):
        get_block(fs, inumber, block)


def test_small_file_block_beyond_addresses_raises(fs):
    with pytest.raises(FileSystemError):
        get_block(fs, 2, 8)