"""Reading the data blocks of a file by inode number."""

from __future__ import annotations

from .diskimg import SECTOR_SIZE, DiskImageError
from .inode import index_lookup, read_inode
from .unixfs import FileSystemError, UnixFileSystem


def get_block(fs: UnixFileSystem, inumber: int, block_num: int) -> bytes:
    """Return the valid bytes of file block block_num of inode inumber.

    The result is a full sector for blocks inside the file, shorter for the
    last partial block, and empty for blocks past the end of the file.
    """
    if inumber <= 0 or block_num < 0:
        raise FileSystemError(f"invalid block {block_num} of inode {inumber}")
    inode = read_inode(fs, inumber)
    if not inode.is_allocated():
        raise FileSystemError(f"inode {inumber} is not allocated")
    sector = index_lookup(fs, inode, block_num)
    try:
        data = fs.disk.read_sector(sector)
    except DiskImageError as exc:
        raise FileSystemError(f"cannot read sector {sector}") from exc

    file_size = inode.size()
    start = block_num * SECTOR_SIZE
    if file_size > start + SECTOR_SIZE:
        valid = SECTOR_SIZE
    elif file_size > start:
        valid = file_size - start
    else:
        valid = 0
    return data[:valid]


def read_file(fs: UnixFileSystem, inumber: int) -> bytes:
    """Return the whole contents of the file with inode number inumber."""
    inode = read_inode(fs, inumber)
    if not inode.is_allocated():
        raise FileSystemError(f"inode {inumber} is not allocated")
    num_blocks = -(-inode.size() // SECTOR_SIZE)
    return b"".join(get_block(fs, inumber, bno) for bno in range(num_blocks))