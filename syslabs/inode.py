"""Reading inodes and mapping file block indices to disk sectors."""

from __future__ import annotations

import struct

from .diskimg import SECTOR_SIZE, DiskImageError
from .layout import INODE_SIZE, Inode
from .unixfs import INODE_START_SECTOR, FileSystemError, UnixFileSystem

INODES_PER_BLOCK = SECTOR_SIZE // INODE_SIZE
ADDRS_PER_BLOCK = SECTOR_SIZE // 2
SMALL_FILE_BLOCKS = 8
INDIRECT_ADDRS = 7
_SINGLE_LIMIT = INDIRECT_ADDRS * ADDRS_PER_BLOCK
_DOUBLE_LIMIT = _SINGLE_LIMIT + ADDRS_PER_BLOCK * ADDRS_PER_BLOCK
_BLOCK_NUMBERS = struct.Struct(f"<{ADDRS_PER_BLOCK}H")


def _read_sector(fs: UnixFileSystem, sector: int) -> bytes:
    try:
        data = fs.disk.read_sector(sector)
    except DiskImageError as exc:
        raise FileSystemError(f"cannot read sector {sector}") from exc
    if len(data) != SECTOR_SIZE:
        raise FileSystemError(f"short read of sector {sector}")
    return data


def _read_block_numbers(fs: UnixFileSystem, sector: int) -> tuple[int, ...]:
    return _BLOCK_NUMBERS.unpack(_read_sector(fs, sector))


def read_inode(fs: UnixFileSystem, inumber: int) -> Inode:
    """Fetch inode number inumber (numbered from 1) from the inode area."""
    if inumber <= 0:
        raise FileSystemError(f"invalid inode number {inumber}")
    total_inodes = fs.superblock.isize * INODES_PER_BLOCK
    if inumber >= total_inodes:
        raise FileSystemError(f"inode number {inumber} out of range")
    sector = INODE_START_SECTOR + (inumber - 1) // INODES_PER_BLOCK
    offset = (inumber - 1) % INODES_PER_BLOCK * INODE_SIZE
    data = _read_sector(fs, sector)
    return Inode.from_bytes(data[offset:offset + INODE_SIZE])


def index_lookup(fs: UnixFileSystem, inode: Inode, block_num: int) -> int:
    """Return the disk sector holding file block block_num of inode."""
    if block_num < 0:
        raise FileSystemError(f"invalid block number {block_num}")

    if not inode.is_large():
        if block_num < SMALL_FILE_BLOCKS:
            return inode.addr[block_num]
        raise FileSystemError(f"block {block_num} beyond a small file")

    if block_num < _SINGLE_LIMIT:
        indirect_sector = inode.addr[block_num // ADDRS_PER_BLOCK]
        if indirect_sector == 0:
            raise FileSystemError(f"block {block_num} has no indirect block")
        return _read_block_numbers(fs, indirect_sector)[block_num % ADDRS_PER_BLOCK]

    if block_num < _DOUBLE_LIMIT:
        rel = block_num - _SINGLE_LIMIT
        if inode.addr[INDIRECT_ADDRS] == 0:
            raise FileSystemError(f"block {block_num} has no double indirect block")
        indirect_sector = _read_block_numbers(fs, inode.addr[INDIRECT_ADDRS])[rel // ADDRS_PER_BLOCK]
        if indirect_sector == 0:
            raise FileSystemError(f"block {block_num} has no indirect block")
        sector = _read_block_numbers(fs, indirect_sector)[rel % ADDRS_PER_BLOCK]
        if sector == 0:
            raise FileSystemError(f"block {block_num} is not mapped")
        return sector

    raise FileSystemError(f"block {block_num} beyond the largest file")