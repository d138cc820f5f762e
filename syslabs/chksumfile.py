"""SHA-1 checksums of file contents."""

from __future__ import annotations

import hashlib

from .diskimg import SECTOR_SIZE
from .file import get_block
from .inode import read_inode
from .pathname import lookup_path
from .unixfs import FileSystemError, UnixFileSystem

CHKSUM_SIZE = 20


def checksum_by_inumber(fs: UnixFileSystem, inumber: int) -> bytes:
    """Return the SHA-1 digest of the contents of inode inumber."""
    inode = read_inode(fs, inumber)
    if not inode.is_allocated():
        raise FileSystemError(f"inode {inumber} is not allocated")
    sha = hashlib.sha1()
    for offset in range(0, inode.size(), SECTOR_SIZE):
        sha.update(get_block(fs, inumber, offset // SECTOR_SIZE))
    return sha.digest()


def checksum_by_pathname(fs: UnixFileSystem, pathname: str) -> bytes:
    """Return the SHA-1 digest of the file at an absolute path name."""
    return checksum_by_inumber(fs, lookup_path(fs, pathname))


def _digest(chksum: bytes) -> bytes:
    chksum = bytes(chksum)
    if len(chksum) < CHKSUM_SIZE:
        raise ValueError(f"checksum must be {CHKSUM_SIZE} bytes, got {len(chksum)}")
    return chksum[:CHKSUM_SIZE]


def checksum_to_hex(chksum: bytes) -> str:
    """Return the checksum as 40 lower-case hexadecimal digits."""
    return _digest(chksum).hex()


def checksums_equal(chksum1: bytes, chksum2: bytes) -> bool:
    """Return whether two checksums are the same."""
    return _digest(chksum1) == _digest(chksum2)