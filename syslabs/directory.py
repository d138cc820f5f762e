"""Looking up names in directories."""

from __future__ import annotations

from .diskimg import SECTOR_SIZE
from .file import get_block
from .inode import read_inode
from .layout import DIRENT_NAME_SIZE, DirEntry, parse_dir_entries
from .unixfs import FileSystemError, UnixFileSystem


def find_name(fs: UnixFileSystem, name: str, dir_inumber: int) -> DirEntry:
    """Return the entry called name in directory dir_inumber."""
    if dir_inumber <= 0:
        raise FileSystemError(f"invalid directory inode number {dir_inumber}")
    if len(name) > DIRENT_NAME_SIZE:
        raise FileSystemError(f"name {name!r} is longer than {DIRENT_NAME_SIZE} characters")
    inode = read_inode(fs, dir_inumber)
    if not inode.is_directory():
        raise FileSystemError(f"inode {dir_inumber} is not a directory")

    num_blocks = -(-inode.size() // SECTOR_SIZE)
    for bno in range(num_blocks):
        for entry in parse_dir_entries(get_block(fs, dir_inumber, bno)):
            if entry.inumber != 0 and entry.name() == name:
                return entry
    raise FileSystemError(f"{name!r} not found in directory {dir_inumber}")


def lookup(fs: UnixFileSystem, dir_inumber: int, name: str) -> int:
    """Return the inode number of name in directory dir_inumber."""
    return find_name(fs, name, dir_inumber).inumber