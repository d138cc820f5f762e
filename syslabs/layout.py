"""On-disk structures of the Unix Version 6 file system."""

from __future__ import annotations

import struct
from dataclasses import dataclass

# Inode mode bits.
IALLOC = 0o100000
IFMT = 0o60000
IFDIR = 0o40000
IFCHR = 0o20000
IFBLK = 0o60000
ILARG = 0o10000
ISUID = 0o4000
ISGID = 0o2000
ISVTX = 0o1000
IREAD = 0o400
IWRITE = 0o200
IEXEC = 0o100

_SUPERBLOCK = struct.Struct("<3H100HH100H4B2H48H")
_INODE = struct.Struct("<H4BH8H2H2H")
_DIRENT = struct.Struct("<H14s")

SUPERBLOCK_SIZE = _SUPERBLOCK.size
INODE_SIZE = _INODE.size
DIRENT_SIZE = _DIRENT.size
DIRENT_NAME_SIZE = 14


def _require(data: bytes, size: int, what: str) -> None:
    if len(data) < size:
        raise ValueError(f"{what} needs {size} bytes, got {len(data)}")


@dataclass(frozen=True)
class Superblock:
    """The file system superblock stored in sector 1."""

    isize: int = 0
    fsize: int = 0
    nfree: int = 0
    free: tuple[int, ...] = (0,) * 100
    ninode: int = 0
    inodes: tuple[int, ...] = (0,) * 100
    flock: int = 0
    ilock: int = 0
    fmod: int = 0
    ronly: int = 0
    time: tuple[int, ...] = (0, 0)
    pad: tuple[int, ...] = (0,) * 48

    @classmethod
    def from_bytes(cls, data: bytes) -> Superblock:
        _require(data, SUPERBLOCK_SIZE, "superblock")
        v = _SUPERBLOCK.unpack_from(data)
        return cls(
            isize=v[0],
            fsize=v[1],
            nfree=v[2],
            free=tuple(v[3:103]),
            ninode=v[103],
            inodes=tuple(v[104:204]),
            flock=v[204],
            ilock=v[205],
            fmod=v[206],
            ronly=v[207],
            time=tuple(v[208:210]),
            pad=tuple(v[210:258]),
        )

    def to_bytes(self) -> bytes:
        return _SUPERBLOCK.pack(
            self.isize, self.fsize, self.nfree, *self.free,
            self.ninode, *self.inodes,
            self.flock, self.ilock, self.fmod, self.ronly,
            *self.time, *self.pad,
        )


@dataclass(frozen=True)
class Inode:
    """An on-disk inode."""

    mode: int = 0
    nlink: int = 0
    uid: int = 0
    gid: int = 0
    size0: int = 0
    size1: int = 0
    addr: tuple[int, ...] = (0,) * 8
    atime: tuple[int, ...] = (0, 0)
    mtime: tuple[int, ...] = (0, 0)

    @classmethod
    def from_bytes(cls, data: bytes) -> Inode:
        _require(data, INODE_SIZE, "inode")
        v = _INODE.unpack_from(data)
        return cls(
            mode=v[0],
            nlink=v[1],
            uid=v[2],
            gid=v[3],
            size0=v[4],
            size1=v[5],
            addr=tuple(v[6:14]),
            atime=tuple(v[14:16]),
            mtime=tuple(v[16:18]),
        )

    def to_bytes(self) -> bytes:
        return _INODE.pack(
            self.mode, self.nlink, self.uid, self.gid, self.size0, self.size1,
            *self.addr, *self.atime, *self.mtime,
        )

    def size(self) -> int:
        """File size in bytes, stored as a 24-bit number."""
        return (self.size0 << 16) | self.size1

    def is_allocated(self) -> bool:
        return bool(self.mode & IALLOC)

    def is_directory(self) -> bool:
        return (self.mode & IFMT) == IFDIR

    def is_large(self) -> bool:
        return bool(self.mode & ILARG)


@dataclass(frozen=True)
class DirEntry:
    """A directory entry: an inode number and a name of up to 14 bytes."""

    inumber: int
    raw_name: bytes

    def __post_init__(self) -> None:
        raw = bytes(self.raw_name)
        if len(raw) > DIRENT_NAME_SIZE:
            raise ValueError(f"directory entry name longer than {DIRENT_NAME_SIZE} bytes")
        object.__setattr__(self, "raw_name", raw.split(b"\0", 1)[0])

    @classmethod
    def from_bytes(cls, data: bytes) -> DirEntry:
        _require(data, DIRENT_SIZE, "directory entry")
        inumber, name = _DIRENT.unpack_from(data)
        return cls(inumber, name)

    def to_bytes(self) -> bytes:
        return _DIRENT.pack(self.inumber, self.raw_name)

    def name(self) -> str:
        return self.raw_name.decode("latin-1")


def parse_dir_entries(data: bytes) -> list[DirEntry]:
    """Split a block of directory data into entries, ignoring a trailing partial entry."""
    whole = len(data) - len(data) % DIRENT_SIZE
    return [DirEntry.from_bytes(data[pos:pos + DIRENT_SIZE]) for pos in range(0, whole, DIRENT_SIZE)]