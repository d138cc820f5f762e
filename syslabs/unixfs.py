"""An opened Unix Version 6 file system on a disk image."""

from __future__ import annotations

import os
from types import TracebackType

from .diskimg import SECTOR_SIZE, DiskImage, DiskImageError
from .layout import Superblock

BOOTBLOCK_SECTOR = 0
SUPERBLOCK_SECTOR = 1
INODE_START_SECTOR = 2
ROOT_INUMBER = 1
BOOTBLOCK_MAGIC_NUM = 0o407


class FileSystemError(Exception):
    """Raised when the file system on a disk image cannot be read."""


class UnixFileSystem:
    """A disk image together with its validated boot block and superblock."""

    def __init__(self, disk: DiskImage) -> None:
        self.disk = disk
        bootblock = self._read_sector(BOOTBLOCK_SECTOR, "bootblock")
        magic = int.from_bytes(bootblock[:2], "little")
        if magic != BOOTBLOCK_MAGIC_NUM:
            raise FileSystemError(f"Bad magic number on disk(0x{magic:x})")
        self.superblock = Superblock.from_bytes(self._read_sector(SUPERBLOCK_SECTOR, "superblock"))

    def _read_sector(self, sector: int, what: str) -> bytes:
        try:
            data = self.disk.read_sector(sector)
        except DiskImageError as exc:
            raise FileSystemError(f"Error reading {what}") from exc
        if len(data) != SECTOR_SIZE:
            raise FileSystemError(f"Error reading {what}")
        return data

    @classmethod
    def open(cls, path: str | os.PathLike[str]) -> UnixFileSystem:
        """Open the image at path read-only and load its file system."""
        disk = DiskImage(path, read_only=True)
        try:
            return cls(disk)
        except BaseException:
            disk.close()
            raise

    def close(self) -> None:
        self.disk.close()

    def __enter__(self) -> UnixFileSystem:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()