"""Sector-level access to a disk image file."""

from __future__ import annotations

import os
from types import TracebackType

SECTOR_SIZE = 512


class DiskImageError(OSError):
    """Raised when a disk image cannot be opened, read or written."""


class DiskImage:
    """A disk image file accessed one sector at a time."""

    def __init__(self, path: str | os.PathLike[str], read_only: bool = True) -> None:
        self.path = os.fspath(path)
        self.read_only = read_only
        mode = "rb" if read_only else "r+b"
        try:
            self._file = open(self.path, mode, buffering=0)
        except OSError as exc:
            raise DiskImageError(
                f"cannot open disk image {self.path}: {exc.strerror or exc}"
            ) from exc

    def _require_open(self) -> None:
        if self._file.closed:
            raise DiskImageError(f"disk image {self.path} is closed")

    def _seek_sector(self, sector_num: int) -> None:
        if sector_num < 0:
            raise DiskImageError(f"invalid sector number {sector_num}")
        try:
            self._file.seek(sector_num * SECTOR_SIZE)
        except (OSError, OverflowError) as exc:
            raise DiskImageError(f"cannot seek to sector {sector_num}") from exc

    def size(self) -> int:
        """Return the size of the image in bytes."""
        self._require_open()
        try:
            return self._file.seek(0, os.SEEK_END)
        except OSError as exc:
            raise DiskImageError(f"cannot get the size of {self.path}") from exc

    def read_sector(self, sector_num: int) -> bytes:
        """Read one sector; the result is shorter than a sector near the end of the image."""
        self._require_open()
        self._seek_sector(sector_num)
        try:
            return self._file.read(SECTOR_SIZE) or b""
        except OSError as exc:
            raise DiskImageError(f"cannot read sector {sector_num}") from exc

    def write_sector(self, sector_num: int, data: bytes) -> int:
        """Write one full sector and return the number of bytes written."""
        data = bytes(data)
        if len(data) != SECTOR_SIZE:
            raise ValueError(f"sector data must be {SECTOR_SIZE} bytes, got {len(data)}")
        self._require_open()
        if self.read_only:
            raise DiskImageError(f"disk image {self.path} is open read-only")
        self._seek_sector(sector_num)
        try:
            return self._file.write(data) or 0
        except OSError as exc:
            raise DiskImageError(f"cannot write sector {sector_num}") from exc

    def close(self) -> None:
        """Close the image; closing twice is harmless."""
        self._file.close()

    def __enter__(self) -> DiskImage:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()