"""Resolving absolute path names to inode numbers."""

from __future__ import annotations

from .directory import find_name
from .layout import DIRENT_NAME_SIZE
from .unixfs import ROOT_INUMBER, FileSystemError, UnixFileSystem


def lookup_path(fs: UnixFileSystem, pathname: str) -> int:
    """Return the inode number of an absolute path name."""
    if not pathname.startswith("/"):
        raise FileSystemError(f"{pathname!r} is not an absolute path")
    if pathname == "/":
        return ROOT_INUMBER

    rest = pathname[1:]
    if rest.endswith("/"):
        rest = rest[:-1]
    inumber = ROOT_INUMBER
    for component in rest.split("/"):
        if not component or len(component) > DIRENT_NAME_SIZE:
            raise FileSystemError(f"bad path component {component!r} in {pathname!r}")
        inumber = find_name(fs, component, inumber).inumber
    return inumber