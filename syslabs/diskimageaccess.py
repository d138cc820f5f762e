"""Command that reports checksums of the files on a disk image."""

from __future__ import annotations

import getopt
import sys
from typing import Sequence, TextIO

from .chksumfile import checksum_by_inumber, checksum_by_pathname, checksum_to_hex, checksums_equal
from .diskimg import SECTOR_SIZE, DiskImage, DiskImageError
from .file import get_block
from .inode import INODES_PER_BLOCK, read_inode
from .layout import DIRENT_SIZE, DirEntry, parse_dir_entries
from .pathname import lookup_path
from .unixfs import ROOT_INUMBER, FileSystemError, UnixFileSystem

MAX_ENTRIES = 10000
MAXPATH = 1024
PROG = "diskimageaccess"


def get_dir_entries(fs: UnixFileSystem, inumber: int, max_entries: int = MAX_ENTRIES) -> list[DirEntry]:
    """Return up to max_entries entries of the directory inumber, in order."""
    inode = read_inode(fs, inumber)
    if not inode.is_allocated() or not inode.is_directory():
        raise FileSystemError(f"inode {inumber} is not an allocated directory")
    if max_entries < 1:
        raise FileSystemError("max_entries must be at least 1")
    size = inode.size()
    if size % DIRENT_SIZE:
        raise FileSystemError(f"directory {inumber} has size {size}, not a whole number of entries")

    entries: list[DirEntry] = []
    for bno in range(-(-size // SECTOR_SIZE)):
        for entry in parse_dir_entries(get_block(fs, inumber, bno)):
            entries.append(entry)
            if len(entries) >= max_entries:
                return entries
    return entries


def print_directory(fs: UnixFileSystem, pathname: str, out: TextIO | None = None, err: TextIO | None = None) -> None:
    """Print every entry of the directory at pathname."""
    out = out or sys.stdout
    err = err or sys.stderr
    try:
        inumber = lookup_path(fs, pathname)
    except FileSystemError:
        print(f"Can't find {pathname}", file=err)
        return
    try:
        entries = get_dir_entries(fs, inumber)
    except FileSystemError:
        print(f"Can't read entries from {pathname}", file=err)
        return
    for entry in entries:
        print(f"Direntry {pathname} Name {entry.name()} Inumber {entry.inumber}", file=out)


def dump_inode_checksums(fs: UnixFileSystem, out: TextIO | None = None, err: TextIO | None = None) -> None:
    """Print the checksum of every allocated inode."""
    out = out or sys.stdout
    err = err or sys.stderr
    for inumber in range(1, fs.superblock.isize * INODES_PER_BLOCK):
        try:
            inode = read_inode(fs, inumber)
        except FileSystemError:
            print(f"Can't read inode {inumber} ", file=err)
            return
        if not inode.is_allocated():
            continue
        try:
            chksum = checksum_by_inumber(fs, inumber)
        except FileSystemError:
            print(f"Inode {inumber} can't compute chksum", file=err)
            continue
        print(
            f"Inode {inumber} mode 0x{inode.mode:x} size {inode.size()} checksum {checksum_to_hex(chksum)}",
            file=out,
        )


def _dump_path_and_children(fs: UnixFileSystem, pathname: str, inumber: int, out: TextIO, err: TextIO) -> None:
    try:
        inode = read_inode(fs, inumber)
    except FileSystemError:
        print(f"Can't read inode {inumber} ", file=err)
        return
    try:
        chksum1 = checksum_by_inumber(fs, inumber)
        chksum2 = checksum_by_pathname(fs, pathname)
    except FileSystemError:
        print(f"Can't checksum inode {inumber} path {pathname}", file=err)
        return
    if not checksums_equal(chksum1, chksum2):
        print(f"Pathname checksum of {pathname} differs from inode {inumber}", file=err)
        return

    print(
        f"Path {pathname} {inumber} mode 0x{inode.mode:x} size {inode.size()} "
        f"checksum {checksum_to_hex(chksum2)}",
        file=out,
    )

    prefix = "" if pathname == "/" else pathname
    if not inode.is_directory():
        return
    if len(prefix) > MAXPATH - 16:
        print(f"Too deep of directories {prefix}", file=err)
    try:
        entries = get_dir_entries(fs, inumber)
    except FileSystemError:
        entries = []
    for entry in entries:
        name = entry.name()
        if name in (".", ".."):
            continue
        _dump_path_and_children(fs, f"{prefix}/{name}", entry.inumber, out, err)


def dump_pathname_checksums(fs: UnixFileSystem, out: TextIO | None = None, err: TextIO | None = None) -> None:
    """Print the checksum of every path reachable from the root directory."""
    _dump_path_and_children(fs, "/", ROOT_INUMBER, out or sys.stdout, err or sys.stderr)


def _usage() -> int:
    print(f"Usage: {PROG} <options> diskimagePath", file=sys.stderr)
    print("where <options> can be:", file=sys.stderr)
    print("-q     don't print extra info", file=sys.stderr)
    print("-i     print all inode checksums", file=sys.stderr)
    print("-p     print all pathname checksums", file=sys.stderr)
    return 1


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command and return its exit status."""
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        opts, rest = getopt.gnu_getopt(args, "iqp")
    except getopt.GetoptError:
        return _usage()
    if len(rest) != 1:
        return _usage()
    flags = {opt for opt, _ in opts}
    diskpath = rest[0]

    try:
        disk = DiskImage(diskpath, read_only=True)
    except DiskImageError:
        print(f"Can't open diskimagePath {diskpath}", file=sys.stderr)
        return 1

    with disk:
        try:
            fs = UnixFileSystem(disk)
        except FileSystemError as exc:
            print(exc, file=sys.stderr)
            print("Failed to initialize unix filesystem", file=sys.stderr)
            return 1

        if "-q" not in flags:
            try:
                disksize = disk.size()
            except DiskImageError:
                print(f"Error getting the size of {diskpath}", file=sys.stderr)
                return 1
            sb = fs.superblock
            print(f"Disk {diskpath} is {disksize} bytes ({disksize // 1024} KB)")
            print(f"Superblock s_isize {sb.isize}")
            print(f"Superblock s_fsize {sb.fsize}")
            print(f"Superblock s_nfree {sb.nfree}")
            print(f"Superblock s_ninode {sb.ninode}")

        if "-i" in flags:
            dump_inode_checksums(fs, sys.stdout, sys.stderr)
        if "-p" in flags:
            dump_pathname_checksums(fs, sys.stdout, sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())