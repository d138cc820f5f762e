"""Unix V6 disk image reader, ARM simulator shell, string-processing list and C type helpers."""

__version__ = "0.1.0"

__all__ = [
    "armmem",
    "armshell",
    "cfloat",
    "chksumfile",
    "climits",
    "directory",
    "diskimageaccess",
    "diskimg",
    "file",
    "inode",
    "layout",
    "pathname",
    "strproc",
    "strproc_report",
    "unixfs",
]