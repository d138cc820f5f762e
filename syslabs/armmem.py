"""Main memory of the instruction-level simulator: text, data and stack regions."""

from __future__ import annotations

from dataclasses import dataclass, field

MEM_DATA_START = 0x10000000
MEM_DATA_SIZE = 0x00100000
MEM_TEXT_START = 0x00400000
MEM_TEXT_SIZE = 0x00100000
MEM_STACK_START = 0xFFFFFFFC
MEM_STACK_SIZE = 0x00100000

_WORD_MASK = 0xFFFFFFFF


@dataclass
class MemoryRegion:
    """A contiguous block of simulated memory starting at a fixed address."""

    start: int
    size: int
    data: bytearray = field(init=False, repr=False)

    def __post_init__(self) -> None:
        # Three spare bytes keep an unaligned access at the last address in bounds.
        self.data = bytearray(self.size + 3)

    def __contains__(self, address: int) -> bool:
        return self.start <= address < self.start + self.size


class Memory:
    """Little-endian memory made of the text, data and stack regions."""

    def __init__(self) -> None:
        self.regions = (
            MemoryRegion(MEM_TEXT_START, MEM_TEXT_SIZE),
            MemoryRegion(MEM_DATA_START, MEM_DATA_SIZE),
            MemoryRegion(MEM_STACK_START, MEM_STACK_SIZE),
        )

    def _find(self, address: int) -> MemoryRegion | None:
        return next((region for region in self.regions if address in region), None)

    def read_32(self, address: int) -> int:
        """Read a 32-bit word; addresses outside every region read as zero."""
        region = self._find(address)
        if region is None:
            return 0
        offset = address - region.start
        return int.from_bytes(region.data[offset:offset + 4], "little")

    def write_32(self, address: int, value: int) -> None:
        """Write a 32-bit word; writes outside every region are dropped."""
        region = self._find(address)
        if region is None:
            return
        offset = address - region.start
        region.data[offset:offset + 4] = (value & _WORD_MASK).to_bytes(4, "little")