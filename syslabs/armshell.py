"""Interactive shell of the instruction-level ARM simulator."""

from __future__ import annotations

import re
import sys
from collections import deque
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Sequence, TextIO

from .armmem import MEM_TEXT_START, Memory

ARM_REGS = 32
PROG = "sim"

_MASK32 = 0xFFFFFFFF
_MASK64 = 0xFFFFFFFFFFFFFFFF

_SCAN_PATTERNS = {
    "i": re.compile(r"[+-]?(?:0[xX][0-9a-fA-F]+|0[0-7]*|[1-9][0-9]*)"),
    "d": re.compile(r"[+-]?[0-9]+"),
    "x": re.compile(r"[+-]?(?:0[xX])?[0-9a-fA-F]+"),
}

_HELP = (
    "----------------ARM ISIM Help-----------------------\n"
    "go               -  run program to completion         \n"
    "run n            -  execute program for n instructions\n"
    "mdump low high   -  dump memory from low to high      \n"
    "rdump            -  dump the register & bus values    \n"
    "input reg_no reg_value - set GPR reg_no to reg_value  \n"
    "?                -  display this help menu            \n"
    "quit             -  exit the program                  \n\n"
)


class ProgramLoadError(Exception):
    """Raised when a program file cannot be opened or parsed."""


@dataclass
class CpuState:
    """Program counter, register file and condition flags."""

    pc: int = 0
    regs: list[int] = field(default_factory=lambda: [0] * ARM_REGS)
    flag_n: int = 0
    flag_z: int = 0

    def copy(self) -> CpuState:
        return CpuState(self.pc, list(self.regs), self.flag_n, self.flag_z)


Processor = Callable[[CpuState, CpuState, Memory], Optional[bool]]


def process_instruction(current: CpuState, next_state: CpuState, memory: Memory) -> bool:
    """Execute one instruction; the default decodes nothing, leaves next_state as is and never halts.

    A processor reads current, updates next_state and returns True to halt the machine.
    """
    return False


def _to_signed(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    return value - (1 << bits) if value >> (bits - 1) else value


def _parse_scanf_int(token: str, kind: str) -> int | None:
    """Parse a token as scanf's %i, %d or %x would; None if it does not match."""
    if not _SCAN_PATTERNS[kind].fullmatch(token):
        return None
    sign = -1 if token[0] == "-" else 1
    body = token.lstrip("+-")
    if kind == "d":
        return sign * int(body, 10)
    if body[:2].lower() == "0x":
        return sign * int(body[2:], 16)
    if kind == "x":
        return sign * int(body, 16)
    if body.startswith("0") and len(body) > 1:
        return sign * int(body, 8)
    return sign * int(body, 10)


class _TokenReader:
    """Whitespace-separated words read lazily from a text stream, deque style."""

    def __init__(self, stream: TextIO) -> None:
        self._stream = stream
        self._pending: deque[str] = deque()

    def popleft(self) -> str:
        while not self._pending:
            line = self._stream.readline()
            if not line:
                raise IndexError("end of input")
            self._pending.extend(line.split())
        return self._pending.popleft()

    def appendleft(self, token: str) -> None:
        self._pending.appendleft(token)


class Simulator:
    """Machine state, memory and the commands that drive the simulation."""

    def __init__(
        self,
        memory: Memory | None = None,
        processor: Processor = process_instruction,
        out: TextIO | None = None,
    ) -> None:
        self.memory = memory if memory is not None else Memory()
        self.processor = processor
        self.out = out if out is not None else sys.stdout
        self.current = CpuState()
        self.next_state = CpuState()
        self.run_bit = True
        self.instruction_count = 0

    def _write(self, text: str) -> None:
        self.out.write(text)

    def load_program(self, path: str | Path) -> int:
        """Load hexadecimal words into text memory and return how many were read."""
        try:
            text = Path(path).read_text(encoding="latin-1")
        except OSError as exc:
            raise ProgramLoadError(f"Error: Can't open program file {path}") from exc
        count = 0
        for token in text.split():
            word = _parse_scanf_int(token, "x")
            if word is None:
                raise ProgramLoadError(f"Error: Malformed program file {path}")
            self.memory.write_32(MEM_TEXT_START + 4 * count, word)
            count += 1
        self.current.pc = MEM_TEXT_START
        self.next_state = self.current.copy()
        self._write(f"Read {count} words from program into memory.\n\n")
        return count

    def cycle(self) -> None:
        """Execute one instruction and latch the next state."""
        halt = self.processor(self.current, self.next_state, self.memory)
        self.current = self.next_state.copy()
        self.instruction_count += 1
        if halt:
            self.run_bit = False

    def run(self, num_cycles: int) -> None:
        """Simulate at most num_cycles instructions."""
        if not self.run_bit:
            self._write("Can't simulate, Simulator is halted\n\n")
            return
        self._write(f"Simulating for {num_cycles} cycles...\n\n")
        for _ in range(num_cycles):
            if not self.run_bit:
                self._write("Simulator halted\n\n")
                break
            self.cycle()

    def go(self) -> None:
        """Simulate until the machine halts."""
        if not self.run_bit:
            self._write("Can't simulate, Simulator is halted\n\n")
            return
        self._write("Simulating...\n\n")
        while self.run_bit:
            self.cycle()
        self._write("Simulator halted\n\n")

    def mdump(self, dump_file: TextIO | None, start: int, stop: int) -> None:
        """Dump the words from start to stop to the output and to dump_file."""
        lines = [
            f"\nMemory content [0x{start & _MASK32:08x}..0x{stop & _MASK32:08x}] :\n",
            "-------------------------------------\n",
        ]
        for address in range(start, stop + 1, 4):
            word = self.memory.read_32(address & _MASK64)
            lines.append(f"  0x{address & _MASK32:08x} ({address}) : 0x{word:x}\n")
        lines.append("\n")
        text = "".join(lines)
        self._write(text)
        if dump_file is not None:
            dump_file.write(text)

    def rdump(self, dump_file: TextIO | None) -> None:
        """Dump the registers and flags to the output and to dump_file."""
        lines = [
            "\nCurrent register/bus values :\n",
            "-------------------------------------\n",
            f"Instruction Count : {self.instruction_count & _MASK32}\n",
            f"PC                : 0x{self.current.pc & _MASK64:x}\n",
            "Registers:\n",
        ]
        lines.extend(f"X{k}: 0x{reg & _MASK64:x}\n" for k, reg in enumerate(self.current.regs))
        lines.append(f"FLAG_N: {self.current.flag_n}\n")
        lines.append(f"FLAG_Z: {self.current.flag_z}\n")
        lines.append("\n")
        text = "".join(lines)
        self._write(text)
        if dump_file is not None:
            dump_file.write(text)

    def help(self) -> None:
        """Print the list of commands."""
        self._write(_HELP)

    @staticmethod
    def _scan(tokens, kinds: str) -> list[int] | None:
        values = []
        for kind in kinds:
            try:
                token = tokens.popleft()
            except IndexError:
                return None
            value = _parse_scanf_int(token, kind)
            if value is None:
                tokens.appendleft(token)
                return None
            values.append(value)
        return values

    def handle_command(self, tokens, dump_file: TextIO | None = None) -> bool:
        """Run one command taken from the left of tokens (a deque of words).

        Arguments that do not parse are left in tokens. Returns False when the
        input is exhausted or the user quits, True otherwise.
        """
        try:
            command = tokens.popleft()
        except IndexError:
            return False
        self._write("\n")

        key = command[0].lower()
        if key == "g":
            self.go()
        elif key == "m":
            args = self._scan(tokens, "ii")
            if args is not None:
                start, stop = (_to_signed(a, 32) for a in args)
                self.mdump(dump_file, start, stop)
        elif key == "?":
            self.help()
        elif key == "q":
            self._write("Bye.\n")
            return False
        elif key == "r":
            if command[1:2] in ("d", "D"):
                self.rdump(dump_file)
            else:
                args = self._scan(tokens, "d")
                if args is not None:
                    self.run(_to_signed(args[0], 32))
        elif key == "i":
            args = self._scan(tokens, "ix")
            if args is not None:
                register_no = _to_signed(args[0], 32)
                value = _to_signed(args[1], 64)
                if 0 <= register_no < ARM_REGS:
                    self.current.regs[register_no] = value
                    self.next_state.regs[register_no] = value
        else:
            self._write("Invalid Command\n")
        return True

    def repl(self, stream: TextIO, dump_file: TextIO | None = None) -> None:
        """Prompt for and run commands read from stream until quit or end of input."""
        tokens = _TokenReader(stream)
        while True:
            self._write("ARM-SIM> ")
            if not self.handle_command(tokens, dump_file):
                break


def main(argv: Sequence[str] | None = None) -> int:
    """Load the program files, then run the interactive shell on standard input."""
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(f"Error: usage: {PROG} <program_file_1> <program_file_2> ...")
        return 1

    print("ARM Simulator\n")
    simulator = Simulator()
    try:
        for path in args:
            simulator.load_program(path)
    except ProgramLoadError as exc:
        print(exc)
        return 255

    try:
        dump_file = open("dumpsim", "w", encoding="utf-8")
    except OSError:
        print("Error: Can't open dumpsim file")
        return 255
    with dump_file:
        simulator.repl(sys.stdin, dump_file)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())