"""Writes the reference report of the string list exercise."""

from __future__ import annotations

import io
import os
import sys
from collections import deque
from pathlib import Path
from typing import Iterable, Sequence

from .strproc import StringProcList

OUTPUT_FILENAME = "salida.caso.propio.ej1.txt"
MAX_TYPE = 8
CONCAT_PREFIX = "junta-constelaciones-mision-estrellas:"
PROG = "tester"

_MASK32 = 0xFFFFFFFF
_FREE = "======================== Libera memoria =======================\n"

STARS = (
    "sol", "polaris", "rigel", "pollux", "deneb", "adhara", "betelgeuse",
    "sirio", "procyon", "altair", "achenar", "fomalhaut",
)

CONSTELLATIONS_AND_MISSIONS = (
    "geminis", "pisis", "cefeo", "pavo", "libra", "auriga", "sagitario",
    "pavo", "crux", "cisne", "orion", "centauro", "juno", "hubble",
    "irazusta", "terra", "cassini-huygens", "artemis", "columbia", "kepler",
    "aqua", "sputnik", "insight", "messenger", "osiris", "rex", "chandra",
    "curiosity",
)

BODIES_AND_MISSIONS = (
    "geminis", "pisis", "cefeo", "pavo", "libra", "auriga", "sagitario",
    "pavo", "crux", "sol", "polaris", "rigel", "pollux", "deneb", "adhara",
    "betelgeuse", "sirio", "cisne", "orion", "centauro", "juno", "hubble",
    "sol", "polaris", "rigel", "pollux", "deneb", "adhara", "betelgeuse",
    "sirio", "procyon", "altair", "achenar", "geminis", "pisis", "cefeo",
    "pavo", "libra", "auriga", "sagitario", "pavo", "crux", "cisne", "cefeo",
    "pavo", "libra", "auriga", "sagitario", "pavo", "crux", "cisne", "orion",
    "centauro", "juno", "hubble", "geminis", "pisis", "cefeo", "pavo",
    "libra", "auriga", "sagitario", "pavo", "crux", "cisne", "orion",
    "centauro", "juno", "hubble", "sol", "polaris", "rigel", "pollux",
    "deneb", "adhara", "betelgeuse", "sirio", "cefeo", "pavo", "libra",
    "auriga", "sagitario", "pavo", "crux", "cisne", "luna", "ganimedes",
    "titan", "calisto", "io", "europa", "luna", "oberon", "titania", "rhea",
    "tritón", "encélado", "mimas", "titán", "dione", "luna", "umbriel",
    "ariel", "miranda", "galemede", "apollo 11", "soyuz", "iss", "hubble",
    "cassini-huygens", "juno", "artemis", "chandrayaan-2", "ceres", "vesta",
    "pallas", "hygiea", "iris", "eris", "juno", "hebe", "palas", "victoria",
)


def _trunc_divmod(a: int, b: int) -> tuple[int, int]:
    quotient = abs(a) // b
    if a < 0:
        quotient = -quotient
    return quotient, a - quotient * b


class GlibcRandom:
    """The additive feedback generator behind the C library's srand and rand."""

    def __init__(self, seed: int = 1) -> None:
        seed &= _MASK32
        if seed == 0:
            seed = 1
        word = seed - (1 << 32) if seed >= 1 << 31 else seed
        state = [word]
        for _ in range(30):
            hi, lo = _trunc_divmod(word, 127773)
            word = 16807 * lo - 2836 * hi
            if word < 0:
                word += 2147483647
            state.append(word)
        state.extend(state[:3])
        self._state: deque[int] = deque((v & _MASK32 for v in state), maxlen=34)
        for _ in range(310):
            self._next()

    def _next(self) -> int:
        value = (self._state[-31] + self._state[-3]) & _MASK32
        self._state.append(value)
        return value

    def rand(self) -> int:
        """Return the next value, between 0 and 2**31 - 1."""
        return self._next() >> 1


def _fill(lst: StringProcList, names: Iterable[str], rng: GlibcRandom) -> None:
    for name in names:
        lst.add_node(rng.rand() % MAX_TYPE, name)


def _listing(lst: StringProcList) -> str:
    buf = io.StringIO()
    lst.print_to(buf)
    return buf.getvalue()


def _append(path: str | os.PathLike[str], blocks: Iterable[str]) -> None:
    with open(path, "a", encoding="utf-8") as out:
        out.write("".join(blocks))


def write_ej1a(path: str | os.PathLike[str], rng: GlibcRandom) -> None:
    """Append the list building and printing part of the report to path."""
    blocks: list[str] = []

    def section(text: str) -> None:
        blocks.append(text)
        blocks.append("\n")

    section("== Ejercicio 1a ==\n")
    section("Creando lista vacia\n")
    section(_FREE)
    section("Creando nodo vacio\n")
    section(_FREE)
    lst = StringProcList()
    section("Creando lista vacia\n")
    section(_listing(lst))
    section("Agregando estrellas:\n")
    _fill(lst, STARS, rng)
    section(_listing(lst))
    section(_FREE)
    section("Creando lista vacia\n")
    lst = StringProcList()
    section("Agregando constelaciones y misiones:\n")
    _fill(lst, CONSTELLATIONS_AND_MISSIONS, rng)
    section(_listing(lst))
    section(_FREE)
    blocks.append("======================== Fin del test 1a =======================")
    _append(path, blocks)


def write_ej1b(path: str | os.PathLike[str], rng: GlibcRandom) -> None:
    """Append the concatenation-by-type part of the report to path."""
    blocks = ["== Ejercicio 1b ==\n", "\n"]
    lst = StringProcList()
    blocks += ["Agregando constelaciones y misiones:\n", "\n"]
    _fill(lst, BODIES_AND_MISSIONS, rng)
    blocks.extend(f"{lst.concat(type_, CONCAT_PREFIX)}\n" for type_ in range(MAX_TYPE))
    blocks.append("======================== Fin del test 1b =======================")
    _append(path, blocks)


def main(argv: Sequence[str] | None = None) -> int:
    """Write the full report, replacing any previous one; an optional argument names the file."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) > 1:
        print(f"Usage: {PROG} [<output_file>]", file=sys.stderr)
        return 1
    path = Path(args[0] if args else OUTPUT_FILENAME)
    rng = GlibcRandom(0)
    path.unlink(missing_ok=True)
    write_ej1a(path, rng)
    write_ej1b(path, rng)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())