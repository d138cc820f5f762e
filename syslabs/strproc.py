"""A doubly linked list of typed strings and concatenation by type."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional, TextIO

TYPE_MIN = 0
TYPE_MAX = 0xFF


def _check_type(type_: int) -> int:
    if not TYPE_MIN <= type_ <= TYPE_MAX:
        raise ValueError(f"node type must be between {TYPE_MIN} and {TYPE_MAX}, got {type_}")
    return type_


@dataclass(eq=False)
class StringProcNode:
    """One node of the list: a type tag and the string it refers to."""

    type: int
    hash: Optional[str]
    next: Optional[StringProcNode] = field(default=None, repr=False)
    previous: Optional[StringProcNode] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        _check_type(self.type)


class StringProcList:
    """A doubly linked list of StringProcNode, appended at the end."""

    def __init__(self) -> None:
        self.first: Optional[StringProcNode] = None
        self.last: Optional[StringProcNode] = None
        self._length = 0

    def add_node(self, type_: int, hash_: Optional[str]) -> StringProcNode:
        """Append a node with the given type and string and return it."""
        node = StringProcNode(type_, hash_)
        if self.last is None:
            self.first = node
        else:
            self.last.next = node
            node.previous = self.last
        self.last = node
        self._length += 1
        return node

    def concat(self, type_: int, hash_: str) -> str:
        """Return hash_ followed by the strings of every node of type type_, in list order."""
        if hash_ is None:
            raise TypeError("hash_ must be a string")
        _check_type(type_)
        matching = (node.hash for node in self if node.type == type_ and node.hash is not None)
        result = hash_
        for part in matching:
            result = str_concat(result, part)
        return result

    def __iter__(self) -> Iterator[StringProcNode]:
        node = self.first
        while node is not None:
            yield node
            node = node.next

    def __len__(self) -> int:
        return self._length

    def print_to(self, file: TextIO) -> None:
        """Write the length of the list and then one line per node."""
        file.write(f"List length: {len(self)}\n")
        for node in self:
            text = "(null)" if node.hash is None else node.hash
            file.write(f"\tnode hash: {text} | type: {node.type}\n")


def str_concat(a: str, b: str) -> str:
    """Return a new string holding a followed by b."""
    return a + b