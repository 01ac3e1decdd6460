from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from huffman_coding.core.bit_vec import BitVec
from huffman_coding.core.huffman_tree import HuffmanTree, Leaf, build_tree
from huffman_coding.errors import SymbolNotFound


class HuffmanTable:
    """
    Mappa simbolo -> codice (BitVec), derivata da un albero.

    Immutable once built: ``get()`` hands out copies, so callers may append
    the returned code elsewhere without touching the table.
    """

    __slots__ = ("_codes",)

    def __init__(self, codes: Mapping[int, BitVec] | None = None) -> None:
        self._codes: dict[int, BitVec] = {}
        for sym, code in (codes or {}).items():
            self._codes[int(sym)] = code.copy()

    @classmethod
    def from_tree(cls, tree: HuffmanTree) -> HuffmanTable:
        """One DFS: Leaf records its prefix, Node adds 0 for child_0 and 1 for child_1."""
        codes: dict[int, BitVec] = {}
        stack: list[tuple[HuffmanTree, BitVec]] = [(tree, BitVec())]
        while stack:
            node, prefix = stack.pop()
            if isinstance(node, Leaf):
                codes[node.symbol] = prefix
                continue
            stack.append((node.child_1, prefix.clone_push(True)))
            stack.append((node.child_0, prefix.clone_push(False)))

        table = cls()
        table._codes = codes
        return table

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | Iterable[int]) -> HuffmanTable:
        return cls.from_tree(build_tree(data))

    def get(self, symbol: int) -> BitVec:
        code = self._codes.get(symbol)
        if code is None:
            raise SymbolNotFound(symbol)
        return code.copy()

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._codes

    def __len__(self) -> int:
        return len(self._codes)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._codes))

    def items(self) -> list[tuple[int, BitVec]]:
        return [(sym, self._codes[sym].copy()) for sym in sorted(self._codes)]

    def code_lengths(self) -> dict[int, int]:
        return {sym: len(self._codes[sym]) for sym in sorted(self._codes)}

    def encoded_bit_length(self, counts: Mapping[int, int] | Iterable[int]) -> int:
        """Bits that encoding a stream with these symbol counts will produce."""
        items = counts.items() if isinstance(counts, Mapping) else enumerate(counts)
        total = 0
        for sym, c in items:
            if c <= 0:
                continue
            if sym not in self._codes:
                raise SymbolNotFound(sym)
            total += c * len(self._codes[sym])
        return total

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HuffmanTable):
            return NotImplemented
        return self._codes == other._codes

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return "".join(f"{sym}: {code}, " for sym, code in self.items())

    def __repr__(self) -> str:
        return f"HuffmanTable({len(self._codes)} symbols)"
