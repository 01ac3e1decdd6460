from __future__ import annotations

from collections.abc import Iterable

from huffman_coding.core.bit_vec import BitVec
from huffman_coding.core.huffman_table import HuffmanTable
from huffman_coding.core.huffman_tree import HuffmanTree, Leaf
from huffman_coding.errors import InvalidData


def encode(table: HuffmanTable, data: bytes | bytearray | Iterable[int]) -> BitVec:
    """
    data -> bitstream.

    All-or-nothing: the first byte missing from ``table`` raises ``SymbolNotFound``
    and nothing accumulated so far is returned.
    """
    encoded = BitVec()
    for b in data:
        encoded.append(table.get(b))
    return encoded


def decode(tree: HuffmanTree, bits: BitVec | Iterable[bool], count: int | None = None) -> bytes:
    """
    Walk ``tree`` one bit at a time (0 -> child_0, 1 -> child_1), emitting a
    symbol at every leaf and restarting from the root.

    ``count`` is the expected number of symbols. It is mandatory for a
    single-leaf tree: its only code is empty, so the bitstream carries no
    length at all. For every other tree it is an optional consistency check.

    Raises ``InvalidData`` if the bits end in the middle of a code, or if the
    decoded length does not match ``count``.
    """
    if count is not None and count < 0:
        raise ValueError(f"count negativo: {count}")

    if isinstance(tree, Leaf):
        nbits = len(bits) if isinstance(bits, BitVec) else sum(1 for _ in bits)
        if nbits:
            raise InvalidData(f"albero a simbolo singolo: atteso bitstream vuoto, trovati {nbits} bit")
        if count is None:
            raise InvalidData("albero a simbolo singolo: serve il numero di simboli (count)")
        return bytes([tree.symbol]) * count

    out = bytearray()
    node: HuffmanTree = tree
    for bit in bits:
        node = node.child_1 if bit else node.child_0  # type: ignore[union-attr]
        if isinstance(node, Leaf):
            out.append(node.symbol)
            node = tree

    if node is not tree:
        raise InvalidData(f"bitstream terminato a metà codice (dopo {len(out)} simboli)")
    if count is not None and len(out) != count:
        raise InvalidData(f"attesi {count} simboli, decodificati {len(out)}")
    return bytes(out)
