from __future__ import annotations

import heapq
import itertools
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from typing import Union

from huffman_coding.errors import EmptyInput

ALPHABET_SIZE = 256


# -------------------
# Nodi dell'albero
# -------------------
@dataclass(frozen=True)
class Leaf:
    symbol: int  # 0-255
    count: int

    @property
    def is_leaf(self) -> bool:
        return True


@dataclass(frozen=True)
class Node:
    count: int  # somma dei figli
    child_0: "HuffmanTree"
    child_1: "HuffmanTree"

    @property
    def is_leaf(self) -> bool:
        return False


HuffmanTree = Union[Leaf, Node]


def count_bytes(data: bytes | bytearray | Iterable[int]) -> list[int]:
    counts = [0] * ALPHABET_SIZE
    for b in data:
        counts[b] += 1
    return counts


def _normalize_counts(counts: Mapping[int, int] | Iterable[int]) -> list[int]:
    if isinstance(counts, Mapping):
        items = list(counts.items())
    else:
        items = list(enumerate(counts))
        if len(items) > ALPHABET_SIZE:
            raise ValueError(f"troppi contatori: {len(items)} (max {ALPHABET_SIZE})")

    out = [0] * ALPHABET_SIZE
    for sym, c in items:
        if sym < 0 or sym >= ALPHABET_SIZE:
            raise ValueError(f"simbolo fuori range: {sym}")
        if c < 0:
            raise ValueError(f"conteggio negativo per simbolo {sym}: {c}")
        out[sym] = int(c)
    return out


def _new_node(first: HuffmanTree, second: HuffmanTree) -> Node:
    # the heavier node takes the 0 branch; on a tie the first popped one does
    if first.count >= second.count:
        return Node(count=first.count + second.count, child_0=first, child_1=second)
    return Node(count=first.count + second.count, child_0=second, child_1=first)


def build_tree_from_counts(counts: Mapping[int, int] | Iterable[int]) -> HuffmanTree:
    """
    Greedy min-weight merge over the symbols with count > 0.

    Tie-break (stable across runs): heap entries are ``(count, seq, node)``.
    Leaves get ``seq`` in ascending symbol order, merged nodes take the next
    value of a counter, so equal counts pop leaves first (by symbol), then
    nodes in creation order.
    """
    freq = _normalize_counts(counts)

    heap: list[tuple[int, int, HuffmanTree]] = []
    seq = itertools.count()
    for sym, c in enumerate(freq):
        if c > 0:
            heap.append((c, next(seq), Leaf(symbol=sym, count=c)))

    if not heap:
        raise EmptyInput("nessun simbolo: impossibile costruire l'albero Huffman")

    heapq.heapify(heap)

    if len(heap) == 1:
        return heap[0][2]

    while len(heap) > 1:
        _, _, first = heapq.heappop(heap)
        _, _, second = heapq.heappop(heap)
        parent = _new_node(first, second)
        heapq.heappush(heap, (parent.count, next(seq), parent))

    return heap[0][2]


def build_tree(data: bytes | bytearray | Iterable[int]) -> HuffmanTree:
    """data -> Huffman tree. Raises ``EmptyInput`` on empty data."""
    return build_tree_from_counts(count_bytes(data))


# -------------------
# Visite
# -------------------
def iter_leaves(tree: HuffmanTree) -> Iterator[Leaf]:
    """Leaves in 0-first depth-first order (explicit stack, no recursion)."""
    stack: list[HuffmanTree] = [tree]
    while stack:
        node = stack.pop()
        if isinstance(node, Leaf):
            yield node
        else:
            stack.append(node.child_1)
            stack.append(node.child_0)


def tree_counts(tree: HuffmanTree) -> dict[int, int]:
    """symbol -> count, ascending symbol order."""
    return {leaf.symbol: leaf.count for leaf in sorted(iter_leaves(tree), key=lambda x: x.symbol)}


def tree_depth(tree: HuffmanTree) -> int:
    """Length of the longest code (0 for a single-leaf tree)."""
    depth = 0
    stack: list[tuple[HuffmanTree, int]] = [(tree, 0)]
    while stack:
        node, d = stack.pop()
        if isinstance(node, Leaf):
            depth = max(depth, d)
        else:
            stack.append((node.child_0, d + 1))
            stack.append((node.child_1, d + 1))
    return depth
