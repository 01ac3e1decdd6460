"""Size / entropy report for a raw input.

The zstd size is only a reference point: it shows how far a static order-0
Huffman code is from a general-purpose compressor on the same bytes.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any

from huffman_coding.core.huffman_table import HuffmanTable
from huffman_coding.core.huffman_tree import build_tree, count_bytes, tree_depth
from huffman_coding.engine.container import pack_container

try:
    import zstandard as zstd  # type: ignore
except Exception:  # pragma: no cover
    zstd = None


@dataclass(frozen=True)
class Stats:
    input_size: int
    distinct_symbols: int
    entropy_bits_per_symbol: float
    huffman_bits: int
    avg_code_length: float
    max_code_length: int
    container_size: int
    zstd_level: int
    zstd_size: int | None

    @property
    def ratio(self) -> float:
        if self.input_size == 0:
            return 0.0
        return self.container_size / self.input_size

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["ratio"] = round(self.ratio, 6)
        return d


def shannon_entropy(counts: list[int]) -> float:
    total = sum(counts)
    if total == 0:
        return 0.0
    h = 0.0
    for c in counts:
        if c > 0:
            p = c / total
            h -= p * math.log2(p)
    return h


def zstd_reference_size(data: bytes, level: int = 19) -> int | None:
    if zstd is None:
        return None
    c = zstd.ZstdCompressor(level=int(level))
    return len(c.compress(bytes(data)))


def collect_stats(data: bytes, zstd_level: int = 19) -> Stats:
    raw = bytes(data)
    counts = count_bytes(raw)

    if raw:
        tree = build_tree(raw)
        table = HuffmanTable.from_tree(tree)
        huffman_bits = table.encoded_bit_length(counts)
        max_len = tree_depth(tree)
        distinct = len(table)
    else:
        huffman_bits = 0
        max_len = 0
        distinct = 0

    return Stats(
        input_size=len(raw),
        distinct_symbols=distinct,
        entropy_bits_per_symbol=shannon_entropy(counts),
        huffman_bits=huffman_bits,
        avg_code_length=(huffman_bits / len(raw)) if raw else 0.0,
        max_code_length=max_len,
        container_size=len(pack_container(raw)),
        zstd_level=int(zstd_level),
        zstd_size=zstd_reference_size(raw, zstd_level),
    )
