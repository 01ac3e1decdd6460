"""Verification helpers for HUF containers.

Policy: light by default (header + payload length), --full also rebuilds the
tree and decodes the whole bitstream.
"""

from __future__ import annotations

from pathlib import Path

from huffman_coding.core.coding import decode
from huffman_coding.core.huffman_table import HuffmanTable
from huffman_coding.engine.container import (
    ContainerHeader,
    header_bits,
    header_tree,
    read_header,
)
from huffman_coding.errors import CorruptPayload, UsageError


def verify_container(blob: bytes, *, full: bool = False) -> ContainerHeader:
    header = read_header(blob)
    if not full or header.n_symbols == 0:
        return header

    tree = header_tree(header)
    table = HuffmanTable.from_tree(tree)
    expected_bits = table.encoded_bit_length(header.counts)
    if expected_bits != header.n_bits:
        raise CorruptPayload(
            f"n_bits {header.n_bits} incoerente con i conteggi (atteso {expected_bits})"
        )

    data = decode(tree, header_bits(blob, header), count=header.n_symbols)
    got: dict[int, int] = {}
    for b in data:
        got[b] = got.get(b, 0) + 1
    if got != header.counts:
        raise CorruptPayload("conteggi decodificati diversi da quelli dichiarati nell'header")
    return header


def verify_container_file(path: Path, *, full: bool = False) -> ContainerHeader:
    p = Path(path)
    if not p.is_file():
        raise UsageError(f"file non trovato: {p}")
    return verify_container(p.read_bytes(), full=full)
