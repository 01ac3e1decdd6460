from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path

from huffman_coding.core.bit_vec import BitVec
from huffman_coding.core.coding import decode, encode
from huffman_coding.core.huffman_table import HuffmanTable
from huffman_coding.core.huffman_tree import (
    ALPHABET_SIZE,
    HuffmanTree,
    build_tree,
    build_tree_from_counts,
    tree_counts,
)
from huffman_coding.core.varint import dec_varint, enc_varint
from huffman_coding.errors import BadMagic, CorruptPayload, UnsupportedVersion

MAGIC = b"HUF"
VERSION = 1

# -------------------
# Container HUF v1
# [MAGIC(3)|VER(1)|varint(N_SYMBOLS)|varint(N_BITS)|varint(N_USED)|N_USED x (SYM_DELTA u8, varint(COUNT))|BITSTREAM]
#
# - SYM_DELTA: symbols ascending, first delta from 0
# - BITSTREAM: ceil(N_BITS/8) bytes, MSB-first, zero padded
# - empty input: N_SYMBOLS=0, N_BITS=0, N_USED=0, no bitstream
#
# The tree is not stored: decode rebuilds it from the counts with the same
# deterministic build, so the codes match.
# -------------------


@dataclass(frozen=True)
class ContainerHeader:
    version: int
    n_symbols: int
    n_bits: int
    counts: dict[int, int]
    payload_offset: int

    @property
    def payload_len(self) -> int:
        return (self.n_bits + 7) // 8


def _pack_header(n_symbols: int, n_bits: int, counts: dict[int, int]) -> bytes:
    out = bytearray()
    out += MAGIC
    out.append(VERSION)
    out += enc_varint(n_symbols)
    out += enc_varint(n_bits)
    out += enc_varint(len(counts))
    prev = 0
    for sym in sorted(counts):
        out.append(sym - prev)
        out += enc_varint(counts[sym])
        prev = sym
    return bytes(out)


def pack_container(data: bytes) -> bytes:
    raw = bytes(data)
    if not raw:
        return _pack_header(0, 0, {})

    tree = build_tree(raw)
    table = HuffmanTable.from_tree(tree)
    bits = encode(table, raw)
    return _pack_header(len(raw), len(bits), tree_counts(tree)) + bits.to_bytes()


def read_header(blob: bytes) -> ContainerHeader:
    """Parse and sanity-check the header (no bit decoding)."""
    b = bytes(blob)
    if len(b) < len(MAGIC) + 1 or b[: len(MAGIC)] != MAGIC:
        raise BadMagic("magic non valido: non è un container HUF")
    idx = len(MAGIC)
    version = b[idx]
    idx += 1
    if version != VERSION:
        raise UnsupportedVersion(f"HUF version non supportata: {version}")

    try:
        n_symbols, idx = dec_varint(b, idx)
        n_bits, idx = dec_varint(b, idx)
        n_used, idx = dec_varint(b, idx)
        if n_used > ALPHABET_SIZE:
            raise CorruptPayload(f"header: n_used troppo grande ({n_used})")

        counts: dict[int, int] = {}
        sym = 0
        for i in range(n_used):
            if idx >= len(b):
                raise CorruptPayload("header troncato (counts)")
            delta = b[idx]
            idx += 1
            if i > 0 and delta == 0:
                raise CorruptPayload("header: simboli non strettamente crescenti")
            sym += delta
            if sym >= ALPHABET_SIZE:
                raise CorruptPayload(f"header: simbolo fuori range ({sym})")
            c, idx = dec_varint(b, idx)
            if c == 0:
                raise CorruptPayload(f"header: conteggio nullo per simbolo {sym}")
            counts[sym] = c
    except ValueError as err:
        raise CorruptPayload(f"header non valido: {err}") from err

    if sum(counts.values()) != n_symbols:
        raise CorruptPayload(
            f"header: somma conteggi {sum(counts.values())} != n_symbols {n_symbols}"
        )
    if n_symbols == 0 and n_bits != 0:
        raise CorruptPayload("header: bitstream non vuoto per input vuoto")
    if n_symbols > sys.maxsize:
        raise CorruptPayload(f"header: n_symbols troppo grande ({n_symbols})")
    # a single leaf has the empty code; otherwise every code is at least 1 bit
    if n_used == 1 and n_bits != 0:
        raise CorruptPayload(f"header: simbolo singolo ma n_bits={n_bits} (atteso 0)")
    if n_used >= 2 and n_symbols > n_bits:
        raise CorruptPayload(f"header: n_symbols {n_symbols} > n_bits {n_bits}")

    header = ContainerHeader(
        version=version,
        n_symbols=n_symbols,
        n_bits=n_bits,
        counts=counts,
        payload_offset=idx,
    )
    have = len(b) - idx
    if have < header.payload_len:
        raise CorruptPayload(f"bitstream troncato: {have} < {header.payload_len} bytes")
    if have > header.payload_len:
        raise CorruptPayload(f"trailing bytes dopo il bitstream: {have - header.payload_len}")
    return header


def header_tree(header: ContainerHeader) -> HuffmanTree:
    return build_tree_from_counts(header.counts)


def header_bits(blob: bytes, header: ContainerHeader) -> BitVec:
    payload = bytes(blob[header.payload_offset :])
    bits = BitVec.from_bytes(payload, nbits=header.n_bits)
    if bits.to_bytes() != payload:
        raise CorruptPayload("padding bits non nulli nell'ultimo byte")
    return bits


def unpack_container(blob: bytes) -> bytes:
    header = read_header(blob)
    if header.n_symbols == 0:
        return b""
    tree = header_tree(header)
    bits = header_bits(blob, header)
    return decode(tree, bits, count=header.n_symbols)


def compress_file(input_path: Path, output_path: Path) -> int:
    """Return the container size in bytes."""
    blob = pack_container(Path(input_path).read_bytes())
    Path(output_path).write_bytes(blob)
    return len(blob)


def decompress_file(input_path: Path, output_path: Path) -> int:
    """Return the decoded size in bytes."""
    data = unpack_container(Path(input_path).read_bytes())
    Path(output_path).write_bytes(data)
    return len(data)
