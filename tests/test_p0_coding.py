from __future__ import annotations

import random

import pytest

from huffman_coding.core.bit_vec import BitVec
from huffman_coding.core.coding import decode, encode
from huffman_coding.core.huffman_table import HuffmanTable
from huffman_coding.core.huffman_tree import build_tree
from huffman_coding.errors import InvalidData, SymbolNotFound

pytestmark = pytest.mark.p0

SAMPLE = bytes([0, 0, 0, 1, 1, 2, 2, 3, 255])


def _roundtrip(data: bytes) -> bytes:
    tree = build_tree(data)
    table = HuffmanTable.from_tree(tree)
    return decode(tree, encode(table, data), count=len(data))


@pytest.mark.parametrize(
    "data",
    [
        SAMPLE,
        bytes([1, 2, 3, 4, 255, 254, 253, 252]),
        bytes(range(256)),
        b"ab",
        b"abracadabra",
        "città più già così\n".encode("utf-8") * 20,
    ],
)
def test_roundtrip(data: bytes) -> None:
    assert _roundtrip(data) == data


def test_roundtrip_random() -> None:
    rnd = random.Random(42)
    for n in (1, 2, 3, 17, 255, 4096):
        data = bytes(rnd.randrange(256) for _ in range(n))
        assert _roundtrip(data) == data
        skewed = bytes(min(255, int(rnd.expovariate(0.3))) for _ in range(n))
        assert _roundtrip(skewed) == skewed


def test_sample_encoding_bits() -> None:
    tree = build_tree(SAMPLE)
    bits = encode(HuffmanTable.from_tree(tree), SAMPLE)
    assert len(bits) == 20
    assert str(bits) == "00" "00" "00" "10" "10" "11" "11" "010" "011"
    # count is optional for a multi-leaf tree
    assert decode(tree, bits) == SAMPLE


def test_encode_unknown_symbol_raises() -> None:
    table = HuffmanTable.from_bytes(SAMPLE)
    with pytest.raises(SymbolNotFound) as ei:
        encode(table, bytes([0, 1, 4, 0]))
    assert ei.value.symbol == 4


def test_truncated_bitstream_is_invalid() -> None:
    tree = build_tree(SAMPLE)
    bits = list(encode(HuffmanTable.from_tree(tree), SAMPLE))
    # last symbol (255) is "011": dropping one bit leaves "01", mid-code
    truncated = BitVec.from_bits(bits[:-1])
    with pytest.raises(InvalidData, match="metà codice"):
        decode(tree, truncated)


def test_extra_bit_is_invalid() -> None:
    tree = build_tree(SAMPLE)
    bits = encode(HuffmanTable.from_tree(tree), SAMPLE)
    bits.push(False)
    with pytest.raises(InvalidData):
        decode(tree, bits)


def test_count_mismatch_is_invalid() -> None:
    tree = build_tree(SAMPLE)
    bits = encode(HuffmanTable.from_tree(tree), SAMPLE)
    with pytest.raises(InvalidData, match="attesi"):
        decode(tree, bits, count=len(SAMPLE) + 1)


def test_decode_accepts_plain_bool_sequence() -> None:
    tree = build_tree(b"aab")
    assert decode(tree, [False, False, True]) == b"aab"
    assert decode(tree, []) == b""


def test_negative_count_rejected() -> None:
    with pytest.raises(ValueError, match="count negativo"):
        decode(build_tree(b"ab"), BitVec(), count=-1)


# -------------------
# Single-symbol input: empty code, length carried out-of-band
# -------------------
def test_single_symbol_encodes_to_zero_bits() -> None:
    data = b"x" * 7
    tree = build_tree(data)
    bits = encode(HuffmanTable.from_tree(tree), data)
    assert len(bits) == 0


def test_single_symbol_decode_requires_count() -> None:
    tree = build_tree(b"x" * 7)
    with pytest.raises(InvalidData, match="count"):
        decode(tree, BitVec())


def test_single_symbol_decode_with_count() -> None:
    tree = build_tree(b"x" * 7)
    assert decode(tree, BitVec(), count=7) == b"x" * 7
    assert decode(tree, BitVec(), count=0) == b""
    assert _roundtrip(b"\x00" * 1000) == b"\x00" * 1000


def test_single_symbol_rejects_any_bit() -> None:
    tree = build_tree(b"x" * 7)
    with pytest.raises(InvalidData, match="bitstream vuoto"):
        decode(tree, BitVec.from_bits([False]), count=7)
    with pytest.raises(InvalidData):
        decode(tree, [True, True], count=2)
