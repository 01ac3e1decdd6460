"""BitVec: growable sequence of bits, packed in 32-bit words.

Layout:
  - ``_words``: full words, MSB-first (the first pushed bit is bit 31)
  - ``_rem`` / ``_rem_len``: trailing bits not yet filling a word,
    right-aligned (the last pushed bit is bit 0), ``0 <= _rem_len < 32``

Packing is an implementation detail: ``len()`` and iteration order never depend on it.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

WORD_LEN = 32
BYTE_LEN = 8
WORD_BYTES = WORD_LEN // BYTE_LEN

_WORD_MASK = (1 << WORD_LEN) - 1


class BitVec:
    """Packed bit vector with O(1) amortized push/append."""

    __slots__ = ("_words", "_rem", "_rem_len")

    def __init__(self) -> None:
        self._words: list[int] = []
        self._rem = 0
        self._rem_len = 0

    # -------------------
    # Costruttori
    # -------------------
    @classmethod
    def from_bits(cls, bits: Iterable[bool | int]) -> BitVec:
        """Build from an explicit bit sequence (any truthy value is a 1)."""
        bv = cls()
        for bit in bits:
            bv.push(bit)
        return bv

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | Iterable[int], nbits: int | None = None) -> BitVec:
        """
        Unpack bytes MSB-first (8 bits per byte).

        ``nbits`` keeps only the first ``nbits`` bits: this is how a byte-padded
        bitstream goes back to its exact length.
        """
        raw = bytes(data)
        bv = cls()
        full = len(raw) - (len(raw) % WORD_BYTES)
        for i in range(0, full, WORD_BYTES):
            bv._words.append(int.from_bytes(raw[i : i + WORD_BYTES], "big"))
        tail = raw[full:]
        if tail:
            bv._rem = int.from_bytes(tail, "big")
            bv._rem_len = BYTE_LEN * len(tail)

        if nbits is not None:
            if nbits < 0 or nbits > len(bv):
                raise ValueError(f"nbits fuori range: {nbits} (max {len(bv)})")
            bv._truncate(nbits)
        return bv

    # -------------------
    # Mutazione
    # -------------------
    def push(self, bit: bool | int) -> None:
        """Append one bit at the tail."""
        self._put(1 if bit else 0, 1)

    def append(self, other: BitVec) -> None:
        """
        Move all bits of ``other`` to the tail of self.

        Ownership transfer: ``other`` is left completely empty (``len(other) == 0``).
        Use :meth:`concat` (or ``+``) when ``other`` must stay untouched.
        """
        if other is self:
            raise ValueError("append di un BitVec su se stesso non supportato")
        self._extend_from(other)
        other.clear()

    def align(self) -> None:
        """Pad with zero bits up to the next 32-bit word boundary."""
        if self._rem_len > 0:
            self._words.append((self._rem << (WORD_LEN - self._rem_len)) & _WORD_MASK)
            self._rem = 0
            self._rem_len = 0

    def clear(self) -> None:
        self._words = []
        self._rem = 0
        self._rem_len = 0

    # -------------------
    # Copie / concatenazione
    # -------------------
    def copy(self) -> BitVec:
        bv = BitVec()
        bv._words = list(self._words)
        bv._rem = self._rem
        bv._rem_len = self._rem_len
        return bv

    def concat(self, other: BitVec) -> BitVec:
        """Return a new BitVec with self's bits followed by other's. Neither operand changes."""
        out = self.copy()
        out._extend_from(other)
        return out

    def clone_push(self, bit: bool | int) -> BitVec:
        out = self.copy()
        out.push(bit)
        return out

    def __add__(self, other: object) -> BitVec:
        if not isinstance(other, BitVec):
            return NotImplemented
        return self.concat(other)

    # -------------------
    # Lettura
    # -------------------
    def __len__(self) -> int:
        return WORD_LEN * len(self._words) + self._rem_len

    def __iter__(self) -> Iterator[bool]:
        # generator: every iter() restarts from bit 0
        for word in self._words:
            for shift in range(WORD_LEN - 1, -1, -1):
                yield bool((word >> shift) & 1)
        rem = self._rem
        for shift in range(self._rem_len - 1, -1, -1):
            yield bool((rem >> shift) & 1)

    def aligned_words(self) -> list[int]:
        """Copy of the packed words, remainder included and zero padded."""
        words = list(self._words)
        if self._rem_len > 0:
            words.append((self._rem << (WORD_LEN - self._rem_len)) & _WORD_MASK)
        return words

    def to_bytes(self) -> bytes:
        """Pack MSB-first; the last byte is zero padded when ``len(self) % 8 != 0``."""
        out = bytearray()
        for word in self._words:
            out += word.to_bytes(WORD_BYTES, "big")
        if self._rem_len > 0:
            nbytes = (self._rem_len + BYTE_LEN - 1) // BYTE_LEN
            out += (self._rem << (nbytes * BYTE_LEN - self._rem_len)).to_bytes(nbytes, "big")
        return bytes(out)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitVec):
            return NotImplemented
        return (
            self._rem_len == other._rem_len
            and self._rem == other._rem
            and self._words == other._words
        )

    # mutable value type
    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return "".join("1" if bit else "0" for bit in self)

    def __repr__(self) -> str:
        return f"BitVec('{self}')"

    # -------------------
    # Interni
    # -------------------
    def _put(self, value: int, nbits: int) -> None:
        # value: nbits (<= 32) right-aligned bits
        acc = (self._rem << nbits) | (value & ((1 << nbits) - 1))
        n = self._rem_len + nbits
        if n >= WORD_LEN:
            n -= WORD_LEN
            self._words.append(acc >> n)
            acc &= (1 << n) - 1
        self._rem = acc
        self._rem_len = n

    def _extend_from(self, other: BitVec) -> None:
        words = list(other._words)
        rem, rem_len = other._rem, other._rem_len
        if self._rem_len == 0:
            self._words.extend(words)
        else:
            for word in words:
                self._put(word, WORD_LEN)
        if rem_len > 0:
            self._put(rem, rem_len)

    def _truncate(self, nbits: int) -> None:
        keep_words, r = divmod(nbits, WORD_LEN)
        if keep_words < len(self._words):
            rem = self._words[keep_words] >> (WORD_LEN - r)
        else:
            rem = self._rem >> (self._rem_len - r)
        self._words = self._words[:keep_words]
        self._rem = rem
        self._rem_len = r
