"""The owning, growable bit container."""

import logging
from typing import final

from padbits import _addressing as addressing
from padbits._addressing import Bits
from padbits.errors import BorrowError
from padbits.framing import split_frame, write_frame
from padbits.view import BitIterator, BitView

logger = logging.getLogger(__name__)


@final
class BitSequence:
    """Growable sequence of bits packed MSB-first into owned bytes.

    The final byte may hold up to seven padding bits, tracked by
    ``last_byte_padding``. Padding bits carry no meaning and are never
    cleared: appending ORs the new bit into place.

    Examples:
        >>> bits = BitSequence("10110")
        >>> bits.len_bits(), bits.least_len_bytes(), bits.last_byte_padding
        (5, 1, 3)
        >>> bits.append_bit(True)
        >>> bits.serialize()
        bytearray(b'\\x02\\xb4')
    """

    def __init__(self, bits: Bits = ()) -> None:
        """Create a sequence holding ``bits``.

        Args:
            bits: String like "1010", or iterable of bools/0/1.

        Raises:
            ValueError: If an element is not a bit.
        """
        self._raw = bytearray()
        self._padding = 0
        self._borrows = 0
        for bit in bits:
            self.append_bit(addressing.coerce_bit(bit))

    @staticmethod
    def with_capacity(capacity: int) -> "BitSequence":
        """Create an empty sequence expected to grow to ``capacity`` bits.

        bytearray manages its own over-allocation, so the capacity is only
        validated; the new sequence stores zero bytes.
        """
        if capacity < 0:
            raise ValueError(f"capacity must be non-negative, got {capacity}")
        return BitSequence()

    @staticmethod
    def from_bool_slice(bits: Bits) -> "BitSequence":
        """Build a sequence by appending each bit of ``bits`` in order."""
        return BitSequence(bits)

    @staticmethod
    def deserialize(data: bytes | bytearray | memoryview, strict: bool = True) -> "BitSequence":
        """Decode a frame produced by :meth:`serialize`, copying its data bytes.

        Args:
            data: Padding byte followed by the packed data bytes.
            strict: Reject a padding byte outside ``[0, 7]``, or nonzero with
                no data. With ``strict=False`` any padding is stored as is.

        Raises:
            DecodeError: If ``data`` is empty, or ``strict`` is set and the
                padding is out of range.
        """
        padding, raw = split_frame(data, strict=strict)
        sequence = BitSequence()
        sequence._raw = bytearray(raw)
        sequence._padding = padding
        return sequence

    @property
    def last_byte_padding(self) -> int:
        return self._padding

    def len_bits(self) -> int:
        """Number of meaningful bits."""
        return addressing.len_bits(len(self._raw), self._padding)

    def least_len_bytes(self) -> int:
        """Number of bytes holding the bits."""
        return len(self._raw)

    def append_bit(self, bit: bool) -> None:
        """Append one bit after the last meaningful bit.

        Raises:
            BorrowError: If a view of this sequence, or a memoryview from
                :meth:`as_padded_bytes`, is alive.
        """
        self._ensure_exclusive()
        if self._padding == 0:
            self._grow(bytes((addressing.leading_bit(bit),)))
            self._padding = addressing.MAX_PADDING
        else:
            self._raw[-1] |= addressing.free_slot_mask(bit, self._padding)
            self._padding -= 1

    def extend_from_bits(self, bits: BitView) -> None:
        """Append every meaningful bit of ``bits`` in order.

        When this sequence has no padding the view's bytes are copied as they
        are, padding included, and its padding is adopted. Otherwise the
        view's bits are shifted into the free slots of the last byte and the
        bytes that follow it; the result equals appending them one by one.

        Raises:
            BorrowError: If a view of this sequence is alive, including when
                ``bits`` is itself a view of this sequence.
        """
        self._ensure_exclusive()
        raw, padding = bits.as_padded_bytes()
        if self._padding == 0:
            self._grow(raw)
            self._padding = padding
            return

        if not addressing.is_valid_padding(len(raw), padding):
            # The iterator's cutoff, not len_bits(), decides which bits count.
            for bit in bits.iter_bits():
                self.append_bit(bit)
            return

        value, count = addressing.meaningful_bits(raw, padding)
        if count == 0:
            return
        free = self._padding
        logger.debug("unaligned extend of %d bit(s) into %d free slot(s)", count, free)
        if count <= free:
            self._raw[-1] |= value << (free - count)
            self._padding = free - count
            return

        spill = count - free
        tail, tail_padding = addressing.pack_bits(value & ((1 << spill) - 1), spill)
        last = len(self._raw) - 1
        self._grow(tail)
        self._raw[last] |= value >> spill
        self._padding = tail_padding

    def as_bit_view(self) -> BitView:
        """Borrow this sequence as a read-only view without copying."""
        return BitView(self._raw, self._padding, self)

    def iter_bits(self) -> BitIterator:
        """Iterate over the meaningful bits, MSB-first.

        The sequence stays borrowed until the iterator is exhausted or dropped.
        """
        return BitIterator(self.as_bit_view())

    def as_padded_bytes(self) -> tuple[memoryview, int]:
        """The stored bytes, read-only and uncopied, and the final padding.

        The sequence refuses every mutation while the returned memoryview is
        alive.
        """
        return memoryview(self._raw).toreadonly(), self._padding

    def to_bool_slice(self) -> tuple[bool, ...]:
        return tuple(self.iter_bits())

    def serialize(self, buf: bytearray | None = None) -> bytearray:
        """Append the padding byte and then the stored bytes to ``buf``.

        Existing contents of ``buf`` are kept. A new bytearray is used when
        ``buf`` is omitted. Returns the buffer written to.
        """
        if buf is None:
            buf = bytearray()
        return write_frame(buf, self._raw, self._padding)

    def copy(self) -> "BitSequence":
        """An independent copy of the stored bytes and padding."""
        clone = BitSequence()
        clone._raw = bytearray(self._raw)
        clone._padding = self._padding
        return clone

    def _begin_borrow(self) -> None:
        self._borrows += 1

    def _end_borrow(self) -> None:
        self._borrows -= 1

    def _ensure_exclusive(self) -> None:
        if self._borrows:
            raise BorrowError(f"{type(self).__name__} is borrowed by {self._borrows} live view(s)")
        # Untracked memoryview exports only show up when a resize is refused.
        self._grow(b"\x00")
        del self._raw[-1]

    def _grow(self, data: bytes | memoryview) -> None:
        try:
            self._raw += data
        except BufferError as error:
            raise BorrowError(
                f"{type(self).__name__} storage is exported; release it before mutating"
            ) from error

    def __copy__(self) -> "BitSequence":
        return self.copy()

    def __reduce__(self):
        return BitSequence.deserialize, (bytes(self.serialize()), False)

    def __len__(self) -> int:
        return self.len_bits()

    def __iter__(self) -> BitIterator:
        return self.iter_bits()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, BitSequence):
            return self._padding == other._padding and self._raw == other._raw
        if isinstance(other, BitView):
            raw, padding = other.as_padded_bytes()
            return self._padding == padding and self._raw == raw
        return NotImplemented

    def __str__(self) -> str:
        return f"[{addressing.format_bits(self)}]"

    def __repr__(self) -> str:
        return f'{type(self).__name__}("{addressing.format_bits(self)}")'
