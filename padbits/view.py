"""Borrowed, read-only views over packed bits and the iterator they produce."""

import weakref
from typing import Iterator, Protocol, final

from padbits import _addressing as addressing
from padbits.framing import split_frame, write_frame


class _Lender(Protocol):
    def _begin_borrow(self) -> None: ...
    def _end_borrow(self) -> None: ...


@final
class BitView:
    """Read-only view of packed bits stored elsewhere.

    A view never copies the bytes it reads. Views taken from a BitSequence
    keep that sequence borrowed until they are released, either explicitly
    with :meth:`release`, by leaving a ``with`` block, or when the view is
    garbage-collected. While borrowed, the sequence refuses to mutate.

    Examples:
        >>> view = BitView.from_padded_bytes(b"\\xa0", 5)
        >>> view.to_bool_slice()
        (True, False, True)
        >>> view.serialize()
        b'\\x05\\xa0'
    """

    def __init__(
        self,
        raw_data: bytes | bytearray | memoryview,
        last_byte_padding: int,
        lender: _Lender | None = None,
    ) -> None:
        self._raw = addressing.as_byte_view(raw_data)
        self._padding = last_byte_padding
        self._lender = lender
        self._borrow = None
        if lender is not None:
            lender._begin_borrow()
            self._borrow = weakref.finalize(self, lender._end_borrow)

    @staticmethod
    def from_padded_bytes(data: bytes | bytearray | memoryview, last_byte_padding: int) -> "BitView":
        """Wrap externally owned bytes and a final padding value without copying.

        Raises:
            ValueError: If ``data`` is not C-contiguous, or the padding is
                outside ``[0, 7]``, or nonzero while ``data`` is empty.
        """
        view = BitView(data, last_byte_padding)
        byte_count = view.least_len_bytes()
        if not addressing.is_valid_padding(byte_count, last_byte_padding):
            view.release()
            raise ValueError(f"invalid padding {last_byte_padding} for {byte_count} byte(s)")
        return view

    @staticmethod
    def deserialize(data: bytes | bytearray | memoryview, strict: bool = True) -> "BitView":
        """Read a view out of a serialized frame, borrowing ``data``'s data bytes.

        Raises:
            DecodeError: If ``data`` is empty, or ``strict`` is set and the
                padding byte is out of range.
        """
        padding, raw = split_frame(data, strict=strict)
        return BitView(raw, padding)

    @property
    def last_byte_padding(self) -> int:
        return self._padding

    def len_bits(self) -> int:
        """Number of meaningful bits in the view."""
        return addressing.len_bits(len(self._raw), self._padding)

    def least_len_bytes(self) -> int:
        """Number of bytes spanned by the view."""
        return len(self._raw)

    def as_padded_bytes(self) -> tuple[memoryview, int]:
        """The viewed bytes and the final padding, without copying."""
        return self._raw, self._padding

    def iter_bits(self) -> "BitIterator":
        """Iterate over the meaningful bits, MSB-first."""
        return BitIterator(self.copy())

    def to_bool_slice(self) -> tuple[bool, ...]:
        return tuple(self.iter_bits())

    def serialize(self) -> bytes:
        """Return a new frame holding the padding byte followed by the viewed bytes."""
        return bytes(write_frame(bytearray(), self._raw, self._padding))

    def copy(self) -> "BitView":
        """A second view of the same storage and padding.

        The copy holds its own reference to the storage, so it stays usable
        after this view is released.
        """
        return BitView(self._raw[:], self._padding, self._lender)

    def release(self) -> None:
        """End the borrow. The view must not be read afterwards."""
        if self._borrow is not None:
            self._borrow()
        self._raw.release()

    def __enter__(self) -> "BitView":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    def __copy__(self) -> "BitView":
        return self.copy()

    def __reduce__(self):
        raise TypeError(f"cannot pickle {type(self).__name__}: it borrows its storage")

    def __len__(self) -> int:
        return self.len_bits()

    def __iter__(self) -> "BitIterator":
        return self.iter_bits()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitView):
            return NotImplemented
        return self._padding == other._padding and self._raw == other._raw

    def __str__(self) -> str:
        return f"[{addressing.format_bits(self)}]"

    def __repr__(self) -> str:
        return f'{type(self).__name__}("{addressing.format_bits(self)}")'


@final
class BitIterator:
    """Lazy iterator over the meaningful bits of a BitView.

    Stops at the padding of the final byte. Exhaustion is terminal, and the
    iterator releases its view as soon as it is exhausted.
    """

    def __init__(self, bits: BitView) -> None:
        self._bits = bits
        self._index = 0
        self._exhausted = False

    def __iter__(self) -> Iterator[bool]:
        return self

    def __next__(self) -> bool:
        if self._exhausted:
            raise StopIteration
        raw, padding = self._bits.as_padded_bytes()
        byte_index, offset = addressing.locate(self._index)
        if byte_index >= len(raw) or addressing.is_padding(len(raw), padding, byte_index, offset):
            self._exhaust()
            raise StopIteration
        self._index += 1
        return addressing.bit_at(raw[byte_index], offset)

    def __length_hint__(self) -> int:
        if self._exhausted:
            return 0
        return max(self._bits.len_bits() - self._index, 0)

    def _exhaust(self) -> None:
        self._exhausted = True
        self._bits.release()
