"""Bit-addressing arithmetic shared by BitSequence and BitView.

Bits are numbered MSB-first: bit ``i`` of a sequence lives in byte ``i // 8``
at mask ``1 << (7 - i % 8)``. The final byte may carry up to seven padding
bits at its low-order end.
"""

from typing import Iterable, Literal

BITS_PER_BYTE = 8
MAX_PADDING = BITS_PER_BYTE - 1

Bit = bool | Literal[0, 1]
Bits = str | Iterable[Bit]


def least_bytes_repr_for_bits(bit_count: int) -> int:
    """Number of bytes needed to hold ``bit_count`` bits."""
    return bit_count // BITS_PER_BYTE + (bit_count % BITS_PER_BYTE != 0)


def padding_for_bits(bit_count: int) -> int:
    """Padding left in the final byte once ``bit_count`` bits are packed."""
    return -bit_count % BITS_PER_BYTE


def len_bits(byte_count: int, padding: int) -> int:
    return byte_count * BITS_PER_BYTE - padding


def is_valid_padding(byte_count: int, padding: int) -> bool:
    if byte_count == 0:
        return padding == 0
    return 0 <= padding <= MAX_PADDING


def locate(index: int) -> tuple[int, int]:
    """Split a bit index into ``(byte_index, offset_from_msb)``."""
    return divmod(index, BITS_PER_BYTE)


def is_padding(byte_count: int, padding: int, byte_index: int, offset: int) -> bool:
    """True when the addressed bit falls in the padding of the last byte."""
    return byte_index == byte_count - 1 and offset >= BITS_PER_BYTE - padding


def bit_at(byte: int, offset: int) -> bool:
    return byte & (1 << (MAX_PADDING - offset)) != 0


def leading_bit(bit: bool) -> int:
    """A fresh byte whose most significant bit holds ``bit``."""
    return int(bit) << MAX_PADDING


def free_slot_mask(bit: bool, padding: int) -> int:
    """Mask writing ``bit`` into the first free slot of a byte with ``padding`` free bits."""
    return int(bit) << (padding - 1)


def meaningful_bits(raw: bytes | memoryview, padding: int) -> tuple[int, int]:
    """Return the meaningful bits of ``raw`` as ``(value, count)``.

    Padding bits are shifted out, so whatever they contain never reaches
    ``value``.
    """
    count = len_bits(len(raw), padding)
    if count <= 0:
        return 0, 0
    return int.from_bytes(raw, "big") >> padding, count


def pack_bits(value: int, count: int) -> tuple[bytes, int]:
    """Pack the low ``count`` bits of ``value`` MSB-first into ``(bytes, padding)``."""
    padding = padding_for_bits(count)
    data = (value << padding).to_bytes(least_bytes_repr_for_bits(count), "big")
    return data, padding


def coerce_bit(value: object) -> bool:
    """Interpret one element of a ``Bits`` value.

    Accepts ``bool``, the integers ``0``/``1`` and the characters ``'0'``/``'1'``.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return value == 1
    if isinstance(value, str) and value in ("0", "1"):
        return value == "1"
    raise ValueError(f"expected a bit (bool, 0/1 or '0'/'1'), got {value!r}")


def format_bits(bits: Iterable[bool]) -> str:
    return "".join("1" if bit else "0" for bit in bits)


def as_byte_view(data: bytes | bytearray | memoryview) -> memoryview:
    """A read-only, one-dimensional unsigned-byte view of ``data`` without copying."""
    view = memoryview(data)
    if not view.c_contiguous:
        raise ValueError("bits must be stored in a C-contiguous buffer")
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    return view.toreadonly()
