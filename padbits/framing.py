"""Length-prefixed wire format shared by BitSequence and BitView.

A frame is one padding byte followed by the packed data bytes. There is no
length field; the data runs to the end of the input.
"""

import logging

from padbits._addressing import MAX_PADDING, as_byte_view, is_valid_padding
from padbits.errors import DecodeError

logger = logging.getLogger(__name__)

HEADER_LEN = 1


def write_frame(buf: bytearray, raw: bytes | memoryview, padding: int) -> bytearray:
    """Append a frame for ``raw``/``padding`` to ``buf`` and return ``buf``."""
    if not isinstance(buf, bytearray):
        raise TypeError(f"serialize needs a bytearray to append to, got {type(buf).__name__}")
    buf.append(padding)
    buf += raw
    return buf


def split_frame(data: bytes | bytearray | memoryview, strict: bool = True) -> tuple[int, memoryview]:
    """Split a frame into its padding and a zero-copy view of the data bytes.

    With ``strict`` set, a padding outside ``[0, 7]`` or a nonzero padding
    with no data bytes is rejected. Otherwise any padding byte is returned
    verbatim, and bit counts derived from it may be meaningless.
    """
    view = as_byte_view(data)
    if len(view) < HEADER_LEN:
        raise DecodeError("cannot decode bits from empty input: missing padding byte")

    padding = view[0]
    raw = view[HEADER_LEN:]
    if not is_valid_padding(len(raw), padding):
        if strict:
            raise DecodeError(
                f"invalid padding {padding} for {len(raw)} data byte(s); "
                f"expected 0..{MAX_PADDING}, and 0 when there is no data"
            )
        logger.debug("accepting out-of-range padding %d for %d data byte(s)", padding, len(raw))
    return padding, raw
