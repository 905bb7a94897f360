"""Growable bit sequences packed MSB-first into bytes, with zero-copy views.

Examples:
    >>> from padbits import BitSequence
    >>> bits = BitSequence([True, False, True])
    >>> with bits.as_bit_view() as view:
    ...     view.serialize()
    b'\\x05\\xa0'
"""

from padbits._addressing import Bits, least_bytes_repr_for_bits
from padbits.errors import BorrowError, DecodeError
from padbits.sequence import BitSequence
from padbits.view import BitIterator, BitView

__version__ = "0.1.0"

__all__ = [
    "BitIterator",
    "BitSequence",
    "BitView",
    "Bits",
    "BorrowError",
    "DecodeError",
    "least_bytes_repr_for_bits",
]
