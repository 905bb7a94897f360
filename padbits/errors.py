class DecodeError(ValueError):
    """Serialized bits could not be decoded.

    Raised for empty input, and in strict mode for a padding byte that is
    out of range for the data that follows it.
    """


class BorrowError(BufferError):
    """A BitSequence was mutated while a view of its storage was alive.

    Release the view (``view.release()`` or leave its ``with`` block) and
    drop any iterators created from it before mutating the sequence.
    """
