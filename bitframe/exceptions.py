"""Exceptions raised by the binary frame codec."""


class BitFrameError(ValueError):
    """Base class for all codec failures."""


class InvalidGeometryError(BitFrameError):
    """Rows/columns are non-positive or inconsistent with the sequence."""


class EmptySequenceError(BitFrameError):
    """Encode was called with zero frames."""


class IndexOutOfBoundsError(BitFrameError, IndexError):
    """A frame index is not smaller than the frame count."""


class OutOfRangeError(BitFrameError):
    """A frame's byte range runs past the end of the buffer.

    Signals a truncated or corrupt buffer, or geometry that does not
    describe it.
    """


class NonBinaryPixelDataError(BitFrameError):
    """Pixel values other than 0 and 1 were supplied."""
