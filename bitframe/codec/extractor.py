"""Frame extractor: reads one frame back out of an encoded buffer."""

import numpy as np

from ..bits.address import bit_offset_within_first_byte, byte_range_for
from ..bits.byte_ops import unpack_bits_u8
from ..exceptions import InvalidGeometryError, OutOfRangeError
from ..frame.types import PixelFrame


def extract(buffer, start_bit: int, pixel_count: int,
            rows: int, columns: int) -> PixelFrame:
    """
    Read ``pixel_count`` bits starting at ``start_bit`` as a frame.

    Works for any bit alignment of ``start_bit``; the buffer is not
    modified.

    Args:
        buffer: Encoded bytes-like object
        start_bit: Global bit index of the frame's first pixel
        pixel_count: Number of pixels in the frame
        rows: Frame rows
        columns: Frame columns

    Returns:
        PixelFrame of shape (rows, columns)

    Raises:
        InvalidGeometryError: If rows * columns != pixel_count or non-positive
        OutOfRangeError: If the frame's byte range exceeds the buffer
    """
    if rows <= 0 or columns <= 0 or rows * columns != pixel_count:
        raise InvalidGeometryError(
            f"Geometry {rows}x{columns} does not describe {pixel_count} pixels"
        )

    byte_start, byte_end = byte_range_for(start_bit, pixel_count)
    if byte_end > len(buffer):
        raise OutOfRangeError(
            f"Frame bytes [{byte_start}, {byte_end}) exceed buffer "
            f"length {len(buffer)}"
        )

    window = np.frombuffer(buffer, dtype=np.uint8, count=byte_end - byte_start,
                           offset=byte_start)
    offset = bit_offset_within_first_byte(start_bit)
    bits = unpack_bits_u8(window)[offset:offset + pixel_count]

    return PixelFrame._wrap(bits.reshape(rows, columns))
