"""Frame packer: appends one frame's pixels to a continuous bitstream."""

from typing import Tuple

import numpy as np

from ..bits.address import bit_offset_within_first_byte, byte_range_for, ceil_div
from ..bits.byte_ops import shift_left_u8, shift_right_u8
from ..constants import BITS_PER_BYTE
from ..frame.types import PixelFrame


def pack(buffer: bytearray, bit_cursor: int, frame: PixelFrame) -> int:
    """
    Append a frame's pixels to ``buffer`` starting at global bit ``bit_cursor``.

    Pixels are consumed row-major, one bit each, LSB-first into the current
    byte. The cursor is never rounded to a byte boundary, so a frame that
    does not end on a byte boundary shares its last byte with the next one.

    ``buffer`` must hold exactly ``ceil(bit_cursor / 8)`` bytes; when the
    cursor is mid-byte, the last byte holds the committed low bits and zeros
    above them.

    Args:
        buffer: Growing output buffer (modified in place)
        bit_cursor: Number of bits already committed
        frame: Frame to append

    Returns:
        The new bit cursor (``bit_cursor + frame.pixel_count``)

    Raises:
        ValueError: If ``buffer`` and ``bit_cursor`` disagree, or the partial
            last byte has bits set above the cursor
    """
    expected = ceil_div(bit_cursor, BITS_PER_BYTE)
    if len(buffer) != expected:
        raise ValueError(
            f"Buffer length mismatch for bit cursor {bit_cursor}. "
            f"Expected {expected} bytes, got {len(buffer)}"
        )

    filled = bit_offset_within_first_byte(bit_cursor)
    accumulator = 0
    if filled:
        uncommitted = shift_right_u8(buffer[-1], filled)
        if uncommitted:
            raise ValueError(
                f"Partial byte {buffer[-1]:#04x} has bits set above bit cursor "
                f"{bit_cursor}. Expected zeros above bit {filled - 1}"
            )
        accumulator = buffer.pop()

    for bit in frame.bits().tolist():
        accumulator |= shift_left_u8(bit, filled)
        filled += 1
        if filled == BITS_PER_BYTE:
            buffer.append(accumulator)
            accumulator = 0
            filled = 0

    # Partial byte: upper bits stay zero until the next frame fills them
    if filled:
        buffer.append(accumulator)

    return bit_cursor + frame.pixel_count


def pack_fragment(frame: PixelFrame, start_bit: int) -> Tuple[int, bytes]:
    """
    Pack one frame into the exact byte range it occupies.

    Needs no knowledge of other frames, so frames can be packed by
    independent workers. Bits of the first and last byte that belong to
    neighbouring frames are left zero; fragments are combined with OR.

    Args:
        frame: Frame to pack
        start_bit: Global bit index of the frame's first pixel

    Returns:
        (byte_start, fragment) where fragment covers
        ``byte_range_for(start_bit, frame.pixel_count)``
    """
    byte_start, byte_end = byte_range_for(start_bit, frame.pixel_count)
    lead = bit_offset_within_first_byte(start_bit)
    tail = (byte_end - byte_start) * BITS_PER_BYTE - lead - frame.pixel_count

    bits = np.concatenate([
        np.zeros(lead, dtype=np.uint8),
        frame.bits(),
        np.zeros(tail, dtype=np.uint8),
    ])
    fragment = np.packbits(bits, bitorder='little')

    return byte_start, fragment.tobytes()
