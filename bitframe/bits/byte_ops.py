"""Shift helpers that keep every intermediate value 8 bits wide.

Python integers widen without limit on a left shift, so any byte that is
shifted left must be masked back to 8 bits before it is shifted right or
combined with another byte. All bit-level packing goes through these
helpers.
"""

import numpy as np

from ..constants import BITS_PER_BYTE, BYTE_MASK

# Bit positions 0..7 of a byte, LSB first
_BIT_POSITIONS = np.arange(BITS_PER_BYTE, dtype=np.uint8)


def truncate_u8(value: int) -> int:
    """Keep only the low 8 bits of ``value``."""
    return value & BYTE_MASK


def shift_left_u8(value: int, amount: int) -> int:
    """Left shift in 8-bit unsigned arithmetic."""
    return truncate_u8(truncate_u8(value) << amount)


def shift_right_u8(value: int, amount: int) -> int:
    """Right shift in 8-bit unsigned arithmetic."""
    return truncate_u8(value) >> amount


def read_bit(buffer, global_bit: int) -> int:
    """
    Read one LSB-first bit from a byte buffer.

    Args:
        buffer: bytes-like object
        global_bit: Bit index counted from the start of the buffer

    Returns:
        0 or 1
    """
    byte_index, bit_index = divmod(global_bit, BITS_PER_BYTE)
    return shift_right_u8(buffer[byte_index], bit_index) & 1


def unpack_bits_u8(window: np.ndarray) -> np.ndarray:
    """
    Expand bytes into their bits, LSB first, in uint8 arithmetic.

    Args:
        window: 1-D uint8 array of bytes

    Returns:
        1-D uint8 array of 0/1 values, 8 per input byte
    """
    window = np.asarray(window, dtype=np.uint8)
    # uint8 >> uint8 stays uint8, so no bits from outside a byte can leak in
    return ((window[:, None] >> _BIT_POSITIONS) & np.uint8(1)).reshape(-1)
