"""Bit address arithmetic for continuously packed frames.

All functions are pure integer arithmetic. Python integers do not
overflow, so very large pixel counts are handled exactly. Inputs are
assumed to be validated by the caller.
"""

from typing import Tuple

from ..constants import BITS_PER_BYTE


def ceil_div(numerator: int, denominator: int) -> int:
    """Integer ceiling division without going through floats."""
    return -(-numerator // denominator)


def start_bit_of(frame_index: int, pixels_per_frame: int) -> int:
    """Global bit index of the first pixel of a frame."""
    return frame_index * pixels_per_frame


def byte_range_for(start_bit: int, bit_count: int) -> Tuple[int, int]:
    """
    Half-open byte range ``[first, last)`` touched by a run of bits.

    The upper bound is rounded up, so a run that ends part-way through a
    byte still includes that byte.

    Args:
        start_bit: Global index of the first bit
        bit_count: Number of bits in the run

    Returns:
        (byte_start, byte_end) tuple
    """
    byte_start = start_bit // BITS_PER_BYTE
    byte_end = ceil_div(start_bit + bit_count, BITS_PER_BYTE)
    return byte_start, byte_end


def bit_offset_within_first_byte(start_bit: int) -> int:
    """Position (0 = LSB) of ``start_bit`` inside its byte."""
    return start_bit % BITS_PER_BYTE
