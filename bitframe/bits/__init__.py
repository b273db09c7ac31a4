"""Bit addressing and 8-bit byte operations."""

from .address import (
    ceil_div,
    start_bit_of,
    byte_range_for,
    bit_offset_within_first_byte,
)
from .byte_ops import (
    truncate_u8,
    shift_left_u8,
    shift_right_u8,
    read_bit,
    unpack_bits_u8,
)

__all__ = [
    'ceil_div',
    'start_bit_of',
    'byte_range_for',
    'bit_offset_within_first_byte',
    'truncate_u8',
    'shift_left_u8',
    'shift_right_u8',
    'read_bit',
    'unpack_bits_u8',
]
