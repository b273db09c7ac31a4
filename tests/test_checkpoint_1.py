"""Checkpoint 1: Bit Address Arithmetic and 8-bit Shift Helpers."""

import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
import pytest

from bitframe.bits import (
    ceil_div,
    start_bit_of,
    byte_range_for,
    bit_offset_within_first_byte,
    truncate_u8,
    shift_left_u8,
    shift_right_u8,
    read_bit,
    unpack_bits_u8,
)


def test_ceil_div():
    """Ceiling division is exact for every remainder."""
    print("=" * 60)
    print("Test 1: Ceiling Division")
    print("=" * 60)

    assert ceil_div(0, 8) == 0
    assert ceil_div(1, 8) == 1
    assert ceil_div(8, 8) == 1
    assert ceil_div(9, 8) == 2
    assert ceil_div(44693, 8) == 5587
    # Beyond float precision
    big = 2**70 + 1
    assert ceil_div(big, 8) == 2**67 + 1
    print("   ✓ ceil_div matches integer ceiling")


def test_start_bit_of():
    assert start_bit_of(0, 44693) == 0
    assert start_bit_of(1, 44693) == 44693
    assert start_bit_of(3, 9) == 27
    assert start_bit_of(10**6, 10**9) == 10**15


@pytest.mark.parametrize("start_bit, bit_count, expected", [
    (0, 8, (0, 1)),
    (0, 9, (0, 2)),
    (3, 3, (0, 1)),
    (6, 3, (0, 2)),
    (8, 1, (1, 2)),
    (0, 44693, (0, 5587)),
    (44693, 44693, (5586, 11174)),
])
def test_byte_range_for(start_bit, bit_count, expected):
    """Upper bound is always rounded up."""
    assert byte_range_for(start_bit, bit_count) == expected


def test_bit_offset_within_first_byte():
    assert bit_offset_within_first_byte(0) == 0
    assert bit_offset_within_first_byte(7) == 7
    assert bit_offset_within_first_byte(8) == 0
    assert bit_offset_within_first_byte(44693) == 5


def test_shift_truncation():
    """0xFF << 4 >> 4 in 8-bit arithmetic gives 0x0F."""
    print("\n" + "=" * 60)
    print("Test 2: Shift Truncation")
    print("=" * 60)

    assert shift_right_u8(shift_left_u8(0xFF, 4), 4) == 0x0F
    # Unbounded Python ints keep the high bits
    assert (0xFF << 4) >> 4 == 0xFF
    print("   ✓ Left shift is truncated to 8 bits before right shift")


def test_byte_helpers():
    assert truncate_u8(0x1FF) == 0xFF
    assert truncate_u8(0x100) == 0x00
    assert shift_left_u8(1, 7) == 0x80
    assert shift_left_u8(1, 8) == 0x00
    assert shift_left_u8(0x81, 1) == 0x02
    assert shift_right_u8(0x180, 7) == 0x01


def test_read_bit_lsb_first():
    buffer = bytes([0b00000101, 0b10000000])
    bits = [read_bit(buffer, i) for i in range(16)]
    assert bits[:8] == [1, 0, 1, 0, 0, 0, 0, 0]
    assert bits[8:] == [0, 0, 0, 0, 0, 0, 0, 1]


def test_unpack_bits_u8():
    """Byte expansion is LSB first and never widens."""
    window = np.array([0x05, 0x80, 0xFF], dtype=np.uint8)
    bits = unpack_bits_u8(window)
    assert bits.dtype == np.uint8
    assert bits.tolist() == (
        [1, 0, 1, 0, 0, 0, 0, 0]
        + [0, 0, 0, 0, 0, 0, 0, 1]
        + [1] * 8
    )
    buffer = bytes(window)
    assert bits.tolist() == [read_bit(buffer, i) for i in range(24)]


def main():
    """Run Checkpoint 1 tests."""
    return pytest.main([__file__, "-v"])


if __name__ == "__main__":
    sys.exit(main())
