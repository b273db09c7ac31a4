"""Checkpoint 3: Frame Packer."""

import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
import pytest

from bitframe.codec import pack, pack_fragment
from bitframe.frame import PixelFrame


def test_pack_single_frame_lsb_first():
    """First pixel lands in bit 0 of the first byte."""
    print("=" * 60)
    print("Test 1: LSB-first Packing")
    print("=" * 60)

    buffer = bytearray()
    cursor = pack(buffer, 0, PixelFrame([[1, 0, 1]]))

    assert cursor == 3
    assert buffer == bytearray([0b00000101])
    print(f"   ✓ Packed bytes: {buffer.hex()}")


def test_pack_continues_mid_byte():
    """Frames share bytes; the cursor is never rounded to a byte."""
    print("\n" + "=" * 60)
    print("Test 2: Continuous Packing Across Frames")
    print("=" * 60)

    ones = PixelFrame([[1, 1, 1]])
    buffer = bytearray()

    cursor = pack(buffer, 0, PixelFrame([[1, 0, 1]]))
    cursor = pack(buffer, cursor, ones)
    assert cursor == 6
    assert buffer == bytearray([0x3D])

    cursor = pack(buffer, cursor, ones)
    assert cursor == 9
    assert buffer == bytearray([0xFD, 0x01])
    print(f"   ✓ Packed bytes: {buffer.hex()}, cursor={cursor}")


def test_pack_row_major():
    frame = PixelFrame([[1, 0, 0, 0],
                        [0, 0, 0, 1]])
    buffer = bytearray()
    pack(buffer, 0, frame)
    assert buffer == bytearray([0b10000001])


def test_pack_full_bytes():
    frame = PixelFrame(np.ones((2, 8), dtype=np.uint8))
    buffer = bytearray()
    assert pack(buffer, 0, frame) == 16
    assert buffer == bytearray([0xFF, 0xFF])


def test_pack_rejects_inconsistent_cursor():
    frame = PixelFrame([[1]])
    with pytest.raises(ValueError):
        pack(bytearray(b'\x00'), 0, frame)
    with pytest.raises(ValueError):
        pack(bytearray(), 3, frame)


def test_pack_rejects_dirty_partial_byte():
    """Bits above the cursor in the resumed byte must be zero."""
    buffer = bytearray([0xFF])
    with pytest.raises(ValueError):
        pack(buffer, 3, PixelFrame([[0, 0]]))
    # Rejected before the buffer is touched
    assert buffer == bytearray([0xFF])

    buffer = bytearray([0b00001000])
    with pytest.raises(ValueError):
        pack(buffer, 3, PixelFrame([[1]]))

    # Only committed low bits set: packing resumes normally
    buffer = bytearray([0b00000111])
    assert pack(buffer, 3, PixelFrame([[0, 1]])) == 5
    assert buffer == bytearray([0b00010111])


def test_pack_fragment_offsets():
    """A fragment covers only the bytes its frame touches."""
    print("\n" + "=" * 60)
    print("Test 3: Stateless Fragments")
    print("=" * 60)

    start, fragment = pack_fragment(PixelFrame([[1, 1, 1]]), 6)
    assert start == 0
    assert fragment == bytes([0xC0, 0x01])

    start, fragment = pack_fragment(PixelFrame([[1, 0, 1]]), 0)
    assert start == 0
    assert fragment == bytes([0x05])

    start, fragment = pack_fragment(PixelFrame([[1]]), 17)
    assert start == 2
    assert fragment == bytes([0x02])
    print("   ✓ Fragments are offset and zero outside the frame")


def test_pack_fragment_matches_pack(random_volume_fn):
    """OR-merged fragments reproduce the sequential buffer."""
    volume = random_volume_fn(5, 3, 7, seed=3)
    frames = [PixelFrame(v) for v in volume]

    buffer = bytearray()
    cursor = 0
    for frame in frames:
        cursor = pack(buffer, cursor, frame)

    merged = bytearray(len(buffer))
    for i, frame in enumerate(frames):
        start, fragment = pack_fragment(frame, i * 21)
        for k, value in enumerate(fragment):
            merged[start + k] |= value

    assert merged == buffer


def main():
    """Run Checkpoint 3 tests."""
    return pytest.main([__file__, "-v"])


if __name__ == "__main__":
    sys.exit(main())
