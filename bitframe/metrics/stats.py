"""Packing statistics for encoded binary frame sequences."""

import numpy as np

from ..constants import BITS_PER_BYTE
from ..frame.types import FrameSequence, PixelFrame


def _as_array(frames) -> np.ndarray:
    if isinstance(frames, PixelFrame):
        return frames.array
    if isinstance(frames, FrameSequence):
        return frames.to_array()
    return np.asarray(frames)


def calculate_bits_per_pixel(encoded_size: int, pixel_count: int) -> float:
    """
    Calculate stored bits per pixel.

    Args:
        encoded_size: Size of encoded data in bytes
        pixel_count: Total number of pixels across all frames

    Returns:
        BPP value (1.0 plus padding overhead)
    """
    if pixel_count == 0:
        return 0.0
    return (encoded_size * BITS_PER_BYTE) / pixel_count


def calculate_packing_efficiency(total_bits: int, encoded_size: int) -> float:
    """Fraction of stored bits that carry pixel data."""
    if encoded_size == 0:
        return 0.0
    return total_bits / (encoded_size * BITS_PER_BYTE)


def calculate_compression_ratio(pixel_count: int, encoded_size: int) -> float:
    """
    Ratio of one-byte-per-pixel storage to the packed size.

    Args:
        pixel_count: Total number of pixels
        encoded_size: Size of encoded data in bytes

    Returns:
        Compression ratio (close to 8 for large sequences)
    """
    if encoded_size == 0:
        return float('inf')
    return pixel_count / encoded_size


def count_pixel_mismatches(original, decoded) -> int:
    """
    Count pixels that differ between two frames, sequences or arrays.

    Raises:
        ValueError: If the shapes differ
    """
    a = _as_array(original)
    b = _as_array(decoded)
    if a.shape != b.shape:
        raise ValueError(f"Shape mismatch: {a.shape} vs {b.shape}")
    return int(np.count_nonzero(a.astype(np.uint8) != b.astype(np.uint8)))
