"""Packing statistics for the binary frame codec."""

from .stats import (
    calculate_bits_per_pixel,
    calculate_packing_efficiency,
    calculate_compression_ratio,
    count_pixel_mismatches,
)

__all__ = [
    'calculate_bits_per_pixel',
    'calculate_packing_efficiency',
    'calculate_compression_ratio',
    'count_pixel_mismatches',
]
