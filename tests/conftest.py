"""Shared fixtures for the binary frame codec tests."""

import os
import sys

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np
import pytest


def create_binary_volume(num_frames=4, rows=16, columns=16, seed=42):
    """
    Create a synthetic segmentation-like binary volume.

    A disc whose radius drifts across frames, plus sparse noise, so
    adjacent frames differ.
    """
    rng = np.random.RandomState(seed)
    y, x = np.ogrid[:rows, :columns]
    center = (rows // 2, columns // 2)

    volume = np.zeros((num_frames, rows, columns), dtype=np.uint8)
    for i in range(num_frames):
        radius = max(1, min(rows, columns) // 4 + (i % 3) - 1)
        mask = (y - center[0])**2 + (x - center[1])**2 <= radius**2
        noise = rng.random_sample((rows, columns)) < 0.05
        volume[i] = (mask ^ noise).astype(np.uint8)

    return volume


@pytest.fixture()
def binary_volume():
    return create_binary_volume()


@pytest.fixture()
def random_volume_fn():
    """Factory for uniformly random 0/1 volumes."""
    def _make(num_frames, rows, columns, seed=0):
        rng = np.random.RandomState(seed)
        return rng.randint(0, 2, (num_frames, rows, columns)).astype(np.uint8)
    return _make
