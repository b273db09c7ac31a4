#!/usr/bin/env python3
"""
Run packing experiments for the binary frame codec.

Times sequential and threaded encoding plus per-frame random-access
decoding over synthetic segmentation volumes, and writes
results/packing_metrics.json.
"""

import sys
import os
import json
import time
from datetime import datetime

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import numpy as np

from bitframe.codec import encode, decode, encoded_length, inspect_buffer
from bitframe.metrics import (
    calculate_bits_per_pixel,
    calculate_packing_efficiency,
    calculate_compression_ratio,
    count_pixel_mismatches,
)

# (frames, rows, columns); 187x239 frames do not end on a byte boundary
GEOMETRIES = [
    (10, 64, 64),
    (20, 187, 239),
    (50, 33, 17),
    (8, 512, 512),
]


def create_segmentation_volume(num_frames, rows, columns, seed=42):
    """
    Create a binary volume resembling a segmented organ.

    An ellipse whose size changes smoothly across frames.
    """
    np.random.seed(seed)
    y, x = np.ogrid[:rows, :columns]
    cy, cx = rows / 2, columns / 2

    volume = np.zeros((num_frames, rows, columns), dtype=np.uint8)
    for i in range(num_frames):
        scale = 0.2 + 0.15 * np.sin(np.pi * (i + 1) / (num_frames + 1))
        ry, rx = max(1.0, rows * scale), max(1.0, columns * scale)
        mask = ((y - cy) / ry)**2 + ((x - cx) / rx)**2 <= 1.0
        speckle = np.random.random_sample((rows, columns)) < 0.01
        volume[i] = (mask ^ speckle).astype(np.uint8)

    return volume


def run_experiment(volume, workers):
    """Encode, decode every frame, and collect metrics."""
    n, rows, columns = volume.shape

    start = time.time()
    sequential = encode(volume)
    t_seq = time.time() - start

    start = time.time()
    threaded = encode(volume, workers=workers)
    t_par = time.time() - start

    start = time.time()
    decoded = np.stack([
        decode(sequential, n, rows, columns, i).array for i in range(n)
    ])
    t_dec = time.time() - start

    info = inspect_buffer(sequential, n, rows, columns)

    return {
        'frames': n,
        'rows': rows,
        'columns': columns,
        'pixels_per_frame': rows * columns,
        'frame_bit_residue': (rows * columns) % 8,
        'encoded_bytes': len(sequential),
        'expected_bytes': encoded_length(n, rows, columns),
        'bpp': calculate_bits_per_pixel(len(sequential), volume.size),
        'packing_efficiency': calculate_packing_efficiency(info['total_bits'], len(sequential)),
        'compression_ratio': calculate_compression_ratio(volume.size, len(sequential)),
        'trailing_pad_bits': info['trailing_pad_bits'],
        'has_pad_byte': info['has_pad_byte'],
        'threaded_identical': threaded == sequential,
        'pixel_mismatches': count_pixel_mismatches(volume, decoded),
        'encode_seconds': t_seq,
        'threaded_encode_seconds': t_par,
        'decode_seconds': t_dec,
    }


def main():
    """Run all experiments."""
    print("=" * 60)
    print("BINARY FRAME PACKING EXPERIMENTS")
    print("=" * 60)

    results_dir = "results"
    os.makedirs(results_dir, exist_ok=True)

    workers = max(2, (os.cpu_count() or 2) - 1)
    print(f"\nThreaded encoder workers: {workers}")

    all_results = []
    failed = False
    for n, rows, columns in GEOMETRIES:
        print(f"\n--- {n} frames of {rows}x{columns} ---")

        volume = create_segmentation_volume(n, rows, columns)
        result = run_experiment(volume, workers)
        all_results.append(result)

        print(f"  Size:       {result['encoded_bytes']:,} bytes "
              f"(expected {result['expected_bytes']:,})")
        print(f"  BPP:        {result['bpp']:.4f}")
        print(f"  CR:         {result['compression_ratio']:.2f}x")
        print(f"  Pad bits:   {result['trailing_pad_bits']}, "
              f"pad byte: {result['has_pad_byte']}")
        print(f"  Encode:     {result['encode_seconds']:.3f}s "
              f"(threaded {result['threaded_encode_seconds']:.3f}s)")
        print(f"  Decode:     {result['decode_seconds']:.3f}s")

        if (result['pixel_mismatches'] or not result['threaded_identical']
                or result['encoded_bytes'] != result['expected_bytes']):
            print("  ❌ Roundtrip check failed")
            failed = True
        else:
            print("  ✓ Roundtrip verified")

    output = {
        "experiment_date": datetime.now().isoformat(),
        "codec_info": {
            "bits_per_pixel": 1,
            "bit_order": "LSB first",
            "frame_layout": "continuous, no inter-frame padding",
            "even_length_padding": True,
        },
        "results": all_results,
    }

    output_path = os.path.join(results_dir, "packing_metrics.json")
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(output, f, indent=2, ensure_ascii=False)

    print("\n" + "=" * 60)
    print("EXPERIMENT COMPLETE")
    print("=" * 60)
    print(f"\nResults saved to: {output_path}")

    print("\n" + "-" * 60)
    print("SUMMARY TABLE")
    print("-" * 60)
    print(f"{'Frames':>7} {'Shape':>10} {'Bytes':>10} {'BPP':>8} {'Enc (s)':>9} {'Dec (s)':>9}")
    print("-" * 60)
    for r in all_results:
        shape = f"{r['rows']}x{r['columns']}"
        print(f"{r['frames']:>7} {shape:>10} {r['encoded_bytes']:>10,} "
              f"{r['bpp']:>8.4f} {r['encode_seconds']:>9.3f} {r['decode_seconds']:>9.3f}")
    print("-" * 60)

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
