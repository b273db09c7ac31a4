"""Sequence codec: encodes and decodes continuously packed binary frames."""

from concurrent.futures import ThreadPoolExecutor
from typing import Iterator, Optional, Union

import numpy as np

from ..bits.address import ceil_div, start_bit_of
from ..bits.byte_ops import shift_right_u8
from ..constants import BITS_PER_BYTE, DEFAULT_WORKERS, EVEN_LENGTH_PADDING, PAD_BYTE
from ..exceptions import IndexOutOfBoundsError, InvalidGeometryError, OutOfRangeError
from ..frame.types import FrameSequence, FrameWindow, PixelFrame
from .extractor import extract
from .packer import pack, pack_fragment


def _as_sequence(frames) -> FrameSequence:
    if isinstance(frames, FrameSequence):
        return frames
    if isinstance(frames, np.ndarray) and frames.ndim == 3:
        return FrameSequence.from_array(frames)
    return FrameSequence(frames)


def _check_geometry(frame_count: int, rows: int, columns: int) -> None:
    if frame_count <= 0:
        raise InvalidGeometryError(f"Frame count must be positive, got {frame_count}")
    if rows <= 0 or columns <= 0:
        raise InvalidGeometryError(
            f"Rows and columns must be positive, got {rows}x{columns}"
        )


def encoded_length(frame_count: int, rows: int, columns: int,
                   pad: bool = EVEN_LENGTH_PADDING) -> int:
    """
    Byte length of the encoded buffer for the given geometry.

    ``ceil(frame_count * rows * columns / 8)``, rounded up to an even
    count when ``pad`` is set.
    """
    _check_geometry(frame_count, rows, columns)
    length = ceil_div(frame_count * rows * columns, BITS_PER_BYTE)
    if pad and length % 2:
        length += 1
    return length


def frame_window(frame_index: int, rows: int, columns: int) -> FrameWindow:
    """Bit window of one frame; the index is not checked against a count."""
    if frame_index < 0:
        raise IndexOutOfBoundsError(f"Frame index must be non-negative, got {frame_index}")
    _check_geometry(1, rows, columns)
    return FrameWindow.for_frame(frame_index, rows * columns)


def _finish(buffer: bytearray, pad: bool) -> bytes:
    # Trailing bits of the last byte are already zero; only the pad byte remains
    if pad and len(buffer) % 2:
        buffer.append(PAD_BYTE)
    return bytes(buffer)


def _encode_sequential(sequence: FrameSequence) -> bytearray:
    buffer = bytearray()
    cursor = 0
    pixels_per_frame = sequence.pixels_per_frame

    for i, frame in enumerate(sequence):
        # Frames are laid end to end; the cursor must land on the index formula
        assert cursor == start_bit_of(i, pixels_per_frame)
        cursor = pack(buffer, cursor, frame)

    return buffer


def _encode_parallel(sequence: FrameSequence, workers: int) -> bytearray:
    pixels_per_frame = sequence.pixels_per_frame
    total = ceil_div(sequence.total_bits, BITS_PER_BYTE)
    out = np.zeros(total, dtype=np.uint8)

    def _job(index):
        return pack_fragment(sequence[index], start_bit_of(index, pixels_per_frame))

    with ThreadPoolExecutor(max_workers=workers) as ex:
        fragments = list(ex.map(_job, range(len(sequence))))

    # Merge pass: ranges are disjoint except one shared byte per frame boundary
    for byte_start, fragment in fragments:
        chunk = np.frombuffer(fragment, dtype=np.uint8)
        out[byte_start:byte_start + len(chunk)] |= chunk

    return bytearray(out.tobytes())


def encode(frames, workers: Optional[int] = DEFAULT_WORKERS,
           pad: bool = EVEN_LENGTH_PADDING) -> bytes:
    """
    Encode a sequence of binary frames into one continuous buffer.

    Args:
        frames: FrameSequence, list of frames / 2-D arrays, or a
                (frames, rows, columns) array
        workers: Pack frames on this many threads when > 1
        pad: Append a zero byte when the length is odd

    Returns:
        Encoded bytes

    Raises:
        EmptySequenceError: If there are no frames
        InvalidGeometryError: If frame shapes are non-positive or differ
        NonBinaryPixelDataError: If a pixel is not 0 or 1
    """
    sequence = _as_sequence(frames)

    if workers is not None and workers > 1 and len(sequence) > 1:
        buffer = _encode_parallel(sequence, workers)
    else:
        buffer = _encode_sequential(sequence)

    return _finish(buffer, pad)


def _check_index(frame_index: int, frame_count: int) -> None:
    if not 0 <= frame_index < frame_count:
        raise IndexOutOfBoundsError(
            f"Frame index {frame_index} out of bounds for {frame_count} frames"
        )


def decode(buffer, frame_count: int, rows: int, columns: int,
           frame_index: int) -> PixelFrame:
    """
    Extract a single frame from an encoded buffer.

    Frames are independently addressable; earlier frames are not decoded.

    Args:
        buffer: Encoded bytes-like object (not modified)
        frame_count: Number of frames in the buffer
        rows: Frame rows
        columns: Frame columns
        frame_index: Frame to extract (0-based)

    Returns:
        The frame's PixelFrame

    Raises:
        InvalidGeometryError: If frame_count, rows or columns are non-positive
        IndexOutOfBoundsError: If frame_index is not in [0, frame_count)
        OutOfRangeError: If the buffer is too short for that frame
    """
    _check_geometry(frame_count, rows, columns)
    _check_index(frame_index, frame_count)

    window = FrameWindow.for_frame(frame_index, rows * columns)
    return extract(buffer, window.start_bit, window.bit_count, rows, columns)


def iter_frames(buffer, frame_count: int, rows: int,
                columns: int) -> Iterator[PixelFrame]:
    """Lazily decode every frame in index order."""
    _check_geometry(frame_count, rows, columns)
    for i in range(frame_count):
        yield decode(buffer, frame_count, rows, columns, i)


def decode_frames(buffer, frame_count: int, rows: int, columns: int) -> FrameSequence:
    """Decode all frames of a buffer into a FrameSequence."""
    _check_geometry(frame_count, rows, columns)
    required = ceil_div(frame_count * rows * columns, BITS_PER_BYTE)
    if required > len(buffer):
        raise OutOfRangeError(
            f"Buffer too short for {frame_count} frames. "
            f"Expected at least {required} bytes, got {len(buffer)}"
        )
    return FrameSequence(list(iter_frames(buffer, frame_count, rows, columns)))


def inspect_buffer(buffer, frame_count: int, rows: int, columns: int) -> dict:
    """
    Describe the padding of an encoded buffer.

    Informative only: pad values from other producers are reported, never
    rejected.

    Returns:
        Dictionary with 'total_bits', 'payload_bytes', 'padded_bytes',
        'trailing_pad_bits', 'has_pad_byte', 'pad_bits_are_zero'
    """
    _check_geometry(frame_count, rows, columns)
    total_bits = frame_count * rows * columns
    payload_bytes = ceil_div(total_bits, BITS_PER_BYTE)
    if payload_bytes > len(buffer):
        raise OutOfRangeError(
            f"Buffer too short. Expected at least {payload_bytes} bytes, "
            f"got {len(buffer)}"
        )

    trailing = payload_bytes * BITS_PER_BYTE - total_bits
    pad_zero = all(b == PAD_BYTE for b in bytes(buffer[payload_bytes:]))
    if trailing:
        used = BITS_PER_BYTE - trailing
        pad_zero = pad_zero and shift_right_u8(buffer[payload_bytes - 1], used) == 0

    return {
        'total_bits': total_bits,
        'payload_bytes': payload_bytes,
        'padded_bytes': len(buffer),
        'trailing_pad_bits': trailing,
        'has_pad_byte': len(buffer) > payload_bytes,
        'pad_bits_are_zero': pad_zero,
    }


class SequenceEncoder:
    """
    Encoder for multi-frame binary pixel data.

    Pipeline:
    1. Validate frames (binary values, one shared shape)
    2. Pack each frame at bit ``index * rows * columns``
    3. Zero the trailing bits of the last byte
    4. Pad to an even byte length
    """

    def __init__(self, workers: Optional[int] = DEFAULT_WORKERS,
                 pad: bool = EVEN_LENGTH_PADDING):
        self.workers = workers
        self.pad = pad

    def encode(self, frames) -> bytes:
        return encode(frames, workers=self.workers, pad=self.pad)


class SequenceDecoder:
    """
    Random-access decoder bound to one encoded buffer and its geometry.

    The geometry cannot be recovered from the buffer and must come from the
    surrounding metadata.
    """

    def __init__(self, buffer: Union[bytes, bytearray, memoryview],
                 frame_count: int, rows: int, columns: int):
        """
        Raises:
            InvalidGeometryError: If the geometry is non-positive
            OutOfRangeError: If the buffer cannot hold frame_count frames
        """
        _check_geometry(frame_count, rows, columns)
        required = ceil_div(frame_count * rows * columns, BITS_PER_BYTE)
        if required > len(buffer):
            raise OutOfRangeError(
                f"Buffer too short for {frame_count} frames. "
                f"Expected at least {required} bytes, got {len(buffer)}"
            )

        self.buffer = bytes(buffer)
        self.frame_count = frame_count
        self.rows = rows
        self.columns = columns

    def frame(self, frame_index: int) -> PixelFrame:
        return decode(self.buffer, self.frame_count, self.rows, self.columns,
                      frame_index)

    def frames(self) -> FrameSequence:
        return decode_frames(self.buffer, self.frame_count, self.rows, self.columns)

    def __getitem__(self, frame_index: int) -> PixelFrame:
        return self.frame(frame_index)

    def __len__(self):
        return self.frame_count

    def __iter__(self) -> Iterator[PixelFrame]:
        return iter_frames(self.buffer, self.frame_count, self.rows, self.columns)

    def get_info(self) -> dict:
        """Padding summary of the bound buffer (see ``inspect_buffer``)."""
        return inspect_buffer(self.buffer, self.frame_count, self.rows, self.columns)
