"""Binary pixel frames, frame sequences and frame windows."""

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple, Union

import numpy as np

from ..bits.address import byte_range_for, bit_offset_within_first_byte, start_bit_of
from ..constants import BINARY_VALUES
from ..exceptions import (
    EmptySequenceError,
    InvalidGeometryError,
    NonBinaryPixelDataError,
)


def _check_geometry(rows: int, columns: int) -> None:
    if rows <= 0 or columns <= 0:
        raise InvalidGeometryError(
            f"Rows and columns must be positive, got {rows}x{columns}"
        )


class PixelFrame:
    """
    One immutable 2-D plane of 1-bit pixels.

    Values are stored row-major as a read-only uint8 array holding only
    0 and 1.
    """

    __slots__ = ('_array',)

    def __init__(self, pixels):
        """
        Build a frame from a 2-D array-like of 0/1 values.

        Args:
            pixels: 2-D array-like (bool or numeric)

        Raises:
            InvalidGeometryError: If not 2-D or a dimension is zero
            NonBinaryPixelDataError: If any value is not 0 or 1
        """
        arr = np.asarray(pixels)
        if arr.ndim != 2:
            raise InvalidGeometryError(f"Expected 2D frame, got {arr.ndim}D")
        _check_geometry(*arr.shape)

        if arr.dtype != np.bool_ and not np.isin(arr, BINARY_VALUES).all():
            raise NonBinaryPixelDataError(
                "Only binary frames (containing ones or zeroes) can be packed"
            )

        arr = np.array(arr, dtype=np.uint8)
        arr.flags.writeable = False
        self._array = arr

    @classmethod
    def _wrap(cls, arr: np.ndarray) -> 'PixelFrame':
        # arr must already be a 2-D uint8 array of 0/1 values
        frame = cls.__new__(cls)
        arr.flags.writeable = False
        frame._array = arr
        return frame

    @property
    def rows(self) -> int:
        return self._array.shape[0]

    @property
    def columns(self) -> int:
        return self._array.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self._array.shape

    @property
    def pixel_count(self) -> int:
        return self._array.size

    @property
    def array(self) -> np.ndarray:
        """Read-only (rows, columns) uint8 view of the pixels."""
        return self._array

    def bits(self) -> np.ndarray:
        """Pixels flattened in row-major order."""
        return self._array.reshape(-1)

    def __eq__(self, other):
        if not isinstance(other, PixelFrame):
            return NotImplemented
        return self.shape == other.shape and np.array_equal(self._array, other._array)

    def __hash__(self):
        return hash((self.shape, self._array.tobytes()))

    def __repr__(self):
        return f"PixelFrame(rows={self.rows}, columns={self.columns})"


class FrameSequence:
    """
    Ordered, non-empty run of frames sharing one (rows, columns) shape.
    """

    __slots__ = ('_frames', '_rows', '_columns')

    def __init__(self, frames: Iterable[Union[PixelFrame, np.ndarray]],
                 rows: Optional[int] = None, columns: Optional[int] = None):
        """
        Args:
            frames: PixelFrame objects or 2-D array-likes
            rows: Declared row count (defaults to the first frame's)
            columns: Declared column count (defaults to the first frame's)

        Raises:
            EmptySequenceError: If no frames are given
            InvalidGeometryError: If shapes differ or are non-positive
        """
        frames = tuple(
            f if isinstance(f, PixelFrame) else PixelFrame(f) for f in frames
        )
        if not frames:
            raise EmptySequenceError("A frame sequence needs at least one frame")

        if rows is None:
            rows = frames[0].rows
        if columns is None:
            columns = frames[0].columns
        _check_geometry(rows, columns)

        for i, frame in enumerate(frames):
            if frame.shape != (rows, columns):
                raise InvalidGeometryError(
                    f"Frame {i} shape mismatch. Expected {(rows, columns)}, "
                    f"got {frame.shape}"
                )

        self._frames = frames
        self._rows = rows
        self._columns = columns

    @classmethod
    def from_array(cls, volume) -> 'FrameSequence':
        """Build a sequence from a (frames, rows, columns) array."""
        volume = np.asarray(volume)
        if volume.ndim != 3:
            raise InvalidGeometryError(f"Expected 3D volume, got {volume.ndim}D")
        if volume.shape[0] == 0:
            raise EmptySequenceError("A frame sequence needs at least one frame")
        _check_geometry(volume.shape[1], volume.shape[2])
        return cls([volume[i] for i in range(volume.shape[0])])

    def to_array(self) -> np.ndarray:
        """Stack all frames into a (frames, rows, columns) uint8 array."""
        return np.stack([f.array for f in self._frames])

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def pixels_per_frame(self) -> int:
        return self._rows * self._columns

    @property
    def frame_count(self) -> int:
        return len(self._frames)

    @property
    def total_bits(self) -> int:
        return self.frame_count * self.pixels_per_frame

    def __len__(self):
        return len(self._frames)

    def __iter__(self) -> Iterator[PixelFrame]:
        return iter(self._frames)

    def __getitem__(self, index) -> PixelFrame:
        return self._frames[index]

    def __eq__(self, other):
        if not isinstance(other, FrameSequence):
            return NotImplemented
        return self._frames == other._frames

    __hash__ = None

    def __repr__(self):
        return (f"FrameSequence(frames={self.frame_count}, "
                f"rows={self._rows}, columns={self._columns})")


@dataclass(frozen=True)
class FrameWindow:
    """Where one frame's bits live inside an encoded buffer."""

    start_bit: int
    bit_count: int

    @classmethod
    def for_frame(cls, frame_index: int, pixels_per_frame: int) -> 'FrameWindow':
        return cls(start_bit_of(frame_index, pixels_per_frame), pixels_per_frame)

    @property
    def end_bit(self) -> int:
        return self.start_bit + self.bit_count

    @property
    def byte_start(self) -> int:
        return byte_range_for(self.start_bit, self.bit_count)[0]

    @property
    def byte_end(self) -> int:
        return byte_range_for(self.start_bit, self.bit_count)[1]

    @property
    def bit_offset(self) -> int:
        return bit_offset_within_first_byte(self.start_bit)
