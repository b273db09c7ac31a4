"""Frame data model for the binary frame codec."""

from .types import PixelFrame, FrameSequence, FrameWindow

__all__ = [
    'PixelFrame',
    'FrameSequence',
    'FrameWindow',
]
