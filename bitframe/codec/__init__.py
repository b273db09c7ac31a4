"""Codec modules for binary frame sequences."""

from .packer import pack, pack_fragment
from .extractor import extract
from .sequence import (
    encode,
    decode,
    decode_frames,
    iter_frames,
    encoded_length,
    frame_window,
    inspect_buffer,
    SequenceEncoder,
    SequenceDecoder,
)

__all__ = [
    'pack',
    'pack_fragment',
    'extract',
    'encode',
    'decode',
    'decode_frames',
    'iter_frames',
    'encoded_length',
    'frame_window',
    'inspect_buffer',
    'SequenceEncoder',
    'SequenceDecoder',
]
