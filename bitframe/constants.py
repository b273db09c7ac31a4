"""Constants for the binary frame codec."""

# Byte geometry
BITS_PER_BYTE = 8
BYTE_MASK = 0xFF

# Filler written after the last pixel bit and as the even-length pad byte
PAD_BYTE = 0x00

# Container rule: encoded pixel data must have an even byte length
EVEN_LENGTH_PADDING = True

# Worker count for the threaded encoder (None = sequential packing)
DEFAULT_WORKERS = None

# Pixel values allowed in a binary frame
BINARY_VALUES = (0, 1)
