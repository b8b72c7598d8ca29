"""Pixel channel access for the classroom ray tracer.

This package reads and writes single pixels of an image buffer whose colors
are stored as 32-bit packed ARGB integers, with support for:
- Encoding and decoding the alpha, red, green and blue channels
- Clamped per-channel writes through a Pixel view
- Conversion between packed buffers, NumPy arrays, Pillow images and
  Taichi color fields

Subpackages:
    color: Channel codec, Pixel view and packed image buffer
"""

__version__ = "0.1.0"
