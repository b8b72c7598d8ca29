"""Color module for packed pixel access.

This module reads and writes the alpha, red, green and blue channels of
individual pixels stored as 32-bit packed ARGB integers:

Components:
    channels: Channel layout, clamping, and scalar/NumPy/Taichi codecs
    pixel: Pixel view bound to a buffer location, and set_channel
    buffer: PackedPixelBuffer protocol and the NumPy-backed PackedImageBuffer

Example:
    >>> from src.python.color import Channel, PackedImageBuffer
    >>> buffer = PackedImageBuffer(8, 8)
    >>> pixel = buffer.pixel(3, 4)
    >>> pixel.update_picture(255, 10, 20, 30)
    >>> pixel.set_blue(99)
    >>> str(pixel)
    'Pixel red=10 green=20 blue=99'
"""

from .buffer import (
    MAX_IMAGE_HEIGHT,
    MAX_IMAGE_WIDTH,
    PackedImageBuffer,
    PackedPixelBuffer,
    PixelIndexError,
)
from .channels import (
    CHANNEL_MASK,
    OPAQUE_ALPHA,
    Channel,
    clamp,
    decode_channel,
    encode,
    pack_rgba_array,
    unpack,
    unpack_rgba_array,
)
from .pixel import Pixel, get_channel, set_channel

__all__ = [
    # Channel codec
    "Channel",
    "CHANNEL_MASK",
    "OPAQUE_ALPHA",
    "clamp",
    "decode_channel",
    "encode",
    "unpack",
    "pack_rgba_array",
    "unpack_rgba_array",
    # Pixel access
    "Pixel",
    "get_channel",
    "set_channel",
    # Buffers
    "PackedPixelBuffer",
    "PackedImageBuffer",
    "PixelIndexError",
    "MAX_IMAGE_WIDTH",
    "MAX_IMAGE_HEIGHT",
]
