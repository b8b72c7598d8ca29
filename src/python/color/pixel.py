"""Pixel handle for reading and writing channels in a packed image buffer.

A ``Pixel`` binds an image buffer to an (x, y) location. It owns no pixel
data: every read decodes the packed color currently stored in the buffer
and every write re-encodes all four channels and stores them back.

Writes are an unsynchronized read-modify-write of a single buffer cell.
Callers sharing a buffer between threads must serialize writes to the same
coordinate themselves.

Example:
    >>> from src.python.color.buffer import PackedImageBuffer
    >>> from src.python.color.pixel import Pixel
    >>> buffer = PackedImageBuffer(8, 8)
    >>> pixel = Pixel(buffer, 3, 4)
    >>> pixel.set_red(300)
    >>> pixel.red, pixel.alpha
    (255, 255)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from src.python.color.channels import (
    COLOR_CHANNELS,
    OPAQUE_ALPHA,
    Channel,
    clamp,
    decode_channel,
    encode,
    unpack,
)

if TYPE_CHECKING:
    from src.python.color.buffer import PackedPixelBuffer


def get_channel(buffer: PackedPixelBuffer, x: int, y: int, channel: Channel) -> int:
    """Read one channel of the pixel at (x, y)."""
    return decode_channel(buffer.get_packed_pixel(x, y), channel)


def set_channel(
    buffer: PackedPixelBuffer,
    x: int,
    y: int,
    channel: Channel,
    value: int,
) -> None:
    """Replace one channel of the pixel at (x, y).

    The value is clamped to [0, 255]. Writing red, green or blue also makes
    the pixel fully opaque; writing alpha stores the clamped alpha as is.

    Args:
        buffer: The image buffer holding the pixel.
        x: The x location of the pixel (0 is the left edge).
        y: The y location of the pixel (0 is the top edge).
        channel: The channel to replace.
        value: The new channel value.

    Raises:
        IndexError: If the buffer rejects the coordinate.
    """
    channel = Channel(channel)
    alpha, red, green, blue = unpack(buffer.get_packed_pixel(x, y))
    value = clamp(value)

    if channel in COLOR_CHANNELS:
        alpha = OPAQUE_ALPHA

    if channel == Channel.ALPHA:
        alpha = value
    elif channel == Channel.RED:
        red = value
    elif channel == Channel.GREEN:
        green = value
    else:
        blue = value

    buffer.set_packed_pixel(x, y, encode(alpha, red, green, blue))


class Pixel:
    """A view of one pixel in a packed image buffer.

    Attributes:
        x: The x location of the pixel in the buffer.
        y: The y location of the pixel in the buffer.
    """

    def __init__(self, buffer: PackedPixelBuffer, x: int, y: int) -> None:
        self._buffer = buffer
        self._x = x
        self._y = y

    @property
    def x(self) -> int:
        """Get the x location of the pixel."""
        return self._x

    @property
    def y(self) -> int:
        """Get the y location of the pixel."""
        return self._y

    @property
    def buffer(self) -> PackedPixelBuffer:
        """Get the buffer this pixel belongs to."""
        return self._buffer

    @property
    def packed(self) -> int:
        """Get the packed ARGB color currently stored at this pixel."""
        return self._buffer.get_packed_pixel(self._x, self._y)

    @property
    def alpha(self) -> int:
        return decode_channel(self.packed, Channel.ALPHA)

    @property
    def red(self) -> int:
        return decode_channel(self.packed, Channel.RED)

    @property
    def green(self) -> int:
        return decode_channel(self.packed, Channel.GREEN)

    @property
    def blue(self) -> int:
        return decode_channel(self.packed, Channel.BLUE)

    @property
    def color(self) -> tuple[int, int, int]:
        """Get the (red, green, blue) color of the pixel."""
        _, red, green, blue = unpack(self.packed)
        return red, green, blue

    def set_channel(self, channel: Channel, value: int) -> None:
        """Replace one channel; see the module-level ``set_channel``."""
        set_channel(self._buffer, self._x, self._y, channel, value)

    def set_alpha(self, value: int) -> None:
        self.set_channel(Channel.ALPHA, value)

    def set_red(self, value: int) -> None:
        self.set_channel(Channel.RED, value)

    def set_green(self, value: int) -> None:
        self.set_channel(Channel.GREEN, value)

    def set_blue(self, value: int) -> None:
        self.set_channel(Channel.BLUE, value)

    def update_picture(self, alpha: int, red: int, green: int, blue: int) -> None:
        """Write all four channels of this pixel at once.

        Args:
            alpha: The alpha (transparency) at this pixel.
            red: The red value for the color at this pixel.
            green: The green value for the color at this pixel.
            blue: The blue value for the color at this pixel.
        """
        self._buffer.set_packed_pixel(self._x, self._y, encode(alpha, red, green, blue))

    def __str__(self) -> str:
        _, red, green, blue = unpack(self.packed)
        return f"Pixel red={red} green={green} blue={blue}"

    def __repr__(self) -> str:
        alpha, red, green, blue = unpack(self.packed)
        return (
            f"Pixel(x={self._x}, y={self._y}, "
            f"alpha={alpha}, red={red}, green={green}, blue={blue})"
        )
