"""Packing and unpacking of 8-bit color channels in a 32-bit ARGB integer.

A packed color stores four 8-bit channels. From the most significant byte
to the least significant byte the layout is::

    bits 31-24  alpha
    bits 23-16  red
    bits 15-8   green
    bits 7-0    blue

The plain Python functions operate on single values, the ``*_array``
functions on NumPy arrays, and the ``*_ti`` functions are Taichi functions
for use inside kernels (see ``src.python.color.buffer``).

Example:
    >>> from src.python.color.channels import Channel, decode_channel, encode
    >>> packed = encode(255, 255, 0, 0)
    >>> hex(packed)
    '0xffff0000'
    >>> decode_channel(packed, Channel.RED)
    255
"""

from enum import IntEnum

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

# =============================================================================
# Channel Layout Constants
# =============================================================================

# Width of a single channel
CHANNEL_BITS = 8

# Mask selecting one channel once shifted down to the low byte
CHANNEL_MASK = 0xFF

# Mask selecting a full 32-bit packed color
PACKED_MASK = 0xFFFFFFFF

# Largest channel value; alpha of 255 is fully opaque
MAX_CHANNEL_VALUE = 255
OPAQUE_ALPHA = 255


class Channel(IntEnum):
    """A color channel, valued by its bit offset in a packed color."""

    ALPHA = 24
    RED = 16
    GREEN = 8
    BLUE = 0

    @property
    def shift(self) -> int:
        """Number of bits the channel is shifted left in a packed color."""
        return int(self.value)


# Channels whose writes force the pixel opaque
COLOR_CHANNELS = (Channel.RED, Channel.GREEN, Channel.BLUE)


# =============================================================================
# Scalar Codec
# =============================================================================


def decode_channel(packed: int, channel: Channel) -> int:
    """Extract one channel from a packed color.

    Args:
        packed: The packed ARGB color. Negative values (a signed 32-bit
            reading of the same bits) decode to the same channels.
        channel: The channel to extract.

    Returns:
        The channel intensity in [0, 255].
    """
    return (int(packed) >> Channel(channel).shift) & CHANNEL_MASK


def encode(alpha: int, red: int, green: int, blue: int) -> int:
    """Compose a packed color from its four channels.

    Each channel is masked to 8 bits so that no value can spill into its
    neighbour. Use ``clamp`` first when values may fall outside [0, 255].

    Args:
        alpha: The alpha (opacity) value.
        red: The red value.
        green: The green value.
        blue: The blue value.

    Returns:
        The packed color as an unsigned 32-bit integer.
    """
    return (
        ((int(alpha) & CHANNEL_MASK) << Channel.ALPHA.shift)
        | ((int(red) & CHANNEL_MASK) << Channel.RED.shift)
        | ((int(green) & CHANNEL_MASK) << Channel.GREEN.shift)
        | (int(blue) & CHANNEL_MASK)
    )


def unpack(packed: int) -> tuple[int, int, int, int]:
    """Split a packed color into ``(alpha, red, green, blue)``."""
    return (
        decode_channel(packed, Channel.ALPHA),
        decode_channel(packed, Channel.RED),
        decode_channel(packed, Channel.GREEN),
        decode_channel(packed, Channel.BLUE),
    )


def clamp(value: int) -> int:
    """Clip a channel value to [0, 255].

    Args:
        value: Any integer channel value.

    Returns:
        0 for negative values, 255 for values above 255, else the value.
    """
    if value < 0:
        return 0
    if value > MAX_CHANNEL_VALUE:
        return MAX_CHANNEL_VALUE
    return int(value)


# =============================================================================
# Vectorized Codec (NumPy)
# =============================================================================


def pack_rgba_array(rgba: npt.NDArray[np.uint8]) -> npt.NDArray[np.uint32]:
    """Pack an RGBA image array into packed ARGB colors.

    Args:
        rgba: Array of shape (H, W, 4) with channels in R, G, B, A order.

    Returns:
        Array of shape (H, W) with dtype uint32.

    Raises:
        ValueError: If the last axis does not hold four channels.
    """
    rgba = np.asarray(rgba)
    if rgba.ndim != 3 or rgba.shape[-1] != 4:
        raise ValueError(f"Expected an RGBA array of shape (H, W, 4), got {rgba.shape}")

    channels = (rgba & CHANNEL_MASK).astype(np.uint32)
    red = channels[..., 0]
    green = channels[..., 1]
    blue = channels[..., 2]
    alpha = channels[..., 3]

    return (
        (alpha << Channel.ALPHA.shift)
        | (red << Channel.RED.shift)
        | (green << Channel.GREEN.shift)
        | blue
    ).astype(np.uint32)


def unpack_rgba_array(packed: npt.NDArray[np.uint32]) -> npt.NDArray[np.uint8]:
    """Unpack packed ARGB colors into an RGBA image array.

    Args:
        packed: Array of shape (H, W) of packed colors.

    Returns:
        Array of shape (H, W, 4) with dtype uint8, channels in R, G, B, A order.
    """
    packed = np.asarray(packed).astype(np.uint32)
    planes = [
        (packed >> channel.shift) & CHANNEL_MASK
        for channel in (Channel.RED, Channel.GREEN, Channel.BLUE, Channel.ALPHA)
    ]
    return np.stack(planes, axis=-1).astype(np.uint8)


# =============================================================================
# Taichi Codec
# =============================================================================


@ti.func
def encode_ti(alpha: ti.u32, red: ti.u32, green: ti.u32, blue: ti.u32) -> ti.u32:
    """Compose a packed color inside a Taichi kernel."""
    mask = ti.cast(CHANNEL_MASK, ti.u32)
    return (
        ((alpha & mask) << ti.cast(24, ti.u32))
        | ((red & mask) << ti.cast(16, ti.u32))
        | ((green & mask) << ti.cast(8, ti.u32))
        | (blue & mask)
    )


@ti.func
def decode_channel_ti(packed: ti.u32, shift: ti.i32) -> ti.u32:
    """Extract the channel at bit offset ``shift`` inside a Taichi kernel."""
    return (packed >> ti.cast(shift, ti.u32)) & ti.cast(CHANNEL_MASK, ti.u32)


@ti.func
def float_to_channel_ti(value: ti.f32, gamma: ti.f32) -> ti.u32:
    """Convert a linear color component to an 8-bit channel.

    The component is clamped to [0, 1] before gamma encoding so negative
    radiance never produces NaN, then rounded to the nearest integer.

    Args:
        value: Linear color component, nominally in [0, 1].
        gamma: Gamma value; 1.0 leaves the component linear.

    Returns:
        The channel value in [0, 255].
    """
    v = tm.clamp(value, 0.0, 1.0)
    if gamma != 1.0:
        v = ti.pow(v, 1.0 / gamma)
    return ti.cast(v * 255.0 + 0.5, ti.u32)
