"""Packed ARGB image buffer addressed by (x, y).

The pixel codec only needs two operations from an image buffer, described by
the ``PackedPixelBuffer`` protocol. ``PackedImageBuffer`` is the concrete
buffer used by the ray tracer: a NumPy uint32 array of shape (height, width)
with (0, 0) at the top left. It rejects out-of-range coordinates with
``PixelIndexError`` and converts to and from RGBA arrays, Pillow images and
the Taichi color fields produced by the integrator.

Example:
    >>> from src.python.color.buffer import PackedImageBuffer
    >>> buffer = PackedImageBuffer(4, 4)
    >>> buffer.set_packed_pixel(1, 2, 0xFF0A141E)
    >>> buffer.pixel(1, 2).color
    (10, 20, 30)
"""

import logging
from typing import Protocol

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm
from PIL import Image as PILImage

from src.python.color.channels import (
    CHANNEL_MASK,
    MAX_CHANNEL_VALUE,
    OPAQUE_ALPHA,
    PACKED_MASK,
    Channel,
    decode_channel_ti,
    encode_ti,
    float_to_channel_ti,
    pack_rgba_array,
    unpack_rgba_array,
)
from src.python.color.pixel import Pixel

logger = logging.getLogger(__name__)

# Maximum supported image dimensions, matching the integrator render target
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048


class PixelIndexError(IndexError):
    """Raised when a coordinate lies outside the image buffer."""


class PackedPixelBuffer(Protocol):
    """The image buffer operations the pixel codec depends on."""

    def get_packed_pixel(self, x: int, y: int) -> int:
        """Return the packed ARGB color at (x, y)."""
        ...

    def set_packed_pixel(self, x: int, y: int, value: int) -> None:
        """Store the packed ARGB color at (x, y)."""
        ...


def _check_dimensions(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions ({width}x{height}) must be positive")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )


# =============================================================================
# Taichi Kernels
# =============================================================================


@ti.kernel
def _pack_color_field(color: ti.template(), packed: ti.template(), gamma: ti.f32):
    """Pack an RGB float field indexed [x, y] into a uint32 field indexed [y, x]."""
    for y, x in packed:
        c = color[x, y]
        packed[y, x] = encode_ti(
            ti.cast(OPAQUE_ALPHA, ti.u32),
            float_to_channel_ti(c[0], gamma),
            float_to_channel_ti(c[1], gamma),
            float_to_channel_ti(c[2], gamma),
        )


@ti.kernel
def _unpack_to_color_field(packed: ti.template(), color: ti.template()):
    """Unpack a uint32 field indexed [y, x] into an RGB float field indexed [x, y]."""
    for y, x in packed:
        p = packed[y, x]
        color[x, y] = tm.vec3(
            ti.cast(decode_channel_ti(p, 16), ti.f32),
            ti.cast(decode_channel_ti(p, 8), ti.f32),
            ti.cast(decode_channel_ti(p, 0), ti.f32),
        ) / MAX_CHANNEL_VALUE


# =============================================================================
# Packed Image Buffer
# =============================================================================


class PackedImageBuffer:
    """A 2D grid of packed ARGB colors.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
    """

    def __init__(self, width: int, height: int, fill: int = 0) -> None:
        """Create a buffer with every pixel set to ``fill``.

        Args:
            width: Image width in pixels (max MAX_IMAGE_WIDTH).
            height: Image height in pixels (max MAX_IMAGE_HEIGHT).
            fill: Packed color to initialize every pixel with.

        Raises:
            ValueError: If the dimensions are not positive or exceed the
                maximum supported size.
        """
        _check_dimensions(width, height)
        self._width = width
        self._height = height
        self._data = np.full((height, width), int(fill) & PACKED_MASK, dtype=np.uint32)
        logger.debug("Created %dx%d packed image buffer", width, height)

    @classmethod
    def from_array(cls, packed: npt.ArrayLike) -> "PackedImageBuffer":
        """Create a buffer from an array of packed colors of shape (H, W).

        Raises:
            ValueError: If the array is not two-dimensional or too large.
        """
        data = np.asarray(packed)
        if data.ndim != 2:
            raise ValueError(f"Expected a packed array of shape (H, W), got {data.shape}")

        height, width = data.shape
        buffer = cls(width, height)
        buffer._data[...] = data.astype(np.uint32)
        return buffer

    @classmethod
    def from_rgba_array(cls, rgba: npt.NDArray[np.uint8]) -> "PackedImageBuffer":
        """Create a buffer from an RGBA array of shape (H, W, 4)."""
        return cls.from_array(pack_rgba_array(rgba))

    @classmethod
    def from_pil(cls, image: PILImage.Image) -> "PackedImageBuffer":
        """Create a buffer from a Pillow image of any mode.

        Images without an alpha band are treated as fully opaque.
        """
        logger.debug("Packing %s image of size %s", image.mode, image.size)
        return cls.from_rgba_array(np.asarray(image.convert("RGBA")))

    @classmethod
    def from_color_field(
        cls,
        color: "ti.MatrixField",
        width: int,
        height: int,
        *,
        gamma: float = 1.0,
    ) -> "PackedImageBuffer":
        """Pack a Taichi RGB color field into an opaque buffer.

        The field uses the integrator's layout: a ``Vector.field(3, ti.f32)``
        indexed [x, y] holding linear colors in [0, 1]. Only the active
        ``width`` x ``height`` region is read, so the integrator's
        preallocated buffer can be passed directly.

        Args:
            color: The RGB color field.
            width: Active image width in pixels.
            height: Active image height in pixels.
            gamma: Gamma encoding applied to each component (1.0 for none).

        Returns:
            A new buffer with alpha 255 at every pixel.

        Raises:
            ValueError: If the active region does not fit in the field or
                gamma is not positive.
        """
        _check_dimensions(width, height)
        if gamma <= 0.0:
            raise ValueError(f"Gamma must be positive, got {gamma}")
        field_width, field_height = color.shape
        if width > field_width or height > field_height:
            raise ValueError(
                f"Active region ({width}x{height}) exceeds color field "
                f"({field_width}x{field_height})"
            )

        packed = ti.field(dtype=ti.u32, shape=(height, width))
        _pack_color_field(color, packed, gamma)
        logger.debug("Packed %dx%d color field (gamma=%s)", width, height, gamma)
        return cls.from_array(packed.to_numpy())

    @property
    def width(self) -> int:
        """Get the image width."""
        return self._width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self._height

    @property
    def shape(self) -> tuple[int, int]:
        """Get the (height, width) shape of the packed array."""
        return self._height, self._width

    def _check_coordinates(self, x: int, y: int) -> None:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise PixelIndexError(
                f"Pixel ({x}, {y}) is outside the {self._width}x{self._height} image"
            )

    def get_packed_pixel(self, x: int, y: int) -> int:
        """Get the packed ARGB color at (x, y).

        Raises:
            PixelIndexError: If (x, y) is outside the image.
        """
        self._check_coordinates(x, y)
        return int(self._data[y, x])

    def set_packed_pixel(self, x: int, y: int, value: int) -> None:
        """Store a packed ARGB color at (x, y).

        Only the low 32 bits of ``value`` are kept, so a signed 32-bit color
        stores the same channels as its unsigned counterpart.

        Raises:
            PixelIndexError: If (x, y) is outside the image.
        """
        self._check_coordinates(x, y)
        self._data[y, x] = int(value) & PACKED_MASK

    def pixel(self, x: int, y: int) -> Pixel:
        """Get a ``Pixel`` view of the location (x, y).

        Raises:
            PixelIndexError: If (x, y) is outside the image.
        """
        self._check_coordinates(x, y)
        return Pixel(self, x, y)

    def fill(self, value: int) -> None:
        """Set every pixel to the packed color ``value``."""
        self._data.fill(int(value) & PACKED_MASK)

    def to_numpy(self) -> npt.NDArray[np.uint32]:
        """Get a copy of the packed colors as an array of shape (H, W)."""
        return self._data.copy()

    def to_rgba_array(self) -> npt.NDArray[np.uint8]:
        """Get the image as an RGBA array of shape (H, W, 4)."""
        return unpack_rgba_array(self._data)

    def to_pil(self) -> PILImage.Image:
        """Get the image as an RGBA Pillow image."""
        return PILImage.fromarray(self.to_rgba_array())

    def to_color_field(self) -> "ti.MatrixField":
        """Get the RGB channels as a Taichi float field indexed [x, y].

        Components are scaled to [0, 1]; alpha is dropped.
        """
        packed = ti.field(dtype=ti.u32, shape=(self._height, self._width))
        packed.from_numpy(self._data)
        color = ti.Vector.field(3, dtype=ti.f32, shape=(self._width, self._height))
        _unpack_to_color_field(packed, color)
        return color

    def channel_plane(self, channel: Channel) -> npt.NDArray[np.uint8]:
        """Get one channel of every pixel as an array of shape (H, W)."""
        return ((self._data >> Channel(channel).shift) & CHANNEL_MASK).astype(np.uint8)

    def __repr__(self) -> str:
        return f"PackedImageBuffer(width={self._width}, height={self._height})"
