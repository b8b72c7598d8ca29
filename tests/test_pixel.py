"""Unit tests for the Pixel view and set_channel.

Tests cover:
- Reading channels through a Pixel
- Clamped channel writes and forced opacity
- Writing all channels with update_picture
- Use with any object providing get/set_packed_pixel
"""

import pytest


class DictBuffer:
    """Minimal buffer keeping packed colors in a dict."""

    def __init__(self):
        self.cells = {}
        self.writes = []

    def get_packed_pixel(self, x, y):
        return self.cells.get((x, y), 0)

    def set_packed_pixel(self, x, y, value):
        self.writes.append((x, y))
        self.cells[(x, y)] = value


class TestPixelRead:
    """Tests for reading channels through a Pixel."""

    def test_round_trip_at_coordinate(self, buffer):
        """Test writing then reading a pixel at (3, 4)."""
        from src.python.color.pixel import Pixel

        pixel = Pixel(buffer, 3, 4)
        pixel.update_picture(255, 10, 20, 30)

        reread = Pixel(buffer, 3, 4)
        assert reread.alpha == 255
        assert reread.red == 10
        assert reread.green == 20
        assert reread.blue == 30

    def test_coordinates(self, buffer):
        """Test that the pixel reports its location."""
        from src.python.color.pixel import Pixel

        pixel = Pixel(buffer, 2, 5)

        assert pixel.x == 2
        assert pixel.y == 5
        assert pixel.buffer is buffer

    def test_packed_and_color(self, buffer):
        """Test the packed value and the (red, green, blue) tuple."""
        from src.python.color.pixel import Pixel

        buffer.set_packed_pixel(1, 1, 0x80112233)
        pixel = Pixel(buffer, 1, 1)

        assert pixel.packed == 0x80112233
        assert pixel.color == (0x11, 0x22, 0x33)

    def test_reads_reflect_buffer_changes(self, buffer):
        """Test that a pixel holds no copy of the color."""
        from src.python.color.pixel import Pixel

        pixel = Pixel(buffer, 0, 0)
        buffer.set_packed_pixel(0, 0, 0xFF000040)

        assert pixel.blue == 0x40

    def test_get_channel(self, buffer):
        """Test the module-level channel read."""
        from src.python.color.channels import Channel
        from src.python.color.pixel import get_channel

        buffer.set_packed_pixel(4, 2, 0x01020304)

        assert get_channel(buffer, 4, 2, Channel.ALPHA) == 1
        assert get_channel(buffer, 4, 2, Channel.BLUE) == 4

    def test_str(self, buffer):
        """Test the string form lists red, green and blue."""
        from src.python.color.pixel import Pixel

        pixel = Pixel(buffer, 0, 0)
        pixel.update_picture(255, 1, 2, 3)

        assert str(pixel) == "Pixel red=1 green=2 blue=3"
        assert "x=0" in repr(pixel)
        assert "alpha=255" in repr(pixel)


class TestSetChannel:
    """Tests for clamped single-channel writes."""

    def test_set_blue_preserves_red_green_and_forces_opaque(self, buffer):
        """Test that setting blue keeps red/green and makes alpha 255."""
        from src.python.color.pixel import Pixel

        pixel = Pixel(buffer, 3, 4)
        pixel.update_picture(0, 10, 20, 30)
        pixel.set_blue(99)

        assert pixel.red == 10
        assert pixel.green == 20
        assert pixel.blue == 99
        assert pixel.alpha == 255

    @pytest.mark.parametrize("setter", ["set_red", "set_green", "set_blue"])
    def test_color_writes_force_opaque(self, buffer, setter):
        """Test that every color channel write makes the pixel opaque."""
        from src.python.color.pixel import Pixel

        pixel = Pixel(buffer, 1, 1)
        pixel.update_picture(17, 0, 0, 0)
        getattr(pixel, setter)(50)

        assert pixel.alpha == 255

    def test_set_alpha_keeps_value(self, buffer):
        """Test that writing alpha stores the given alpha."""
        from src.python.color.pixel import Pixel

        pixel = Pixel(buffer, 1, 1)
        pixel.update_picture(255, 10, 20, 30)
        pixel.set_alpha(40)

        assert pixel.alpha == 40
        assert pixel.color == (10, 20, 30)

    def test_values_are_clamped(self, buffer):
        """Test that out-of-range values are clamped, not rejected."""
        from src.python.color.pixel import Pixel

        pixel = Pixel(buffer, 0, 0)
        pixel.set_red(300)
        pixel.set_green(-5)
        pixel.set_alpha(1000)

        assert pixel.red == 255
        assert pixel.green == 0
        assert pixel.alpha == 255

    def test_set_channel_writes_one_cell(self):
        """Test that set_channel mutates exactly one buffer cell."""
        from src.python.color.channels import Channel
        from src.python.color.pixel import set_channel

        fake = DictBuffer()
        set_channel(fake, 7, 9, Channel.GREEN, 128)

        assert fake.writes == [(7, 9)]
        assert fake.cells == {(7, 9): 0xFF008000}

    def test_set_channel_is_idempotent(self, buffer):
        """Test that repeating a write leaves the same packed value."""
        from src.python.color.channels import Channel
        from src.python.color.pixel import set_channel

        set_channel(buffer, 2, 2, Channel.RED, 77)
        first = buffer.get_packed_pixel(2, 2)
        set_channel(buffer, 2, 2, Channel.RED, 77)

        assert buffer.get_packed_pixel(2, 2) == first

    def test_update_picture_masks_each_channel(self):
        """Test that update_picture keeps channels within their own byte."""
        from src.python.color.pixel import Pixel

        fake = DictBuffer()
        Pixel(fake, 0, 0).update_picture(255, 256, 0, 0)

        assert fake.cells[(0, 0)] == 0xFF000000
