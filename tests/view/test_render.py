from __future__ import annotations

import pytest
from PIL import Image as PILImage

from warren.environment.grid import Grid
from warren.environment.tile_types import Tile, tile_color
from warren.view.render import (
    ImagePixelSink,
    NullPixelSink,
    PixelSink,
    render_grid,
)


def test_sinks_satisfy_protocol() -> None:
    assert isinstance(ImagePixelSink(2, 2), PixelSink)
    assert isinstance(NullPixelSink(), PixelSink)


def test_null_sink_accepts_writes() -> None:
    grid = Grid(4, 4, sink=NullPixelSink())
    grid.set_tile(1, 1, Tile.FLOOR)
    grid.flush()
    assert grid.get_tile(1, 1) is Tile.FLOOR


class TestImagePixelSink:
    def test_pixels_and_frames(self) -> None:
        sink = ImagePixelSink(3, 2)
        sink.set_pixel(2, 1, (1, 2, 3))
        sink.apply()
        sink.apply()

        assert sink.pixels.shape == (3, 2, 3)
        assert sink.get_pixel(2, 1) == (1, 2, 3)
        assert sink.get_pixel(0, 0) == (0, 0, 0)
        assert sink.frames == 2

    def test_image_origin_is_bottom_left(self) -> None:
        sink = ImagePixelSink(4, 3)
        sink.set_pixel(0, 0, (255, 0, 0))
        sink.set_pixel(3, 2, (0, 255, 0))

        image = sink.to_image()

        assert image.size == (4, 3)
        assert image.getpixel((0, 2)) == (255, 0, 0)
        assert image.getpixel((3, 0)) == (0, 255, 0)

    def test_scale(self) -> None:
        sink = ImagePixelSink(4, 3)
        sink.set_pixel(0, 0, (9, 9, 9))

        image = sink.to_image(scale=5)

        assert image.size == (20, 15)
        assert image.getpixel((0, 14)) == (9, 9, 9)
        assert image.getpixel((4, 10)) == (9, 9, 9)
        assert image.getpixel((5, 14)) == (0, 0, 0)

    def test_scale_must_be_positive(self) -> None:
        with pytest.raises(ValueError):
            ImagePixelSink(2, 2).to_image(scale=0)

    def test_save(self, tmp_path) -> None:
        sink = ImagePixelSink(5, 4)
        sink.set_pixel(1, 1, (10, 20, 30))
        path = tmp_path / "dungeon.png"

        sink.save(path, scale=2)

        with PILImage.open(path) as image:
            assert image.size == (10, 8)
            assert image.convert("RGB").getpixel((2, 5)) == (10, 20, 30)


def test_grid_writes_reach_image_sink() -> None:
    sink = ImagePixelSink(4, 4)
    grid = Grid(4, 4, sink=sink)

    assert sink.get_pixel(2, 2) == tile_color(Tile.WALL)
    grid.set_tile(2, 2, Tile.CORRIDOR)
    assert sink.get_pixel(2, 2) == tile_color(Tile.CORRIDOR)


def test_render_grid() -> None:
    grid = Grid(6, 4)
    grid.set_tile(0, 0, Tile.FLOOR)

    image = render_grid(grid, scale=2)

    assert image.size == (12, 8)
    assert image.getpixel((0, 7)) == tile_color(Tile.FLOOR)
    assert image.getpixel((11, 0)) == tile_color(Tile.WALL)
