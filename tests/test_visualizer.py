"""Tests for the window coordinate mapping. pygame is not needed."""

import pytest

from sim.visualizer import MARGIN, WIN_H, WIN_W, _scale, screen_to_world, world_to_screen
from billiards import table


def test_table_centre_is_horizontally_centred():
    px, _ = world_to_screen(0.0, 0.0)
    assert px == WIN_W // 2


def test_table_fits_inside_window():
    w, h = table.TABLE_WIDTH / 2, table.TABLE_HEIGHT / 2
    for x, y in ((-w, -h), (-w, h), (w, -h), (w, h)):
        px, py = world_to_screen(x, y)
        assert MARGIN <= px <= WIN_W - MARGIN
        assert MARGIN <= py <= WIN_H - MARGIN


def test_y_axis_points_up_on_screen():
    _, low = world_to_screen(0.0, -1.0)
    _, high = world_to_screen(0.0, 1.0)
    assert high < low


@pytest.mark.parametrize("x,y", [(0.0, 0.0), (-4.5, 0.0), (3.75, 0.4), (-7.4, -3.9), (7.4, 3.9)])
def test_screen_round_trip_within_a_pixel(x, y):
    """Pixels are whole numbers, so the way back is off by at most one pixel."""
    pixel = 1.0 / _scale()
    wx, wy = screen_to_world(*world_to_screen(x, y))
    assert wx == pytest.approx(x, abs=pixel)
    assert wy == pytest.approx(y, abs=pixel)
