import pytest

from func_plotter.geometry import (
    Viewport,
    calc_step,
    generate_grid_values,
    x_to_pixel,
    y_to_pixel,
)
from func_plotter.settings import PlotSettings


@pytest.mark.parametrize(
    "lo, hi, expected",
    [(-5, 5, 1), (0, 19.9, 1), (-10, 10, 5), (0, 99.9, 5), (0, 100, 10), (-500, 500, 10)],
)
def test_calc_step_tiers(lo, hi, expected):
    assert calc_step(lo, hi) == expected


def test_generate_grid_values():
    assert generate_grid_values(-10, 10, 5) == [-10, -5, 0, 5, 10]
    assert generate_grid_values(-2.5, 2.5, 1) == [-2, -1, 0, 1, 2]
    assert generate_grid_values(3, 27, 10) == [10, 20]


def test_generate_grid_values_empty_when_no_tick_fits():
    assert generate_grid_values(0.2, 0.8, 1) == []


def test_pixel_transforms():
    assert x_to_pixel(0, -10, 10, 200) == 100
    assert x_to_pixel(-10, -10, 10, 200) == 0
    assert y_to_pixel(10, -10, 10, 200) == 0
    assert y_to_pixel(-10, -10, 10, 200) == 200
    assert y_to_pixel(5, -10, 10, 200) == 50


def test_viewport_applies_padding():
    vp = Viewport(480, 380)
    assert vp.inner_width == 400
    assert vp.inner_height == 300
    assert vp.to_device(0, 0, PlotSettings()) == (240, 190)
    assert vp.to_device(-10, 10, PlotSettings()) == (40, 40)


def test_viewport_contains():
    vp = Viewport(480, 380)
    assert vp.contains(440, 340)
    assert not vp.contains(441, 100)
    assert not vp.contains(100, 341)
