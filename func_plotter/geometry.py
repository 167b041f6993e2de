from __future__ import annotations

from dataclasses import dataclass

from func_plotter.numeric import ceil, floor
from func_plotter.settings import PADDING, PlotSettings


def calc_step(lo: float, hi: float) -> int:
    """Tick spacing for an axis: 1, 5 or 10 depending on the span."""
    span = hi - lo
    if span < 20:
        return 1
    if span < 100:
        return 5
    return 10


def generate_grid_values(lo: float, hi: float, step: float) -> list[float]:
    first = ceil(lo / step) * step
    count = int(floor((hi - first) / step)) + 1
    return [first + i * step for i in range(max(0, count))]


def x_to_pixel(x: float, x_min: float, x_max: float, width: float) -> float:
    return (x - x_min) / (x_max - x_min) * width


def y_to_pixel(y: float, y_min: float, y_max: float, height: float) -> float:
    return height - (y - y_min) / (y_max - y_min) * height


@dataclass(frozen=True, slots=True)
class Viewport:
    """Device rectangle with an inset margin on all four sides."""

    width: float
    height: float
    padding: float = PADDING

    @property
    def inner_width(self) -> float:
        return self.width - self.padding * 2

    @property
    def inner_height(self) -> float:
        return self.height - self.padding * 2

    def to_device(self, x: float, y: float, settings: PlotSettings) -> tuple[float, float]:
        px = self.padding + x_to_pixel(x, settings.x_min, settings.x_max, self.inner_width)
        py = self.padding + y_to_pixel(y, settings.y_min, settings.y_max, self.inner_height)
        return px, py

    def contains(self, px: float, py: float) -> bool:
        """Marker visibility test: not past the right or bottom margin."""
        return px <= self.width - self.padding and py <= self.height - self.padding
