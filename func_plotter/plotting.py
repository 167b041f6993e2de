"""
One plot pass: sample every enabled function and extract its notable points.

    registry = FunctionRegistry()
    registry.add("y = 1/x")
    result = plot(registry, -5, 5, -10, 10)
    for expression, points in result.significant_points:
        ...

A pass is synchronous and recomputes everything; its result fully
replaces the previous one.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from func_plotter.points import (
    SignificantPoint,
    calc_zero_point,
    find_points,
    merge_zero_point,
)
from func_plotter.registry import FunctionEntry, FunctionRegistry
from func_plotter.sampling import FloatArray, SamplePoint, sample_function, split_segments
from func_plotter.settings import PlotSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CurvePlot:
    expression: str
    color: str
    samples: tuple[SamplePoint, ...]
    segments: tuple[FloatArray, ...]
    points: tuple[SignificantPoint, ...]


@dataclass(frozen=True, slots=True)
class PlotResult:
    settings: PlotSettings
    curves: tuple[CurvePlot, ...]

    @property
    def segments(self) -> list[tuple[FloatArray, ...]]:
        return [c.segments for c in self.curves]

    @property
    def significant_points(self) -> list[tuple[str, tuple[SignificantPoint, ...]]]:
        return [(c.expression, c.points) for c in self.curves]


def plot_entry(entry: FunctionEntry, settings: PlotSettings) -> CurvePlot:
    samples = sample_function(entry.evaluator, settings.x_min, settings.x_max)
    points = find_points(samples, settings.y_min, settings.y_max)
    points = merge_zero_point(points, calc_zero_point(entry.evaluator), settings)
    return CurvePlot(
        expression=entry.expression,
        color=entry.color,
        samples=tuple(samples),
        segments=tuple(split_segments(samples, settings.y_min, settings.y_max)),
        points=tuple(points),
    )


def plot_settings(entries: Iterable[FunctionEntry], settings: PlotSettings) -> PlotResult:
    curves = tuple(plot_entry(e, settings) for e in entries if e.enabled)
    logger.info("Plotted %d function(s) over x=[%g, %g], y=[%g, %g]", len(curves),
                settings.x_min, settings.x_max, settings.y_min, settings.y_max)
    return PlotResult(settings=settings, curves=curves)


def plot(registry: Iterable[FunctionEntry], x_min: float, x_max: float,
         y_min: float, y_max: float) -> PlotResult:
    """Run a full pass; raises ``DomainError`` before sampling on bad bounds."""
    settings = PlotSettings(x_min=x_min, x_max=x_max, y_min=y_min, y_max=y_max)
    return plot_settings(registry, settings)


class PlotController:
    """Owns the registry and the current axis bounds for the UI."""

    def __init__(self, registry: Optional[FunctionRegistry] = None,
                 settings: Optional[PlotSettings] = None) -> None:
        self.registry = registry if registry is not None else FunctionRegistry()
        self.settings = settings if settings is not None else PlotSettings()

    def configure(self, x_min: float, x_max: float, y_min: float, y_max: float) -> PlotSettings:
        """Replace the bounds; raises ``DomainError`` and keeps the old ones."""
        self.settings = PlotSettings(x_min=x_min, x_max=x_max, y_min=y_min, y_max=y_max)
        return self.settings

    def plot(self) -> PlotResult:
        return plot_settings(self.registry, self.settings)
