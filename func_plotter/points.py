from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from func_plotter.expression import CurveFunction, EvaluationError
from func_plotter.numeric import absolute, format_number, is_not_nan_or_inf, round2
from func_plotter.sampling import SamplePoint
from func_plotter.settings import MAX_SIGNIFICANT_POINTS, POINT_TOLERANCE, PlotSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SignificantPoint:
    x: float
    y: float

    def is_near(self, other: SignificantPoint, tol: float = POINT_TOLERANCE) -> bool:
        return absolute(self.x - other.x) < tol and absolute(self.y - other.y) < tol

    def label(self, sep: str = ",") -> str:
        return f"({format_number(self.x)}{sep}{format_number(self.y)})"


def _dedupe(points: Sequence[SignificantPoint]) -> list[SignificantPoint]:
    unique: list[SignificantPoint] = []
    for p in points:
        if not any(u.is_near(p) for u in unique):
            unique.append(p)
    return unique


def find_points(samples: Sequence[SamplePoint], y_min: float,
                y_max: float) -> list[SignificantPoint]:
    """First and last visible samples, rounded to two decimals."""
    visible = [p for p in samples if p.valid and y_min <= p.y <= y_max]
    if not visible:
        return []

    first, last = visible[0], visible[-1]
    candidates = [
        SignificantPoint(round2(first.x), round2(first.y)),
        SignificantPoint(round2(last.x), round2(last.y)),
    ]
    return _dedupe(candidates)[:MAX_SIGNIFICANT_POINTS]


def calc_zero_point(func: CurveFunction) -> Optional[SignificantPoint]:
    try:
        y = func(0.0)
    except EvaluationError as exc:
        logger.debug("No zero point: %s", exc)
        return None
    if not is_not_nan_or_inf(y):
        return None
    return SignificantPoint(0.0, round2(y))


def merge_zero_point(points: list[SignificantPoint], zero: Optional[SignificantPoint],
                     settings: PlotSettings) -> list[SignificantPoint]:
    """Place the zero point between the endpoints when it is on screen.

    Requires ``x_min < 0 < x_max`` and ``y_min <= y <= y_max``; the point
    goes to index 1 when two endpoints exist, otherwise it is appended.
    """
    if zero is None or not is_not_nan_or_inf(zero.y):
        return points
    inside = (settings.x_min < zero.x < settings.x_max
              and settings.y_min <= zero.y <= settings.y_max)
    if not inside:
        return points
    if len(points) >= 2:
        points.insert(1, zero)
    else:
        points.append(zero)
    return points
