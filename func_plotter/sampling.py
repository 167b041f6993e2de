from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from func_plotter.expression import CurveFunction, EvaluationError
from func_plotter.numeric import is_not_nan_or_inf
from func_plotter.settings import SAMPLE_INTERVALS

logger = logging.getLogger(__name__)

FloatArray = NDArray[np.floating[Any]]


@dataclass(frozen=True, slots=True)
class SamplePoint:
    x: float
    y: float
    valid: bool
    segment_start: bool = False
    segment_end: bool = False


def sample_grid(x_min: float, x_max: float, intervals: int = SAMPLE_INTERVALS) -> FloatArray:
    """``intervals + 1`` evenly spaced abscissae, ``x_min + i * step``.

    The product can overshoot ``x_max`` by an ulp at the right edge, so the
    grid is clamped to the requested domain.  A span too wide for a float is
    laid out at half scale and doubled back.
    """
    index = np.arange(intervals + 1, dtype=np.float64)
    step = (x_max - x_min) / intervals
    if is_not_nan_or_inf(step):
        grid = x_min + index * step
    else:
        half_step = (x_max / 2 - x_min / 2) / intervals
        grid = (x_min / 2 + index * half_step) * 2
    return np.minimum(grid, x_max)


def sample_function(func: CurveFunction, x_min: float, x_max: float,
                    intervals: int = SAMPLE_INTERVALS) -> list[SamplePoint]:
    """Evaluate *func* across ``[x_min, x_max]`` and classify every sample.

    When the curve goes from a valid sample to an invalid one (NaN, +/-inf or
    an evaluation error) the last valid sample is emitted a second time with
    ``segment_end`` set, so a polyline can be closed exactly there.  The
    first sample, the first sample after an evaluation error, and the first
    valid sample after an invalid one carry ``segment_start``.
    """
    values: list[SamplePoint] = []
    last: Optional[SamplePoint] = None
    failures = 0

    for x in sample_grid(x_min, x_max, intervals).tolist():
        try:
            y = func(x)
        except EvaluationError as exc:
            logger.debug("%s", exc)
            failures += 1
            if last is not None and last.valid:
                values.append(dataclasses.replace(last, segment_end=True))
            values.append(SamplePoint(x, float("nan"), False))
            last = None
            continue

        valid = is_not_nan_or_inf(y)
        if last is not None and last.valid and not valid:
            values.append(dataclasses.replace(last, segment_end=True))

        start = last is None or (not last.valid and valid)
        values.append(SamplePoint(x, y, valid, segment_start=start))
        last = SamplePoint(x, y, valid)

    if failures:
        logger.debug("%d of %d samples failed to evaluate", failures, intervals + 1)
    return values


def split_segments(samples: Sequence[SamplePoint], y_min: float,
                   y_max: float) -> list[FloatArray]:
    """Cut samples into the polylines a renderer strokes.

    Valid samples inside ``[y_min, y_max]`` accumulate; an invalid or
    out-of-range sample, a ``segment_end`` marker or the final sample closes
    the current run.  A ``segment_end`` marker repeating the last vertex is
    not appended again.  Runs shorter than two points are dropped.
    """
    segments: list[FloatArray] = []
    current: list[tuple[float, float]] = []

    for i, p in enumerate(samples):
        visible = p.valid and y_min <= p.y <= y_max
        repeated = p.segment_end and bool(current) and current[-1] == (p.x, p.y)
        if visible and not repeated:
            current.append((p.x, p.y))
        if not visible or p.segment_end or i == len(samples) - 1:
            if len(current) >= 2:
                segments.append(np.asarray(current, dtype=np.float64))
            current = []

    return segments
