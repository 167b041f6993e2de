from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from func_plotter.numeric import Number, is_not_nan_or_inf, parse_float

# ---------------------------------------------------------------------------
# Sampling and point extraction
# ---------------------------------------------------------------------------

SAMPLE_INTERVALS: int = 800          # 801 samples, both ends included
MAX_SIGNIFICANT_POINTS: int = 5
POINT_TOLERANCE: float = 0.01

# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

PADDING: int = 40
CURVE_WIDTH: int = 3
MARKER_RADIUS: int = 6
MARKER_OUTLINE: int = 2
LABEL_OFFSET: int = 15
AXIS_COLOR: str = "#2c3e50"
LABEL_COLOR: str = "#2c3e50"

PALETTE: tuple[str, ...] = (
    "#e74c3c",
    "#3498db",
    "#2ecc71",
    "#f39c12",
    "#9b59b6",
    "#1abc9c",
    "#d35400",
    "#c0392b",
)

ERROR_TIMEOUT_MS: int = 5000
SUCCESS_TIMEOUT_MS: int = 3000

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

LOG_LEVEL: str = os.getenv("FUNC_PLOTTER_LOG_LEVEL", "INFO")
LOG_FORMAT: str = "%(asctime)s - %(levelname)5s | %(name)s | %(message)s"


def setup_logging(level_str: str = LOG_LEVEL) -> logging.Logger:
    """Attach one console handler to the package logger.

    Safe to call repeatedly; an existing stream handler is reused.
    """
    level = getattr(logging, level_str.upper(), logging.INFO)
    logger = logging.getLogger("func_plotter")
    logger.setLevel(level)
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.setLevel(level)
        logger.addHandler(handler)
    return logger


# ===========================================================================
# Plot settings
# ===========================================================================

class DomainError(ValueError):
    """Axis bounds that cannot be plotted (inverted, degenerate or not finite)."""


@dataclass(frozen=True, slots=True)
class PlotSettings:
    x_min: float = -10.0
    x_max: float = 10.0
    y_min: float = -10.0
    y_max: float = 10.0

    def __post_init__(self) -> None:
        for name in ("x_min", "x_max", "y_min", "y_max"):
            value = getattr(self, name)
            if not is_not_nan_or_inf(value):
                raise DomainError(f"{name} must be a finite number, got {value}")
        if self.x_min >= self.x_max:
            raise DomainError(f"x_min ({self.x_min}) must be < x_max ({self.x_max})")
        if self.y_min >= self.y_max:
            raise DomainError(f"y_min ({self.y_min}) must be < y_max ({self.y_max})")
        if not (is_not_nan_or_inf(self.domain_width) and is_not_nan_or_inf(self.domain_height)):
            raise DomainError("axis span must be a finite number")

    @classmethod
    def from_text(cls, x_min: Number, x_max: Number,
                  y_min: Number, y_max: Number) -> PlotSettings:
        """Build settings from raw field text using the plotter's decimal parser."""
        return cls(
            x_min=parse_float(x_min),
            x_max=parse_float(x_max),
            y_min=parse_float(y_min),
            y_max=parse_float(y_max),
        )

    @property
    def domain_width(self) -> float:
        return self.x_max - self.x_min

    @property
    def domain_height(self) -> float:
        return self.y_max - self.y_min
