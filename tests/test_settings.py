import logging

import pytest

from func_plotter.settings import DomainError, PlotSettings, setup_logging


def test_defaults():
    s = PlotSettings()
    assert (s.x_min, s.x_max, s.y_min, s.y_max) == (-10.0, 10.0, -10.0, 10.0)
    assert s.domain_width == 20.0
    assert s.domain_height == 20.0


def test_from_text_uses_decimal_parser():
    s = PlotSettings.from_text("-5", "5.5", "-0.5", "12")
    assert (s.x_min, s.x_max, s.y_min, s.y_max) == (-5.0, 5.5, -0.5, 12.0)


@pytest.mark.parametrize(
    "fields",
    [("abc", "5", "-5", "5"), ("1e3", "5", "-5", "5"), ("-5", "5", "", "5")],
)
def test_from_text_rejects_unparseable_bounds(fields):
    with pytest.raises(DomainError, match="finite"):
        PlotSettings.from_text(*fields)


def test_inverted_bounds():
    with pytest.raises(DomainError, match="x_min"):
        PlotSettings(x_min=2, x_max=1)
    with pytest.raises(DomainError, match="y_min"):
        PlotSettings(y_min=0, y_max=0)


@pytest.mark.parametrize(
    "bounds",
    [(-1e308, 1e308, -10, 10), (-10, 10, -1.7e308, 1.7e308)],
)
def test_span_overflow_is_rejected(bounds):
    with pytest.raises(DomainError, match="span"):
        PlotSettings(*bounds)


def test_domain_error_is_value_error():
    assert issubclass(DomainError, ValueError)


def test_setup_logging_is_idempotent():
    logger = setup_logging("debug")
    setup_logging("debug")
    handlers = [h for h in logger.handlers if isinstance(h, logging.StreamHandler)]
    assert len(handlers) == 1
    assert logger.level == logging.DEBUG
    setup_logging("INFO")
