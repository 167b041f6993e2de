import numpy as np
import pytest

from func_plotter.plotting import PlotController, plot
from func_plotter.points import SignificantPoint
from func_plotter.registry import FunctionEntry, FunctionRegistry
from func_plotter.settings import DomainError, PlotSettings


def test_identity_points_include_zero_between_endpoints():
    reg = FunctionRegistry()
    reg.add("y = x")
    result = plot(reg, -5, 5, -10, 10)
    assert result.significant_points == [
        ("y = x", (
            SignificantPoint(-5.0, -5.0),
            SignificantPoint(0.0, 0.0),
            SignificantPoint(5.0, 5.0),
        )),
    ]


@pytest.mark.parametrize(
    "bounds",
    [(5, -5, -10, 10), (1, 1, -10, 10), (-5, 5, 10, -10), (-5, 5, 3, 3)],
)
def test_bad_bounds_abort_before_sampling(bounds):
    calls = []

    def spy(x):
        calls.append(x)
        return x

    entries = [FunctionEntry("x", spy, "#000000")]
    with pytest.raises(DomainError):
        plot(entries, *bounds)
    assert calls == []


def test_disabled_functions_are_skipped():
    reg = FunctionRegistry()
    reg.add("x")
    reg.add("1/x")
    reg.toggle(0, False)
    result = plot(reg, -5, 5, -10, 10)
    assert [c.expression for c in result.curves] == ["1/x"]
    assert len(result.segments) == 1


def test_pole_produces_two_segments_and_no_zero_point():
    reg = FunctionRegistry()
    reg.add("1/x")
    curve = plot(reg, -12.5, 12.5, -10, 10).curves[0]
    assert len(curve.segments) == 2
    assert len(curve.samples) == 802
    assert SignificantPoint(0.0, 0.0) not in curve.points
    assert curve.points == (SignificantPoint(-12.5, -0.08), SignificantPoint(12.5, 0.08))


def test_plot_is_idempotent():
    reg = FunctionRegistry()
    reg.add("1/x")
    reg.add("x^2 - 3")
    first = plot(reg, -12.5, 12.5, -10, 10)
    second = plot(reg, -12.5, 12.5, -10, 10)

    for a, b in zip(first.curves, second.curves):
        np.testing.assert_array_equal([p.x for p in a.samples], [p.x for p in b.samples])
        np.testing.assert_array_equal([p.y for p in a.samples], [p.y for p in b.samples])
        assert [(p.valid, p.segment_start, p.segment_end) for p in a.samples] == \
            [(p.valid, p.segment_start, p.segment_end) for p in b.samples]
        assert a.points == b.points
        assert len(a.segments) == len(b.segments)


def test_empty_registry_plots_nothing():
    result = plot(FunctionRegistry(), -5, 5, -5, 5)
    assert result.curves == ()
    assert result.significant_points == []


def test_controller_keeps_settings_on_domain_error():
    ctl = PlotController()
    ctl.registry.add("x")
    ctl.configure(-5, 5, -10, 10)
    with pytest.raises(DomainError):
        ctl.configure(5, -5, -10, 10)
    assert ctl.settings == PlotSettings(-5, 5, -10, 10)
    result = ctl.plot()
    assert result.settings == ctl.settings
    assert result.curves[0].points[1] == SignificantPoint(0.0, 0.0)


def test_deeply_nested_function_plots_empty():
    reg = FunctionRegistry()
    reg.add("-" * 600 + "x")
    curve = plot(reg, -5, 5, -10, 10).curves[0]
    assert curve.segments == ()
    assert curve.points == ()
