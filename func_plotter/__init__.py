from func_plotter.expression import (
    EvaluationError,
    ExpressionError,
    InvalidExpressionError,
    compile_function,
)
from func_plotter.plotting import PlotController, PlotResult, plot
from func_plotter.registry import FunctionEntry, FunctionRegistry
from func_plotter.settings import DomainError, PlotSettings

__all__ = [
    "DomainError",
    "EvaluationError",
    "ExpressionError",
    "FunctionEntry",
    "FunctionRegistry",
    "InvalidExpressionError",
    "PlotController",
    "PlotResult",
    "PlotSettings",
    "compile_function",
    "plot",
]
