from simplot.api import figure
from simplot.config import GnuplotConfig
from simplot.errors import (
    ConfigurationError,
    EmptyPlotError,
    GnuplotRuntimeError,
    PlotDataError,
    PlotError,
    ScriptWriteError,
    SpawnError,
)
from simplot.figure import AxisRange, Figure
from simplot.options import PlotOption, Title
from simplot.series import Series
from simplot.styles import LineType, PlotType, PointType, Terminal

__all__ = [
    "AxisRange",
    "ConfigurationError",
    "EmptyPlotError",
    "Figure",
    "GnuplotConfig",
    "GnuplotRuntimeError",
    "LineType",
    "PlotDataError",
    "PlotError",
    "PlotOption",
    "PlotType",
    "PointType",
    "ScriptWriteError",
    "Series",
    "SpawnError",
    "Terminal",
    "Title",
    "figure",
]
