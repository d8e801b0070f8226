from __future__ import annotations


class PlotError(Exception):
    """Base class for every error raised by simplot."""


class PlotDataError(PlotError, ValueError):
    pass


class ConfigurationError(PlotError):
    pass


class EmptyPlotError(PlotError):
    pass


class ScriptWriteError(PlotError, OSError):
    pass


class SpawnError(PlotError, OSError):
    pass


class GnuplotRuntimeError(PlotError, RuntimeError):
    """gnuplot exited with a non-zero status."""

    def __init__(self, returncode: int, stderr: str) -> None:
        self.returncode = returncode
        self.stderr = stderr
        detail = stderr.strip() or "no error output"
        super().__init__(f"gnuplot exited with status {returncode}: {detail}")
