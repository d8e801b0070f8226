from __future__ import annotations

from dataclasses import dataclass, field
import io
import logging
import math
import os
from pathlib import Path
import subprocess
from typing import IO, Any, Iterable, Sequence

from simplot.config import GnuplotConfig
from simplot.errors import (
    ConfigurationError,
    EmptyPlotError,
    GnuplotRuntimeError,
    PlotDataError,
    ScriptWriteError,
    SpawnError,
)
from simplot.options import PlotOption
from simplot.series import Series, build_series
from simplot.styles import PlotType, Terminal
from simplot.text import format_number, quote


LOGGER = logging.getLogger(__name__)

XY_LABELS = ("x", "y")
ERRORBAR_LABELS = ("x", "y", "low", "high")


def _finite(value: Any, *, label: str) -> float:
    try:
        out = float(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise PlotDataError(f"{label} must be numeric, got {value!r}") from exc
    if not math.isfinite(out):
        raise PlotDataError(f"{label} must be finite, got {value!r}")
    return out


@dataclass(frozen=True)
class AxisRange:
    low: float
    high: float

    @property
    def reversed(self) -> bool:
        # Equal bounds count as ascending: a zero-width range with no reverse marker.
        return self.low > self.high

    def bounds(self) -> tuple[float, float]:
        if self.reversed:
            return (self.high, self.low)
        return (self.low, self.high)

    def directive(self, axis: str) -> str:
        lo, hi = self.bounds()
        line = f"set {axis}range [{format_number(lo)}:{format_number(hi)}]"
        if self.reversed:
            line += " reverse"
        return line


@dataclass(frozen=True)
class Font:
    name: str
    size: float | None = None

    def spec(self) -> str:
        if self.size is None:
            return quote(self.name)
        return quote(f"{self.name},{format_number(self.size)}")


def _tics_directive(axis: str, tics: Sequence[tuple[str, float]]) -> str:
    body = ", ".join(f"{quote(label)} {format_number(pos)}" for label, pos in tics)
    return f"set {axis}tics ({body})"


def _logscale_directive(logscale: tuple[bool, bool] | None) -> str | None:
    if logscale is None:
        return None
    axes = "".join(name for name, on in zip(XY_LABELS, logscale) if on)
    if not axes:
        return None
    return f"set logscale {axes}"


@dataclass
class Figure:
    """Accumulates gnuplot directives and series, then renders one script.

    Every setter and plotting call returns the figure so calls can be chained::

        Figure().set_output_file("out.png").plot([0, 1, 2], [0, 1, 2]).draw()

    Setters overwrite any earlier value for the same field. Rendering leaves
    the figure untouched, so it can be rendered, saved or drawn repeatedly.
    """

    config: GnuplotConfig = field(default_factory=GnuplotConfig)
    output: Path | None = None
    size: tuple[int, int] | None = None
    title: str | None = None
    xlabel: str | None = None
    ylabel: str | None = None
    xrange: AxisRange | None = None
    yrange: AxisRange | None = None
    xtics: tuple[tuple[str, float], ...] | None = None
    ytics: tuple[tuple[str, float], ...] | None = None
    logscale: tuple[bool, bool] | None = None
    terminal: Terminal | None = None
    font: Font | None = None
    _series: list[Series] = field(default_factory=list)

    # Setters ---------------------------------------------------------
    def set_output_file(self, path: str | os.PathLike[str]) -> "Figure":
        self.output = Path(path)
        return self

    def set_size(self, width: int, height: int) -> "Figure":
        if int(width) <= 0 or int(height) <= 0:
            raise ValueError("width and height must be > 0")
        self.size = (int(width), int(height))
        return self

    def set_title(self, title: Any) -> "Figure":
        self.title = str(title)
        return self

    def set_xlabel(self, label: Any) -> "Figure":
        self.xlabel = str(label)
        return self

    def set_ylabel(self, label: Any) -> "Figure":
        self.ylabel = str(label)
        return self

    def set_xrange(self, low: float, high: float) -> "Figure":
        self.xrange = AxisRange(_finite(low, label="xrange low"), _finite(high, label="xrange high"))
        return self

    def set_yrange(self, low: float, high: float) -> "Figure":
        self.yrange = AxisRange(_finite(low, label="yrange low"), _finite(high, label="yrange high"))
        return self

    def set_xtics(self, labels: Iterable[Any], positions: Iterable[float]) -> "Figure":
        self.xtics = tuple(
            (str(label), _finite(pos, label="xtics position")) for label, pos in zip(labels, positions)
        )
        return self

    def set_ytics(self, labels: Iterable[Any], positions: Iterable[float]) -> "Figure":
        self.ytics = tuple(
            (str(label), _finite(pos, label="ytics position")) for label, pos in zip(labels, positions)
        )
        return self

    def set_logscale(self, *, x: bool = False, y: bool = False) -> "Figure":
        self.logscale = (bool(x), bool(y))
        return self

    def set_terminal(self, terminal: Terminal | str) -> "Figure":
        self.terminal = Terminal.parse(terminal)
        return self

    def set_font(self, name: str, size: float | None = None) -> "Figure":
        if size is not None and float(size) <= 0:
            raise ValueError("font size must be > 0")
        self.font = Font(name=str(name), size=None if size is None else float(size))
        return self

    # Series ----------------------------------------------------------
    def plot(
        self,
        x: Any,
        y: Any,
        *,
        plot_type: PlotType | str = PlotType.LINES,
        options: Sequence[PlotOption] = (),
    ) -> "Figure":
        kind = PlotType(plot_type)
        return self._add_series(kind.value, (x, y), options, XY_LABELS)

    def xerrorbars(
        self,
        x: Any,
        y: Any,
        low: Any,
        high: Any,
        *,
        options: Sequence[PlotOption] = (),
    ) -> "Figure":
        return self._add_series("xerrorbars", (x, y, low, high), options, ERRORBAR_LABELS)

    def yerrorbars(
        self,
        x: Any,
        y: Any,
        low: Any,
        high: Any,
        *,
        options: Sequence[PlotOption] = (),
    ) -> "Figure":
        return self._add_series("yerrorbars", (x, y, low, high), options, ERRORBAR_LABELS)

    @property
    def series(self) -> list[Series]:
        return list(self._series)

    def _add_series(
        self,
        kind: str,
        columns: Sequence[Any],
        options: Sequence[PlotOption],
        labels: Sequence[str],
    ) -> "Figure":
        spec = build_series(kind, columns, tuple(options), labels=labels)
        self._series.append(spec)
        LOGGER.debug("registered %s series #%d with %d records", kind, len(self._series), spec.records)
        return self

    # Rendering -------------------------------------------------------
    def directives(self) -> list[str]:
        """Return the `set` lines that precede the `plot` command."""
        lines: list[str] = []

        logscale = _logscale_directive(self.logscale)
        if logscale is not None:
            lines.append(logscale)

        if self.output is None:
            raise ConfigurationError("no output file specified")
        lines.append(f"set output {quote(self.output)}")
        lines.append(self._terminal_directive())

        if self.title is not None:
            lines.append(f"set title {quote(self.title)}")
        if self.xlabel is not None:
            lines.append(f"set xlabel {quote(self.xlabel)}")
        if self.xrange is not None:
            lines.append(self.xrange.directive("x"))
        if self.xtics is not None:
            lines.append(_tics_directive("x", self.xtics))
        if self.ylabel is not None:
            lines.append(f"set ylabel {quote(self.ylabel)}")
        if self.yrange is not None:
            lines.append(self.yrange.directive("y"))
        if self.ytics is not None:
            lines.append(_tics_directive("y", self.ytics))
        return lines

    def _terminal_directive(self) -> str:
        terminal = self.terminal if self.terminal is not None else self.config.default_terminal
        line = f"set terminal {terminal} dashed"
        if self.size is not None:
            width, height = self.size
            line += f" size {width}, {height}"
        if self.font is not None:
            line += f" font {self.font.spec()}"
        return line

    def echo(self, dst: IO[bytes]) -> "Figure":
        """Write the full script, inline data blocks included, to *dst*."""
        header = "".join(f"{line}\n" for line in self.directives())
        if not self._series:
            raise EmptyPlotError("nothing to plot")
        plot_line = "plot " + ", ".join(spec.clause for spec in self._series) + "\n"

        dst.write(header.encode("utf-8"))
        dst.write(plot_line.encode("utf-8"))
        for spec in self._series:
            dst.write(spec.data)
        return self

    def render(self) -> bytes:
        buffer = io.BytesIO()
        self.echo(buffer)
        script = buffer.getvalue()
        LOGGER.debug("rendered script: %d series, %d bytes", len(self._series), len(script))
        return script

    def save_script(self, path: str | os.PathLike[str]) -> "Figure":
        script = self.render()
        target = Path(path)
        try:
            with open(target, "wb") as f:
                f.write(script)
        except OSError as exc:
            raise ScriptWriteError(f"couldn't create {target}: {exc}") from exc
        return self

    def draw(self) -> "Figure":
        """Pipe the script into gnuplot and wait for it to finish."""
        script = self.render()
        command = [self.config.executable]
        LOGGER.debug("spawning %s", command[0])
        try:
            proc = subprocess.Popen(
                command,
                stdin=subprocess.PIPE,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as exc:
            raise SpawnError(f"`{command[0]}`: {exc}") from exc

        _, err = proc.communicate(script)
        stderr = (err or b"").decode("utf-8", errors="replace")
        if proc.returncode != 0:
            raise GnuplotRuntimeError(proc.returncode, stderr)
        if stderr.strip():
            LOGGER.warning("gnuplot reported: %s", stderr.strip())
        return self
