from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

import numpy as np

from simplot import Figure, LineType, PlotType, PointType, Title, figure


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="simplot")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    demo = sub.add_parser("demo", help="Render the built-in example figures.")
    demo.add_argument("--output", type=Path, default=Path("output.png"))
    demo.add_argument("--styled", action="store_true", help="Use the styled example (log scale, ticks, error bars).")
    _add_sink_arguments(demo)

    plot = sub.add_parser("plot", help="Plot columns from a whitespace or comma separated data file.")
    plot.add_argument("data", type=Path)
    plot.add_argument("--output", type=Path, required=True)
    plot.add_argument("--columns", default="0,1", help="Zero-based x,y column indices. Default: 0,1.")
    plot.add_argument("--title", default=None)
    plot.add_argument("--xlabel", default=None)
    plot.add_argument("--ylabel", default=None)
    plot.add_argument("--points", action="store_true", help="Draw points instead of lines.")
    plot.add_argument("--size", type=int, nargs=2, metavar=("WIDTH", "HEIGHT"), default=None)
    plot.add_argument("--terminal", choices=["png", "svg"], default=None)
    _add_sink_arguments(plot)
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "demo":
        fig = _styled_demo(args.output) if args.styled else _simple_demo(args.output)
        _emit(fig, args)
        return

    if args.command == "plot":
        x_col, y_col = _parse_columns(args.columns)
        delimiter = "," if args.data.suffix.lower() == ".csv" else None
        table = np.loadtxt(args.data, delimiter=delimiter, ndmin=2)
        if max(x_col, y_col) >= table.shape[1]:
            raise RuntimeError(f"{args.data} has only {table.shape[1]} columns")
        options = [Title(args.title)] if args.title else []
        fig = figure(args.output, size=tuple(args.size) if args.size else None, terminal=args.terminal)
        if args.xlabel:
            fig.set_xlabel(args.xlabel)
        if args.ylabel:
            fig.set_ylabel(args.ylabel)
        fig.plot(
            table[:, x_col],
            table[:, y_col],
            plot_type=PlotType.POINTS if args.points else PlotType.LINES,
            options=options,
        )
        _emit(fig, args)
        return

    raise RuntimeError(f"unsupported command: {args.command}")


def _add_sink_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--echo", action="store_true", help="Write the script to stdout.")
    parser.add_argument("--script", type=Path, default=None, help="Save the script to this path.")
    parser.add_argument("--draw", action="store_true", help="Pipe the script into gnuplot.")


def _emit(fig: Figure, args: argparse.Namespace) -> None:
    if not (args.echo or args.script or args.draw):
        raise RuntimeError("nothing to do: pass --echo, --script or --draw")
    if args.echo:
        fig.echo(sys.stdout.buffer)
        sys.stdout.buffer.flush()
    if args.script is not None:
        fig.save_script(args.script)
    if args.draw:
        fig.draw()


def _parse_columns(raw: str) -> tuple[int, int]:
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) != 2:
        raise ValueError("--columns expects two comma separated indices")
    x_col, y_col = (int(p) for p in parts)
    if x_col < 0 or y_col < 0:
        raise ValueError("column indices must be >= 0")
    return x_col, y_col


def _simple_demo(output: Path) -> Figure:
    return (
        figure(output, size=(1366, 768))
        .plot(range(0, 3), range(0, 3))
        .plot(range(0, 3), reversed(range(0, 3)))
    )


def _styled_demo(output: Path) -> Figure:
    return (
        figure(output, size=(1366, 768))
        .set_logscale(y=True)
        .set_title("X")
        .set_xlabel("x -->")
        .set_ytics(["Zero", "Five", "Ten"], [0, 5, 10])
        .set_yrange(1.0, 100.0)
        .set_ylabel("y -->")
        .plot(range(0, 20), range(0, 20), plot_type=PlotType.POINTS, options=[PointType.SQUARE, Title("Rising")])
        .plot(range(0, 20), reversed(range(0, 20)), options=[LineType.SMALL_DOT])
        .xerrorbars(range(0, 20), reversed(range(0, 20)), reversed(range(-2, 18)), reversed(range(1, 21)))
    )


if __name__ == "__main__":
    main()
