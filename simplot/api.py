from __future__ import annotations

import os

from simplot.config import GnuplotConfig
from simplot.figure import Figure
from simplot.styles import Terminal


def figure(
    output: str | os.PathLike[str] | None = None,
    *,
    size: tuple[int, int] | None = None,
    terminal: Terminal | str | None = None,
    config: GnuplotConfig | None = None,
) -> Figure:
    fig = Figure(config=config if config is not None else GnuplotConfig.from_env())
    if output is not None:
        fig.set_output_file(output)
    if size is not None:
        width, height = size
        fig.set_size(width, height)
    if terminal is not None:
        fig.set_terminal(terminal)
    return fig
