from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Union

from simplot.errors import PlotDataError
from simplot.styles import LineType, PointType
from simplot.text import quote


@dataclass(frozen=True)
class Title:
    text: str


PlotOption = Union[LineType, PointType, Title]


def option_clause(option: PlotOption) -> str:
    if isinstance(option, LineType):
        return f"lt {option}"
    if isinstance(option, PointType):
        return f"pt {option}"
    if isinstance(option, Title):
        return f"title {quote(option.text)}"
    raise PlotDataError(f"unsupported plot option: {option!r}")


def has_title(options: Iterable[PlotOption]) -> bool:
    return any(isinstance(option, Title) for option in options)
