from __future__ import annotations

from enum import Enum, IntEnum


class LineType(IntEnum):
    """Dash pattern codes understood by the `dashed` cairo terminals."""

    SMALL_DOT = 0
    SOLID = 1
    DASH = 2
    DOT = 3
    DOT_DASH = 4
    DOT_DOT_DASH = 5

    def __str__(self) -> str:
        return str(int(self))


class PointType(IntEnum):
    SQUARE = 5
    CIRCLE = 7
    TRIANGLE = 9

    def __str__(self) -> str:
        return str(int(self))


class PlotType(str, Enum):
    LINES = "lines"
    POINTS = "points"

    def __str__(self) -> str:
        return self.value


class Terminal(str, Enum):
    PNG = "pngcairo"
    SVG = "svg dynamic"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: "Terminal | str") -> "Terminal":
        """Accept a member, its keyword (`pngcairo`) or its name (`png`)."""
        if isinstance(value, Terminal):
            return value
        raw = str(value).strip()
        try:
            return cls(raw)
        except ValueError:
            pass
        try:
            return cls[raw.upper()]
        except KeyError:
            raise ValueError(f"unknown terminal: {value!r}") from None
