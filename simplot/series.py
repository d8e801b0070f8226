from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from simplot.adapters import pack_records
from simplot.options import PlotOption, has_title, option_clause


RECORD_FORMAT = "%float64"
FLOAT64_SIZE = 8


@dataclass(frozen=True)
class Series:
    """One `plot` clause plus the inline binary block it reads."""

    args: str
    data: bytes
    records: int
    columns: int

    def __post_init__(self) -> None:
        if len(self.data) != self.records * self.columns * FLOAT64_SIZE:
            raise ValueError("series data size does not match its record count")

    @property
    def clause(self) -> str:
        return f"'-'{self.args}"


def build_series(
    kind: str,
    columns: Sequence[Any],
    options: Sequence[PlotOption] = (),
    *,
    labels: Sequence[str] | None = None,
) -> Series:
    data, records = pack_records(*columns, labels=labels)
    width = len(columns)
    using = ":".join(str(i) for i in range(1, width + 1))

    parts = [
        "binary endian=little",
        f"record={records}",
        f'format="{RECORD_FORMAT}"',
        f"using {using}",
        f"with {kind}",
    ]
    parts.extend(option_clause(option) for option in options)
    if not has_title(options):
        parts.append("notitle")

    return Series(args="".join(f" {part}" for part in parts), data=data, records=records, columns=width)
