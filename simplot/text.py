from __future__ import annotations

from typing import Any


_ESCAPES = str.maketrans({"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r"})


def quote(value: Any) -> str:
    """Return *value* as a gnuplot double-quoted string literal.

    Backslashes, double quotes and line breaks are escaped so the literal
    always stays on one script line; gnuplot expands `\\n` back into a line
    break when it draws the text.
    """
    return '"' + str(value).translate(_ESCAPES) + '"'


def format_number(value: float) -> str:
    """Shortest round-trip form of *value* without a trailing `.0`."""
    value = float(value)
    if value == 0.0:
        return "0"
    text = repr(value)
    if text.endswith(".0"):
        text = text[:-2]
    return text
