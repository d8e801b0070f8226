from __future__ import annotations

from dataclasses import dataclass
import logging
import os

from simplot.styles import Terminal


LOGGER = logging.getLogger(__name__)

DEFAULT_EXECUTABLE = "gnuplot"
EXECUTABLE_ENV_VAR = "SIMPLOT_GNUPLOT"
TERMINAL_ENV_VAR = "SIMPLOT_TERMINAL"


@dataclass(frozen=True)
class GnuplotConfig:
    executable: str = DEFAULT_EXECUTABLE
    default_terminal: Terminal = Terminal.PNG

    @classmethod
    def from_env(
        cls,
        *,
        executable_env_var: str = EXECUTABLE_ENV_VAR,
        terminal_env_var: str = TERMINAL_ENV_VAR,
    ) -> "GnuplotConfig":
        executable = os.getenv(executable_env_var, "").strip() or DEFAULT_EXECUTABLE
        return cls(executable=executable, default_terminal=_parse_terminal(terminal_env_var))


def _parse_terminal(env_var: str) -> Terminal:
    raw = os.getenv(env_var, "").strip()
    if raw == "":
        return Terminal.PNG
    try:
        return Terminal.parse(raw)
    except ValueError:
        LOGGER.warning("ignoring %s=%r; using %s", env_var, raw, Terminal.PNG.value)
        return Terminal.PNG
