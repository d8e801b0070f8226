from __future__ import annotations

import os
from pathlib import Path
import tempfile
import unittest
from unittest import mock

from simplot import (
    ConfigurationError,
    Figure,
    GnuplotConfig,
    GnuplotRuntimeError,
    ScriptWriteError,
    SpawnError,
    Terminal,
    figure,
)


def _fake_proc(returncode: int = 0, stderr: bytes = b"") -> mock.MagicMock:
    proc = mock.MagicMock()
    proc.communicate.return_value = (b"", stderr)
    proc.returncode = returncode
    return proc


class SaveScriptTests(unittest.TestCase):
    def test_save_script_writes_rendering_verbatim(self) -> None:
        fig = Figure().set_output_file("out.png").plot([0, 1], [1, 0])
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "plot.gp"
            self.assertIs(fig.save_script(path), fig)
            self.assertEqual(path.read_bytes(), fig.render())

    def test_save_script_reports_creation_failure(self) -> None:
        fig = Figure().set_output_file("out.png").plot([0, 1], [1, 0])
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "missing" / "plot.gp"
            with self.assertRaises(ScriptWriteError) as ctx:
                fig.save_script(path)
        self.assertIsInstance(ctx.exception, OSError)
        self.assertIsInstance(ctx.exception.__cause__, OSError)

    def test_save_script_creates_nothing_when_rendering_fails(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "plot.gp"
            with self.assertRaises(ConfigurationError):
                Figure().plot([1], [1]).save_script(path)
            self.assertFalse(path.exists())


class DrawTests(unittest.TestCase):
    def test_draw_pipes_script_into_gnuplot(self) -> None:
        fig = Figure().set_output_file("out.png").plot([0, 1], [1, 0])
        proc = _fake_proc()
        with mock.patch("simplot.figure.subprocess.Popen", return_value=proc) as popen:
            self.assertIs(fig.draw(), fig)
        args, kwargs = popen.call_args
        self.assertEqual(args[0], ["gnuplot"])
        self.assertIsNotNone(kwargs["stdin"])
        proc.communicate.assert_called_once_with(fig.render())

    def test_draw_uses_configured_executable(self) -> None:
        fig = Figure(config=GnuplotConfig(executable="/opt/gnuplot/bin/gnuplot"))
        fig.set_output_file("out.png").plot([0], [0])
        with mock.patch("simplot.figure.subprocess.Popen", return_value=_fake_proc()) as popen:
            fig.draw()
        self.assertEqual(popen.call_args[0][0], ["/opt/gnuplot/bin/gnuplot"])

    def test_non_zero_exit_raises_with_stderr(self) -> None:
        fig = Figure().set_output_file("out.png").plot([0, 1], [1, 0])
        proc = _fake_proc(returncode=1, stderr=b'line 3: undefined variable: foo\n')
        with mock.patch("simplot.figure.subprocess.Popen", return_value=proc):
            with self.assertRaises(GnuplotRuntimeError) as ctx:
                fig.draw()
        self.assertEqual(ctx.exception.returncode, 1)
        self.assertIn("undefined variable: foo", ctx.exception.stderr)
        self.assertIsInstance(ctx.exception, RuntimeError)

    def test_stderr_on_success_is_logged(self) -> None:
        fig = Figure().set_output_file("out.png").plot([0, 1], [1, 0])
        proc = _fake_proc(stderr=b"warning: empty y range\n")
        with mock.patch("simplot.figure.subprocess.Popen", return_value=proc):
            with self.assertLogs("simplot.figure", level="WARNING") as logs:
                fig.draw()
        self.assertIn("empty y range", logs.output[0])

    def test_spawn_failure_raises_spawn_error(self) -> None:
        fig = Figure().set_output_file("out.png").plot([0, 1], [1, 0])
        with mock.patch("simplot.figure.subprocess.Popen", side_effect=FileNotFoundError(2, "No such file")):
            with self.assertRaises(SpawnError) as ctx:
                fig.draw()
        self.assertIsInstance(ctx.exception, OSError)
        self.assertIn("gnuplot", str(ctx.exception))

    def test_draw_does_not_spawn_when_rendering_fails(self) -> None:
        with mock.patch("simplot.figure.subprocess.Popen") as popen:
            with self.assertRaises(ConfigurationError):
                Figure().plot([1], [1]).draw()
        popen.assert_not_called()


class ConfigTests(unittest.TestCase):
    def test_from_env_defaults(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            cfg = GnuplotConfig.from_env()
        self.assertEqual(cfg, GnuplotConfig(executable="gnuplot", default_terminal=Terminal.PNG))

    def test_from_env_overrides(self) -> None:
        env = {"SIMPLOT_GNUPLOT": "/usr/local/bin/gnuplot", "SIMPLOT_TERMINAL": "svg"}
        with mock.patch.dict(os.environ, env, clear=True):
            cfg = GnuplotConfig.from_env()
        self.assertEqual(cfg.executable, "/usr/local/bin/gnuplot")
        self.assertIs(cfg.default_terminal, Terminal.SVG)

    def test_unknown_terminal_falls_back_to_png(self) -> None:
        with mock.patch.dict(os.environ, {"SIMPLOT_TERMINAL": "gif"}, clear=True):
            with self.assertLogs("simplot.config", level="WARNING"):
                cfg = GnuplotConfig.from_env()
        self.assertIs(cfg.default_terminal, Terminal.PNG)

    def test_default_terminal_feeds_terminal_directive(self) -> None:
        fig = Figure(config=GnuplotConfig(default_terminal=Terminal.SVG)).set_output_file("o.svg").plot([1], [1])
        self.assertIn(b"set terminal svg dynamic dashed\n", fig.render())

    def test_figure_factory_applies_arguments(self) -> None:
        fig = figure("o.svg", size=(320, 200), terminal="svg", config=GnuplotConfig())
        self.assertEqual(fig.output, Path("o.svg"))
        self.assertEqual(fig.size, (320, 200))
        self.assertIs(fig.terminal, Terminal.SVG)


if __name__ == "__main__":
    unittest.main()
