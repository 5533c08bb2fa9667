import contextlib
import io
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "telemetry"))

from blessed import Terminal
from blessed.keyboard import Keystroke

from soctop_core.navigation import Command
from soctop_renderer.terminal import TerminalIOFailure, TerminalSession, translate_key


def _seq(name, code=1000):
    return Keystroke(ucs="\x1b[?", code=code, name=name)


class TranslateKeyTests(unittest.TestCase):
    def test_quit_keys(self):
        self.assertIs(translate_key(Keystroke("q")), Command.QUIT)
        self.assertIs(translate_key(Keystroke("Q")), Command.QUIT)
        self.assertIs(translate_key(_seq("KEY_ESCAPE")), Command.QUIT)

    def test_tab_switch_keys(self):
        self.assertIs(translate_key(_seq("KEY_RIGHT")), Command.NEXT_TAB)
        self.assertIs(translate_key(_seq("KEY_TAB")), Command.NEXT_TAB)
        self.assertIs(translate_key(Keystroke("\t")), Command.NEXT_TAB)
        self.assertIs(translate_key(_seq("KEY_LEFT")), Command.PREVIOUS_TAB)
        self.assertIs(translate_key(_seq("KEY_BTAB")), Command.PREVIOUS_TAB)

    def test_other_keys_ignored(self):
        self.assertIsNone(translate_key(Keystroke("x")))
        self.assertIsNone(translate_key(_seq("KEY_UP")))

    def test_timeout_yields_nothing(self):
        self.assertIsNone(translate_key(Keystroke("")))
        self.assertIsNone(translate_key(None))


class TerminalSessionTests(unittest.TestCase):
    def test_non_interactive_stream_rejected(self):
        term = Terminal(kind="xterm-256color", stream=io.StringIO(), force_styling=True)
        with self.assertRaises(TerminalIOFailure):
            with TerminalSession(term):
                pass


class RecordingTerm:
    """Stands in for a blessed Terminal attached to a tty."""

    is_a_tty = True
    width = 80
    height = 24

    def __init__(self, failing_exit=None):
        self.events = []
        self.failing_exit = failing_exit

    @contextlib.contextmanager
    def _mode(self, name):
        self.events.append(("enter", name))
        try:
            yield
        finally:
            self.events.append(("exit", name))
            if name == self.failing_exit:
                raise OSError(f"{name} restore failed")

    def fullscreen(self):
        return self._mode("fullscreen")

    def cbreak(self):
        return self._mode("cbreak")

    def hidden_cursor(self):
        return self._mode("hidden_cursor")

    def exited(self):
        return [name for kind, name in self.events if kind == "exit"]


class TerminalRestoreTests(unittest.TestCase):
    def test_clean_exit_restores_in_reverse_order(self):
        term = RecordingTerm()
        with TerminalSession(term):
            self.assertEqual(term.exited(), [])
        self.assertEqual(term.exited(), ["hidden_cursor", "cbreak", "fullscreen"])

    def test_render_failure_still_restores(self):
        term = RecordingTerm()
        with self.assertRaises(ZeroDivisionError):
            with TerminalSession(term):
                raise ZeroDivisionError("chart height")
        self.assertEqual(term.exited(), ["hidden_cursor", "cbreak", "fullscreen"])

    def test_restore_failure_surfaces_without_pending_error(self):
        term = RecordingTerm(failing_exit="cbreak")
        with self.assertRaises(TerminalIOFailure):
            with TerminalSession(term):
                pass
        self.assertEqual(term.exited(), ["hidden_cursor", "cbreak", "fullscreen"])

    def test_restore_failure_logged_when_body_failed(self):
        term = RecordingTerm(failing_exit="cbreak")
        with self.assertLogs("soctop.terminal", level="ERROR"):
            with self.assertRaises(KeyError):
                with TerminalSession(term):
                    raise KeyError("tab")
        self.assertIn("fullscreen", term.exited())


if __name__ == "__main__":
    unittest.main()
