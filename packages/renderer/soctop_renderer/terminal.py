"""Terminal lifecycle and key input on top of blessed."""

from __future__ import annotations

import contextlib
import logging
import termios
from typing import Any

from blessed import Terminal

from soctop_core.navigation import Command

logger = logging.getLogger("soctop.terminal")

KEY_COMMANDS: dict[str, Command] = {
    "KEY_ESCAPE": Command.QUIT,
    "KEY_LEFT": Command.PREVIOUS_TAB,
    "KEY_BTAB": Command.PREVIOUS_TAB,
    "KEY_RIGHT": Command.NEXT_TAB,
    "KEY_TAB": Command.NEXT_TAB,
}

CHAR_COMMANDS: dict[str, Command] = {
    "q": Command.QUIT,
    "Q": Command.QUIT,
    "\t": Command.NEXT_TAB,
    "\x1b": Command.QUIT,
}


class TerminalIOFailure(RuntimeError):
    """Setting up or restoring the interactive display failed."""


def translate_key(key: Any) -> Command | None:
    if not key:
        return None
    if getattr(key, "is_sequence", False):
        return KEY_COMMANDS.get(key.name)
    return CHAR_COMMANDS.get(str(key))


class TerminalSession:
    """Alternate screen, cbreak input and hidden cursor for the lifetime of the context."""

    def __init__(self, term: Terminal | None = None) -> None:
        self.term = term or Terminal()
        self._stack: contextlib.ExitStack | None = None

    def __enter__(self) -> "TerminalSession":
        if not self.term.is_a_tty:
            raise TerminalIOFailure("soctop needs an interactive terminal")
        stack = contextlib.ExitStack()
        try:
            stack.enter_context(self.term.fullscreen())
            stack.enter_context(self.term.cbreak())
            stack.enter_context(self.term.hidden_cursor())
        except (OSError, termios.error, ValueError) as exc:
            stack.close()
            raise TerminalIOFailure(f"terminal setup failed: {exc}") from exc
        self._stack = stack
        logger.info("terminal session started %sx%s", self.term.width, self.term.height)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        stack, self._stack = self._stack, None
        if stack is None:
            return
        try:
            stack.close()
        except (OSError, termios.error, ValueError) as restore_exc:
            if exc_type is None:
                raise TerminalIOFailure(f"terminal restore failed: {restore_exc}") from restore_exc
            logger.error("terminal restore failed after %s: %s", exc_type.__name__, restore_exc)

    def poll_key(self, timeout: float) -> Command | None:
        return translate_key(self.term.inkey(timeout=timeout))
