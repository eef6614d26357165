"""Readline utilities for improved terminal input handling."""

from __future__ import annotations

import logging
import re
import readline
from typing import Awaitable, Callable, Optional

from rich.console import Console

from .ansi import console as default_console
from .log import TRACE


# Regex that matches ANSI CSI escape sequences (e.g. "\033[92m"). It is
# intentionally simple because we only need to wrap, not validate.
_ANSI_PATTERN = re.compile(r"\033\[[0-9;]*[A-Za-z]")

LineHandler = Callable[[str], Awaitable[bool]]


def readline_safe_prompt(prompt: str) -> str:
    """Return *prompt* with ANSI escapes wrapped for correct Readline width.

    When coloured ANSI escape sequences are included in the prompt string that
    is passed to `input()`, GNU Readline (used by Python for interactive input
    if available) counts those bytes as **printable** characters unless
    instructed otherwise. This results in mis-aligned cursor positioning and
    broken line wrapping once the user types beyond the terminal width.

    Readline solves this by allowing non-printing parts to be wrapped between
    the control characters \001 (start of *hidden* sequence) and \002 (end).
    """
    if "\033[" not in prompt:  # fast-path – no colour codes present
        return prompt

    # Insert \001/\002 around each escape sequence. We must keep the escape
    # codes themselves unchanged so the terminal still interprets them.
    return _ANSI_PATTERN.sub(lambda m: f"\001{m.group(0)}\002", prompt)


class LineEditor:
    """Drive a per-line handler from readline input.

    Editing keys (Ctrl-A/E/K/U/W, history) come from GNU readline. The handler
    returns ``True`` to stop the loop. End of input (Ctrl-D) and Ctrl-C on an
    empty line stop the loop as well; Ctrl-C with a partially typed line only
    discards that line.
    """

    def __init__(
        self,
        prompt: str,
        logger: Optional[logging.Logger] = None,
        console: Optional[Console] = None,
    ):
        self.console = console or default_console
        self.logger = logger
        self.prompt = readline_safe_prompt(self._render(prompt))

    def _render(self, markup: str) -> str:
        with self.console.capture() as capture:
            self.console.print(markup, end="")
        return capture.get()

    def _log(self, level: int, msg: str, *args) -> None:
        if self.logger is not None:
            self.logger.log(level, msg, *args)

    async def run(self, handler: LineHandler) -> None:
        while True:
            try:
                line = input(self.prompt)
            except EOFError:
                self._log(logging.DEBUG, "end of input")
                self.console.print()
                return
            except KeyboardInterrupt:
                if readline.get_line_buffer():
                    self.console.print()
                    continue
                self._log(logging.DEBUG, "interrupted on empty line")
                self.console.print()
                return

            self._log(TRACE, "input line: %r", line)
            if await handler(line):
                return
