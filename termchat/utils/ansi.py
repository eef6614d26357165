"""Colour and styling helpers built on :mod:`rich`."""

import io
import os
from typing import Optional, TextIO

from rich.console import Console
from rich.markup import escape
from rich.text import Text


console = Console(highlight=False, emoji=False)
err_console = Console(stderr=True, highlight=False, emoji=False)

# Turns styled Text into escape sequences no matter where stdout points.
_ansi_console = Console(
    file=io.StringIO(),
    force_terminal=True,
    color_system="truecolor",
    no_color=False,
    highlight=False,
    emoji=False,
    markup=False,
)


def to_ansi(text: Text) -> str:
    """Return *text* as a string with its styles as ANSI escape sequences."""
    with _ansi_console.capture() as capture:
        _ansi_console.print(text, end="", soft_wrap=True)
    return capture.get()


def wants_color(out: Optional[TextIO] = None) -> bool:
    """Whether styled output should be written to *out* (default: stdout).

    Colour needs a terminal on the other end and ``NO_COLOR`` unset.
    """
    if os.getenv("NO_COLOR") is not None:
        return False
    if out is None or out is console.file:
        return console.is_terminal
    isatty = getattr(out, "isatty", None)
    return bool(isatty is not None and isatty())


class Ansi:
    """Lightweight collection of style names used throughout the app."""

    BOLD = "bold"
    DIM = "dim"

    FG_GREEN = "green"
    FG_CYAN = "cyan"
    FG_MAGENTA = "magenta"
    FG_YELLOW = "yellow"
    FG_RED = "red"
    FG_BLUE = "blue"

    @staticmethod
    def style(text: str, *codes: str) -> str:
        """Return *text* wrapped in rich markup unless ``NO_COLOR`` is set."""
        if os.getenv("NO_COLOR") is not None:
            return text
        style = " ".join(codes)
        return f"[{style}]{text}[/]"


# Common labels used throughout the application
USER_LABEL = Ansi.style("you", Ansi.FG_CYAN, Ansi.BOLD)
ASSISTANT_LABEL = Ansi.style("assistant", Ansi.FG_GREEN, Ansi.BOLD)
ERROR_LABEL = Ansi.style("error", Ansi.FG_RED, Ansi.BOLD)
WARNING_LABEL = Ansi.style("warning", Ansi.FG_YELLOW, Ansi.BOLD)
INFO_LABEL = Ansi.style("info", Ansi.FG_BLUE, Ansi.BOLD)
SUCCESS_LABEL = Ansi.style("ok", Ansi.FG_GREEN, Ansi.BOLD)


def info(message: str) -> None:
    console.print(f"\\[{INFO_LABEL}] {escape(message)}", soft_wrap=True)


def success(message: str) -> None:
    console.print(f"\\[{SUCCESS_LABEL}] {escape(message)}", soft_wrap=True)


def warning(message: str) -> None:
    console.print(f"\\[{WARNING_LABEL}] {escape(message)}", soft_wrap=True)


def error(message: str) -> None:
    err_console.print(f"\\[{ERROR_LABEL}] {escape(message)}", soft_wrap=True)
