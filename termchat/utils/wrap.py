"""Incremental word wrapping for styled terminal text.

Text is held until its line is complete, then wrapped by rich, which reads
the ANSI escapes already in it and measures wide characters in cells.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Tuple

from rich.text import Text

from .ansi import console, to_ansi


@dataclass(frozen=True)
class WrapState:
    width: int
    pending: str = ""


def initial_state(width: int) -> WrapState:
    if width <= 0:
        raise ValueError(f"wrap width must be positive, got {width}")
    return WrapState(width=width)


def wrap_line(line: str, width: int) -> str:
    """Wrap one line (no newline in it) at word boundaries."""
    rows = []
    for row in Text.from_ansi(line).wrap(console, width):
        row.rstrip()
        rows.append(to_ansi(row))
    return "\n".join(rows)


def feed(state: WrapState, text: str) -> Tuple[WrapState, str]:
    """Wrap every line *text* completes; the unfinished line stays buffered."""
    head, newline, tail = (state.pending + text).rpartition("\n")
    if not newline:
        return replace(state, pending=tail), ""
    out = "".join(wrap_line(line, state.width) + "\n" for line in head.split("\n"))
    return replace(state, pending=tail), out


def finish(state: WrapState) -> str:
    return wrap_line(state.pending, state.width) if state.pending else ""
