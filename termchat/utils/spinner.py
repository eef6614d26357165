"""Spinner shown while waiting for the first byte of a response."""
from __future__ import annotations

from yaspin import yaspin  # type: ignore

from .ansi import console


class Spinner:
    """Display a small spinner next to a prefix while work is done.

    The spinner only animates on a real terminal; otherwise just the prefix is
    printed so piped output stays clean.
    """

    def __init__(self, prefix: str = ""):
        self._prefix = prefix
        self._started = False
        self._spinner = yaspin(text="", side="right") if console.is_terminal else None

    def start(self) -> None:
        if self._started:
            return
        if self._prefix:
            console.print(self._prefix, end="")
            console.file.flush()
        if self._spinner is not None:
            self._spinner.start()
        self._started = True

    def stop(self) -> None:
        if not self._started:
            return
        if self._spinner is not None:
            self._spinner.stop()
            console.print(f"\r{self._prefix}", end="")
            console.file.flush()
        self._started = False

    def __enter__(self) -> "Spinner":
        self.start()
        return self

    def __exit__(self, *exc) -> None:
        self.stop()
