"""Slash command handling for the interactive session."""

from __future__ import annotations

import logging
from typing import Tuple

from rich.markup import escape

from .session import SessionState
from ..utils import Ansi, console, info, success, warning

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("/quit", "/exit", "/q")
HELP_COMMANDS = ("/help", "/?")
HISTORY_PREVIEW_CHARS = 100

_ROLE_COLOURS = {
    "system": Ansi.FG_MAGENTA,
    "user": Ansi.FG_CYAN,
    "assistant": Ansi.FG_GREEN,
    "tool": Ansi.FG_YELLOW,
    "developer": Ansi.FG_BLUE,
}


def truncate(text: str, limit: int = HISTORY_PREVIEW_CHARS) -> str:
    if len(text) <= limit:
        return text
    return text[:limit] + "..."


def print_history(state: SessionState) -> None:
    for message in state.history:
        role = message.role.value
        tag = Ansi.style(escape(f"[{role}]"), _ROLE_COLOURS[role], Ansi.BOLD)
        console.print(f"{tag} {escape(truncate(message.content))}", soft_wrap=True)


def print_help() -> None:
    from .. import __doc__ as _doc  # lazy import to avoid circularity

    console.print(escape(_doc or "(no help available)"), soft_wrap=True)


def handle_command(state: SessionState, line: str) -> Tuple[SessionState, bool]:
    """Apply a slash command to *state*.

    Returns the state to adopt and whether the session should end. Only
    terminal output happens here, never a request.
    """
    parts = line.strip().split()
    if not parts:
        return state, False

    cmd = parts[0]

    if cmd in EXIT_COMMANDS:
        console.print("Bye!")
        return state, True

    elif cmd == "/clear":
        state = state.with_history(state.history.cleared())
        logger.info("history cleared (%d messages kept)", len(state.history))
        success("Conversation cleared.")

    elif cmd == "/model":
        if len(parts) == 1:
            info(f"Current model: {state.model}")
        else:
            state = state.with_model(parts[1])
            logger.info("model switched to %s", state.model)
            success(f"Model switched to {state.model}")

    elif cmd == "/history":
        print_history(state)

    elif cmd in HELP_COMMANDS:
        print_help()

    else:
        warning(f"Unknown command: {cmd} (see /help)")

    return state, False
