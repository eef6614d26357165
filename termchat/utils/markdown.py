"""Incremental markdown styling for streamed replies.

The transform is a pair of pure functions over an immutable
:class:`MarkdownState`: ``feed`` takes the next fragment and returns the new
state together with the text to show, ``finish`` releases whatever is still
held back once the stream ends.

Prose is parsed with markdown-it one line at a time, as soon as the line's
newline arrives, and styled through :class:`rich.text.Text`. Emphasis and
code spans therefore never reach past the line they open on. Inside a fenced
code block there is nothing to parse, so code is shown as it arrives.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Optional, Sequence, Tuple

from markdown_it import MarkdownIt
from markdown_it.token import Token
from rich.style import Style
from rich.text import Text

from .ansi import Ansi, to_ansi, wants_color

HEADING = Style(bold=True, color=Ansi.FG_MAGENTA)
BOLD = Style(bold=True)
ITALIC = Style(italic=True)
CODE = Style(color=Ansi.FG_CYAN)
FENCE = Style(dim=True)
QUOTE = Style(dim=True)
LINK = Style(underline=True)
BULLET = "• "

_md = MarkdownIt()

_OPENERS = {"strong_open": BOLD, "em_open": ITALIC, "link_open": LINK}
_CLOSERS = {"strong_close", "em_close", "link_close"}


@dataclass(frozen=True)
class MarkdownState:
    """Where the styler is between two fragments.

    ``pending`` is text not shown yet: the unfinished line, or the start of
    a code line that may turn out to close the fence. ``fence`` is the
    opening marker of the code block we are in, if any.
    """

    color: bool
    pending: str = ""
    fence: Optional[str] = None
    code_line_open: bool = False


def initial_state(color: Optional[bool] = None) -> MarkdownState:
    """Start a new transform. By default colour follows the stdout console."""
    if color is None:
        color = wants_color()
    return MarkdownState(color=color)


def _show(text: Text, color: bool) -> str:
    return to_ansi(text) if color else text.plain


def _inline(text: Text, children: Sequence[Token], base: Optional[Style] = None) -> None:
    stack: List[Style] = [] if base is None else [base]
    floor = len(stack)
    for token in children:
        kind = token.type
        if kind in _OPENERS:
            stack.append(_OPENERS[kind])
        elif kind in _CLOSERS:
            if len(stack) > floor:
                stack.pop()
        elif kind == "code_inline":
            text.append(token.content, Style.combine(stack + [CODE]))
        elif kind in ("softbreak", "hardbreak"):
            text.append("\n")
        else:
            text.append(token.content, Style.combine(stack))


def _block(line: str) -> Tuple[Text, Optional[str]]:
    """Style one complete line; also return the fence marker it opens."""
    body = line.lstrip()
    indent = line[: len(line) - len(body)]
    text = Text(indent)
    ordered = False
    heading = False

    for token in _md.parse(body):
        kind = token.type
        if kind == "fence":
            text.append(body.rstrip(), FENCE)
            return text, token.markup
        if kind == "ordered_list_open":
            ordered = True
        elif kind == "list_item_open":
            text.append(f"{token.info or '1'}{token.markup} " if ordered else BULLET)
        elif kind == "blockquote_open":
            text.append("│ ", QUOTE)
        elif kind == "heading_open":
            heading = True
        elif kind == "heading_close":
            heading = False
        elif kind == "hr":
            text.append(token.markup, FENCE)
        elif kind == "inline":
            _inline(text, token.children or [], HEADING if heading else None)
        elif kind == "html_block":
            text.append(token.content.rstrip("\n"))
    return text, None


def _closes(line: str, fence: str) -> bool:
    stripped = line.strip()
    return stripped.startswith(fence) and not stripped.strip(fence[0])


def _may_close(partial: str, fence: str) -> bool:
    stripped = partial.lstrip()
    return fence.startswith(stripped) or stripped.startswith(fence)


def feed(state: MarkdownState, fragment: str) -> Tuple[MarkdownState, str]:
    """Consume *fragment*; return the new state and the styled output."""
    data = state.pending + fragment
    fence = state.fence
    code_line_open = state.code_line_open
    out: List[str] = []

    while True:
        end = data.find("\n")
        if end < 0:
            break
        line, data = data[:end], data[end + 1:]
        if code_line_open:
            out.append(_show(Text(line, CODE), state.color) + "\n")
            code_line_open = False
        elif fence is not None:
            if _closes(line, fence):
                out.append(_show(Text(line, FENCE), state.color) + "\n")
                fence = None
            else:
                out.append(_show(Text(line, CODE), state.color) + "\n")
        else:
            text, fence = _block(line)
            out.append(_show(text, state.color) + "\n")

    if data and fence is not None and (code_line_open or not _may_close(data, fence)):
        out.append(_show(Text(data, CODE), state.color))
        data = ""
        code_line_open = True

    new_state = replace(state, pending=data, fence=fence, code_line_open=code_line_open)
    return new_state, "".join(out)


def finish(state: MarkdownState) -> str:
    """Release the held-back text at the end of the stream."""
    if not state.pending:
        return ""
    if state.fence is not None:
        return _show(Text(state.pending, CODE), state.color)
    text, _ = _block(state.pending)
    return _show(text, state.color)
