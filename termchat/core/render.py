"""Live rendering of a streamed response."""

from __future__ import annotations

import logging
from typing import Any, AsyncIterable, Callable, List, Optional, TextIO, Tuple

from .messages import RenderResult, StreamChunk
from ..utils import markdown, wrap
from ..utils.ansi import console, wants_color

logger = logging.getLogger(__name__)


class Transform:
    """Hold the state of a pure ``feed``/``finish`` transform between calls."""

    def __init__(
        self,
        state: Any,
        feed: Callable[[Any, str], Tuple[Any, str]],
        finish: Callable[[Any], str],
    ):
        self.state = state
        self._feed = feed
        self._finish = finish

    def push(self, text: str) -> str:
        self.state, out = self._feed(self.state, text)
        return out

    def drain(self) -> str:
        return self._finish(self.state)


def markdown_transform(color: Optional[bool] = None) -> Transform:
    return Transform(markdown.initial_state(color), markdown.feed, markdown.finish)


def wrap_transform(width: int) -> Transform:
    return Transform(wrap.initial_state(width), wrap.feed, wrap.finish)


class StreamRenderer:
    """Write one response to the terminal as it arrives.

    A renderer is good for a single stream: the markdown and wrap transforms
    carry parser state from one chunk to the next.

    In raw mode fragments are written verbatim. Otherwise each fragment goes
    through the markdown transform and, when *wrap_width* is a positive
    integer, the wrap transform. Styles are only written when *out* is a
    terminal and ``NO_COLOR`` is unset. Output is flushed after every chunk.
    """

    def __init__(
        self,
        out: Optional[TextIO] = None,
        *,
        raw: bool = False,
        wrap_width: Optional[int] = None,
        styler: Optional[Transform] = None,
        wrapper: Optional[Transform] = None,
    ):
        self.out = out if out is not None else console.file
        self.raw = raw
        self.styler = styler or markdown_transform(wants_color(self.out))
        if wrapper is None and wrap_width is not None and wrap_width > 0:
            wrapper = wrap_transform(wrap_width)
        self.wrapper = wrapper
        self._last = ""

    def _emit(self, text: str) -> None:
        if not text:
            return
        self.out.write(text)
        self.out.flush()
        self._last = text

    def _style(self, fragment: str) -> str:
        styled = self.styler.push(fragment)
        if self.wrapper is not None:
            styled = self.wrapper.push(styled)
        return styled

    def _drain(self) -> str:
        tail = self.styler.drain()
        if self.wrapper is None:
            return tail
        return self.wrapper.push(tail) + self.wrapper.drain()

    async def render(self, stream: AsyncIterable[StreamChunk]) -> RenderResult:
        parts: List[str] = []
        chunk_count = 0

        async for chunk in stream:
            chunk_count += 1
            if not chunk.text:
                continue
            parts.append(chunk.text)
            self._emit(chunk.text if self.raw else self._style(chunk.text))

        if not self.raw:
            self._emit(self._drain())
        if self._last and not self._last.endswith("\n"):
            self._emit("\n")

        text = "".join(parts)
        logger.debug("stream finished: %d chunks, %d chars", chunk_count, len(text))
        return RenderResult(text, chunk_count)
