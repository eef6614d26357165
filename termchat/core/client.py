"""OpenAI client wrapper exposing chat completions as a chunk stream."""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Dict, List, Optional

import openai
from openai import AsyncOpenAI  # type: ignore

from .errors import NetworkError
from .messages import ConversationHistory, StreamChunk
from .session import ChatOptions
from ..utils.log import TRACE

logger = logging.getLogger(__name__)

_PREVIEW_CHARS = 60


def create_openai_client(api_key: str, base_url: Optional[str] = None) -> AsyncOpenAI:
    client_kwargs: Dict[str, Any] = {"api_key": api_key}
    if base_url:
        client_kwargs["base_url"] = base_url
    return AsyncOpenAI(**client_kwargs)  # type: ignore[arg-type]


class ChatClient:
    """Thin wrapper around the OpenAI SDK bound to a single model.

    Several ``ChatClient`` instances may share one SDK client (and thus one
    connection pool); :meth:`with_model` relies on that so a model swap never
    opens new connections.
    """

    def __init__(self, client: AsyncOpenAI, model: str):
        self.client = client
        self.model = model

    def with_model(self, model: str) -> "ChatClient":
        return ChatClient(self.client, model)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def stream_chat(
        self,
        history: ConversationHistory,
        options: Optional[ChatOptions] = None,
    ) -> AsyncIterator[StreamChunk]:
        """Issue one streamed chat completion and return its chunks.

        Raises :class:`NetworkError` if the request is rejected; errors raised
        later while the stream is consumed are converted the same way.
        """
        params: Dict[str, Any] = {
            "model": self.model,
            "messages": history.to_wire(),
            "stream": True,
        }
        if options is not None:
            params.update(options.to_params())

        if logger.isEnabledFor(TRACE):
            last = history.last
            preview = last.content[:_PREVIEW_CHARS] if last else ""
            logger.log(
                TRACE,
                "request model=%s messages=%d last=%r",
                self.model,
                len(history),
                preview,
            )

        try:
            response = await self.client.chat.completions.create(**params)  # type: ignore[arg-type]
        except openai.OpenAIError as exc:
            raise NetworkError(f"OpenAI API error: {exc}") from exc

        return self._chunks(response)

    @staticmethod
    async def _chunks(response: Any) -> AsyncIterator[StreamChunk]:
        try:
            async for chunk in response:
                text = None
                if chunk.choices:
                    text = chunk.choices[0].delta.content
                yield StreamChunk(text)
        except openai.OpenAIError as exc:
            raise NetworkError(f"OpenAI API error: {exc}") from exc

    async def list_models(self) -> List[str]:
        try:
            page = await self.client.models.list()
        except openai.OpenAIError as exc:
            raise NetworkError(f"OpenAI API error: {exc}") from exc
        return sorted(m.id for m in page.data)

    async def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        await self.client.close()
