"""Session state for interactive conversations."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Dict, Optional

from .messages import ConversationHistory, Message

if TYPE_CHECKING:  # pragma: no cover
    from .client import ChatClient

DEFAULT_MODEL = "gpt-4o"


@dataclass(frozen=True)
class ChatOptions:
    """Sampling parameters forwarded on every completion call."""

    temperature: Optional[float] = None
    max_tokens: Optional[int] = None

    def to_params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {}
        if self.temperature is not None:
            params["temperature"] = self.temperature
        if self.max_tokens is not None:
            params["max_tokens"] = self.max_tokens
        return params


@dataclass(frozen=True)
class SessionState:
    """Everything an interactive session owns.

    Instances are never modified; commands and completed turns produce a new
    state which the loop adopts before reading the next line.
    """

    history: ConversationHistory
    client: "ChatClient"

    @classmethod
    def start(cls, client: "ChatClient", system_prompt: Optional[str] = None) -> "SessionState":
        return cls(history=ConversationHistory.seeded(system_prompt), client=client)

    @property
    def model(self) -> str:
        return self.client.model

    def with_history(self, history: ConversationHistory) -> "SessionState":
        return replace(self, history=history)

    def with_message(self, message: Message) -> "SessionState":
        return replace(self, history=self.history.append(message))

    def with_model(self, model: str) -> "SessionState":
        return replace(self, client=self.client.with_model(model))
