"""Conversation data model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, NamedTuple, Optional, Tuple


class Role(str, Enum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"
    DEVELOPER = "developer"


@dataclass(frozen=True)
class Message:
    role: Role
    content: str

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(Role.SYSTEM, content)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(Role.USER, content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(Role.ASSISTANT, content)

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role.value, "content": self.content}


@dataclass(frozen=True)
class ConversationHistory:
    """Ordered, immutable sequence of messages.

    Every operation returns a new history, which lets the session loop roll
    back to an earlier value by simply keeping a reference to it.
    """

    messages: Tuple[Message, ...] = ()

    @classmethod
    def seeded(cls, system_prompt: Optional[str] = None) -> "ConversationHistory":
        if system_prompt:
            return cls((Message.system(system_prompt),))
        return cls()

    def append(self, message: Message) -> "ConversationHistory":
        return ConversationHistory(self.messages + (message,))

    def cleared(self) -> "ConversationHistory":
        """Drop everything except the leading system message (if any)."""
        if self.messages and self.messages[0].role is Role.SYSTEM:
            return ConversationHistory(self.messages[:1])
        return ConversationHistory()

    @property
    def last(self) -> Optional[Message]:
        return self.messages[-1] if self.messages else None

    def to_wire(self) -> List[Dict[str, str]]:
        return [m.to_dict() for m in self.messages]

    def __iter__(self) -> Iterator[Message]:
        return iter(self.messages)

    def __len__(self) -> int:
        return len(self.messages)


@dataclass(frozen=True)
class StreamChunk:
    """One unit of a streamed response. ``text`` is None for metadata-only chunks."""

    text: Optional[str] = None


class RenderResult(NamedTuple):
    text: str
    chunk_count: int
