from .errors import TermchatError, ConfigurationError, NetworkError
from .messages import Role, Message, ConversationHistory, StreamChunk, RenderResult
from .session import SessionState, ChatOptions, DEFAULT_MODEL
from .client import ChatClient, create_openai_client
from .render import StreamRenderer
from .commands import handle_command

__all__ = [
    "TermchatError",
    "ConfigurationError",
    "NetworkError",
    "Role",
    "Message",
    "ConversationHistory",
    "StreamChunk",
    "RenderResult",
    "SessionState",
    "ChatOptions",
    "DEFAULT_MODEL",
    "ChatClient",
    "create_openai_client",
    "StreamRenderer",
    "handle_command",
]
