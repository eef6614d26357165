"""Terminal chat client for OpenAI-compatible models.

Type a message and press Enter to send it; the reply streams in as it is
generated. Lines starting with `/` are commands:

    /help, /?          – show this help
    /quit, /exit, /q   – leave the session (Ctrl-D, or Ctrl-C on an empty line, also works)
    /clear             – forget the conversation, keeping the system prompt
    /model [NAME]      – switch to model NAME, or show the current model
    /history           – list the messages sent with the next request

Line editing: Ctrl-A / Ctrl-E jump to start / end of line, Ctrl-K and Ctrl-U
delete to end / start of line, Ctrl-W deletes the previous word.

Run `python -m termchat -i` or `termchat -i` for an interactive session.
"""

__version__ = "0.1.0"

# Re-export useful symbols for convenience
from .core import (
    ChatClient,
    ChatOptions,
    ConversationHistory,
    Message,
    Role,
    SessionState,
    StreamRenderer,
)
from .cli import ChatCLI, main, run_cli, run_single_turn

__all__ = [
    "ChatClient",
    "ChatOptions",
    "ConversationHistory",
    "Message",
    "Role",
    "SessionState",
    "StreamRenderer",
    "ChatCLI",
    "main",
    "run_cli",
    "run_single_turn",
]
