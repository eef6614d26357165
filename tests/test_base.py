import io
import unittest
from unittest.mock import AsyncMock, Mock, patch

from termchat import ChatCLI, ChatClient, SessionState
from termchat.core import StreamChunk
from termchat.utils import LineEditor, console, err_console

SYSTEM_PROMPT = "You are a helpful terminal assistant."


def openai_chunk(text):
    """A chat.completions stream chunk as returned by the SDK."""
    return Mock(choices=[Mock(delta=Mock(content=text))])


class FakeStream:
    """Async iterable standing in for ``AsyncStream[ChatCompletionChunk]``."""

    def __init__(self, chunks, error=None):
        self.chunks = list(chunks)
        self.error = error

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for chunk in self.chunks:
            yield chunk
        if self.error is not None:
            raise self.error


def sdk_reply(*texts):
    return FakeStream([openai_chunk(t) for t in texts])


async def chunk_stream(*texts):
    for text in texts:
        yield StreamChunk(text)


class BaseChatCLITest(unittest.IsolatedAsyncioTestCase):
    system_prompt = SYSTEM_PROMPT

    def setUp(self):
        # Capture everything written through the rich consoles
        self.stdout = io.StringIO()
        self.stderr = io.StringIO()
        self.stdout_patcher = patch.object(console, "_file", self.stdout)
        self.stderr_patcher = patch.object(err_console, "_file", self.stderr)
        self.stdout_patcher.start()
        self.stderr_patcher.start()

        # Mock the OpenAI client
        self.mock_openai = Mock()
        self.mock_openai.chat.completions.create = AsyncMock()
        self.mock_openai.close = AsyncMock()
        self.client = ChatClient(self.mock_openai, "gpt-4o")

        self.test_state = SessionState.start(self.client, self.system_prompt)
        self.chat_cli = ChatCLI(self.test_state, editor=LineEditor("> "))

    def tearDown(self):
        self.stdout_patcher.stop()
        self.stderr_patcher.stop()

    def replies(self, *streams):
        self.mock_openai.chat.completions.create.side_effect = list(streams)

    def sent_messages(self, call_index=-1):
        return self.mock_openai.chat.completions.create.call_args_list[call_index].kwargs["messages"]
