"""Terminal chat client: interactive session loop and single-turn runner."""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional, TextIO

from rich.panel import Panel

from . import __version__
from .config import RunConfig, resolve_prompt
from .core import (
    ChatClient,
    ChatOptions,
    ConfigurationError,
    ConversationHistory,
    Message,
    NetworkError,
    SessionState,
    StreamRenderer,
    create_openai_client,
    handle_command,
)
from .utils import (
    Ansi,
    ASSISTANT_LABEL,
    LOG_LEVELS,
    USER_LABEL,
    LineEditor,
    Spinner,
    console,
    error,
    init_logger,
    warning,
)

logger = logging.getLogger("termchat.cli")

# ---------------------------------------------------------------------------
# Interactive session
# ---------------------------------------------------------------------------


class ChatCLI:
    """High-level orchestration class for the interactive REPL.

    ``self.state`` is only ever replaced from :meth:`handle_line`, and each
    call finishes (including the whole streamed reply) before the editor reads
    the next line.
    """

    def __init__(
        self,
        state: SessionState,
        *,
        options: Optional[ChatOptions] = None,
        raw: bool = False,
        wrap_width: Optional[int] = None,
        editor: Optional[LineEditor] = None,
    ):
        self.state = state
        self.options = options or ChatOptions()
        self.raw = raw
        self.wrap_width = wrap_width
        self.editor = editor or LineEditor(f"{USER_LABEL}> ", logger=logger)

    # ---------------- Command handling ---------------

    def handle_command(self, line: str) -> bool:
        """Handle slash commands. Return False to exit REPL."""
        self.state, should_exit = handle_command(self.state, line)
        return not should_exit

    # ---------------- Chat turns ---------------

    async def send(self, line: str) -> None:
        # The user turn stays in history even if the request fails.
        self.state = self.state.with_message(Message.user(line))

        try:
            with Spinner(prefix=f"{ASSISTANT_LABEL}> "):
                stream = await self.state.client.stream_chat(self.state.history, self.options)
            renderer = StreamRenderer(raw=self.raw, wrap_width=self.wrap_width)
            result = await renderer.render(stream)
        except NetworkError as exc:
            console.print()
            logger.error("request failed: %s", exc)
            error(str(exc))
            return

        if not result.text:
            logger.warning("empty response after %d chunks", result.chunk_count)
            warning(
                f"Empty response from the model ({result.chunk_count} chunks); "
                "nothing added to history."
            )
            return

        self.state = self.state.with_message(Message.assistant(result.text))
        console.print()

    async def handle_line(self, line: str) -> bool:
        """Process one input line. Return True to stop the session."""
        stripped = line.strip()
        if not stripped:
            return False

        if line.startswith("/"):
            return not self.handle_command(stripped)

        await self.send(line)
        return False

    # ---------------- Interaction loop ---------------

    async def repl(self) -> None:
        """Run the interactive read–eval–print-loop."""
        console.print(Panel.fit("termchat", style="bold magenta"))
        console.print(
            Ansi.style("Type your message and press Enter. Commands start with '/'.", Ansi.FG_YELLOW),
            Ansi.style(f"Current model: {self.state.model}.", Ansi.FG_YELLOW),
            Ansi.style("Type /help for help.", Ansi.FG_YELLOW),
            sep="\n",
        )

        logger.info(
            "session started (model=%s, system prompt=%s)",
            self.state.model,
            "yes" if len(self.state.history) else "no",
        )
        await self.editor.run(self.handle_line)
        logger.info("session ended (%d messages)", len(self.state.history))


# ---------------------------------------------------------------------------
# Single turn
# ---------------------------------------------------------------------------


async def run_single_turn(
    client: ChatClient,
    prompt: Optional[str],
    *,
    system_prompt: Optional[str] = None,
    options: Optional[ChatOptions] = None,
    raw: bool = False,
    wrap_width: Optional[int] = None,
    stdin: Optional[TextIO] = None,
) -> int:
    """Send one prompt, render the reply and return the process exit code."""
    try:
        text = resolve_prompt(prompt, stdin if stdin is not None else sys.stdin)
    except ConfigurationError as exc:
        error(str(exc))
        return 1

    history = ConversationHistory.seeded(system_prompt).append(Message.user(text))
    try:
        with Spinner():
            stream = await client.stream_chat(history, options)
        result = await StreamRenderer(raw=raw, wrap_width=wrap_width).render(stream)
    except NetworkError as exc:
        logger.error("request failed: %s", exc)
        error(str(exc))
        return 1

    if not result.text:
        logger.warning("empty response after %d chunks", result.chunk_count)
    return 0


async def list_models(client: ChatClient) -> int:
    try:
        models = await client.list_models()
    except NetworkError as exc:
        logger.error("listing models failed: %s", exc)
        error(str(exc))
        return 1
    for model in models:
        marker = " <- current" if model == client.model else ""
        console.print(f"  {model}{marker}")
    return 0


# ---------------------------------------------------------------------------
# Entrypoint helpers (keeping it separate simplifies __main__ handling)
# ---------------------------------------------------------------------------


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="termchat",
        description="Chat with OpenAI models from the terminal.",
    )
    parser.add_argument("prompt", nargs="?", help="Prompt to send (default: read from stdin)")
    parser.add_argument("--model", "-m", help="Model name to use (default: $OPENAI_DEFAULT_MODEL or gpt-4o)")
    parser.add_argument("--system", "-s", help="System prompt")
    parser.add_argument("--raw", "-r", action="store_true", help="Print the reply without markdown styling")
    parser.add_argument("--wrap", "-w", type=int, help="Wrap styled output at this many columns")
    parser.add_argument("--temperature", "-t", type=float, help="Sampling temperature")
    parser.add_argument("--max-tokens", type=int, help="Maximum tokens in the reply")
    parser.add_argument("--interactive", "-i", action="store_true", help="Start an interactive session")
    parser.add_argument("--list-models", action="store_true", help="List available models and exit")
    parser.add_argument("--log-file", help="Write a log to this file")
    parser.add_argument("--log-level", choices=sorted(LOG_LEVELS), default="info", help="Log level (default: info)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


async def _run(client: ChatClient, config: RunConfig) -> int:
    try:
        if config.list_models:
            return await list_models(client)

        if config.interactive:
            state = SessionState.start(client, config.system_prompt)
            await ChatCLI(
                state,
                options=config.options,
                raw=config.raw,
                wrap_width=config.wrap_width,
            ).repl()
            return 0

        return await run_single_turn(
            client,
            config.prompt,
            system_prompt=config.system_prompt,
            options=config.options,
            raw=config.raw,
            wrap_width=config.wrap_width,
        )
    finally:
        await client.close()
        logger.debug("client closed")


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    try:
        init_logger(args.log_file, args.log_level)
    except OSError as exc:
        error(f"cannot open log file: {exc}")
        return 1

    try:
        config = RunConfig.from_args(args)
    except ConfigurationError as exc:
        logger.error("%s", exc)
        error(str(exc))
        return 1

    client = ChatClient(create_openai_client(config.api_key, config.base_url), config.model)
    return asyncio.run(_run(client, config))


def run_cli() -> None:  # pragma: no cover
    sys.exit(main())


if __name__ == "__main__":  # pragma: no cover
    run_cli()
