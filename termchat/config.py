"""Runtime configuration assembled from command-line flags and environment."""

from __future__ import annotations

import argparse
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, TextIO

from .core import ChatOptions, ConfigurationError, DEFAULT_MODEL

_ZSHRC_KEY = re.compile(r"(?:export\s+)?OPENAI_API_KEY\s*=\s*['\"]?([^'\"\n]+)['\"]?")


def resolve_api_key() -> str:
    """Return the API key from the environment, falling back to ``~/.zshrc``."""
    api_key = os.getenv("OPENAI_API_KEY")
    if api_key:
        return api_key

    # convenience for macOS users who only export the key in their shell rc
    zshrc_path = Path.home() / ".zshrc"
    if zshrc_path.exists():
        match = _ZSHRC_KEY.search(zshrc_path.read_text())
        if match:
            return match.group(1).strip()

    raise ConfigurationError(
        "OPENAI_API_KEY environment variable is not set "
        "(tried reading from environment and ~/.zshrc)"
    )


def resolve_prompt(prompt: Optional[str], stdin: TextIO) -> str:
    """Return the single-turn prompt from the argument or, failing that, stdin."""
    if prompt is not None:
        text = prompt.strip()
        if not text:
            raise ConfigurationError("prompt is empty")
        return text

    text = stdin.read().strip()
    if not text:
        raise ConfigurationError("no prompt given and standard input is empty")
    return text


@dataclass
class RunConfig:
    api_key: str
    model: str = DEFAULT_MODEL
    base_url: Optional[str] = None
    system_prompt: Optional[str] = None
    prompt: Optional[str] = None
    raw: bool = False
    wrap_width: Optional[int] = None
    options: ChatOptions = field(default_factory=ChatOptions)
    interactive: bool = False
    list_models: bool = False

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "RunConfig":
        wrap_width = args.wrap if args.wrap and args.wrap > 0 else None
        return cls(
            api_key=resolve_api_key(),
            model=args.model or os.getenv("OPENAI_DEFAULT_MODEL") or DEFAULT_MODEL,
            base_url=os.getenv("OPENAI_BASE_URL") or None,
            system_prompt=args.system,
            prompt=args.prompt,
            raw=args.raw,
            wrap_width=wrap_width,
            options=ChatOptions(temperature=args.temperature, max_tokens=args.max_tokens),
            interactive=args.interactive,
            list_models=args.list_models,
        )
