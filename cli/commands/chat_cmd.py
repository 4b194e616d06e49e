# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0

"""One-shot terminal chat rendered through the typewriter reveal."""

from __future__ import annotations

import argparse
import asyncio
import sys
from typing import TextIO

from core.ai.providers import LanguageModelProvider
from core.reveal import TypewriterReveal


class TerminalPrinter:
    """``on_change`` sink that writes only what was appended since last time."""

    def __init__(self, out: TextIO) -> None:
        self._out = out
        self._printed = ""

    def __call__(self, displayed: str) -> None:
        if displayed.startswith(self._printed):
            self._out.write(displayed[len(self._printed):])
        else:
            self._out.write("\n" + displayed)
        self._out.flush()
        self._printed = displayed


async def run_chat(
    provider: LanguageModelProvider,
    message: str,
    *,
    model_id: str = "chat-model",
    stream: bool = True,
    animate: bool = True,
    out: TextIO = sys.stdout,
) -> str:
    """Send *message* and render the reply; returns the full reply text."""
    reveal = TypewriterReveal(
        "", is_streaming=stream, enable_animation=animate,
        on_change=TerminalPrinter(out),
    )
    text = ""
    try:
        async for chunk in provider.stream_text(
            model_id, [{"role": "user", "content": message}],
        ):
            text += chunk
            if stream:
                reveal.update(text, is_streaming=True)
        reveal.update(text, is_streaming=False)
        while reveal.is_revealing:
            await asyncio.sleep(reveal.interval)
    finally:
        reveal.close()
    out.write("\n")
    return text


def cmd_chat(args: argparse.Namespace) -> None:
    from core.config import load_config
    from core.exceptions import LLMAPIError

    provider = LanguageModelProvider(load_config().llm)
    try:
        asyncio.run(run_chat(
            provider,
            args.message,
            model_id=args.model,
            stream=not args.no_stream,
            animate=not args.no_animation,
        ))
    except (LLMAPIError, KeyError) as exc:
        print(f"Chat failed: {exc}", file=sys.stderr)
        sys.exit(1)
