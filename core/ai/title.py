# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0

"""Chat title generation from the first user message."""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Mapping, Protocol

logger = logging.getLogger("chatbot.ai.title")

TITLE_MAX_LENGTH = 80

TITLE_PROMPT = """\
- you will generate a short title based on the first message a user begins a conversation with
- ensure it is not more than 80 characters long
- the title should be a summary of the user's message
- do not use quotes or colons"""


class TextStreamer(Protocol):
    def stream_text(
        self, model_id: str, messages: list[dict[str, Any]],
    ) -> AsyncIterator[str]: ...


def get_text_from_message(message: Mapping[str, Any] | str) -> str:
    """Concatenate the text parts of a UI message.

    Accepts a plain string, ``{"content": str}`` or
    ``{"parts": [{"type": "text", "text": str}, ...]}``.
    """
    if isinstance(message, str):
        return message
    parts = message.get("parts")
    if parts:
        return "".join(
            part.get("text", "") for part in parts if part.get("type") == "text"
        )
    content = message.get("content")
    return content if isinstance(content, str) else ""


async def generate_title_from_user_message(
    provider: TextStreamer,
    message: Mapping[str, Any] | str,
) -> str:
    """Stream the title model and return the collected, trimmed title.

    The chat-completions endpoint is only reachable through streaming on
    some compatible providers, so the title is streamed and concatenated
    rather than requested in one call.  Zero chunks yield ``""``.
    """
    messages = [
        {"role": "system", "content": TITLE_PROMPT},
        {"role": "user", "content": get_text_from_message(message)},
    ]

    chunks: list[str] = []
    async for chunk in provider.stream_text("title-model", messages):
        chunks.append(chunk)

    title = "".join(chunks).strip()
    if len(title) > TITLE_MAX_LENGTH:
        title = title[:TITLE_MAX_LENGTH].rstrip()
    logger.debug("Generated title (%d chunks): %s", len(chunks), title)
    return title
