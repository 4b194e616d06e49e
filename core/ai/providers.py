# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of AI Chatbot core/server, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Streaming access to the OpenAI-compatible language model endpoint.

Logical model ids used by the rest of the app:

- ``chat-model``: regular chat
- ``chat-model-reasoning``: chat with ``<think>`` spans hidden from output
- ``title-model``: chat title generation
- ``artifact-model``: document artifacts
"""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator

from core.config.models import LLMConfig
from core.exceptions import LLMAPIError

logger = logging.getLogger("chatbot.ai.providers")

REASONING_TAG = "think"


def _partial_suffix_len(text: str, marker: str) -> int:
    """Length of the longest suffix of *text* that starts *marker*."""
    for k in range(min(len(text), len(marker) - 1), 0, -1):
        if text.endswith(marker[:k]):
            return k
    return 0


class ReasoningExtractor:
    """Split a text stream into visible text and ``<think>`` reasoning.

    Tags may be split across chunks; a possible partial tag at the end of
    a chunk is held back until the next :meth:`feed` or :meth:`flush`.
    """

    def __init__(self, tag: str = REASONING_TAG) -> None:
        self._open = f"<{tag}>"
        self._close = f"</{tag}>"
        self._buffer = ""
        self._in_reasoning = False
        self.reasoning: list[str] = []

    def _route(self, text: str, visible: list[str]) -> None:
        if not text:
            return
        if self._in_reasoning:
            self.reasoning.append(text)
        else:
            visible.append(text)

    def feed(self, chunk: str) -> str:
        self._buffer += chunk
        visible: list[str] = []
        while True:
            marker = self._close if self._in_reasoning else self._open
            idx = self._buffer.find(marker)
            if idx == -1:
                keep = _partial_suffix_len(self._buffer, marker)
                cut = len(self._buffer) - keep
                self._route(self._buffer[:cut], visible)
                self._buffer = self._buffer[cut:]
                break
            self._route(self._buffer[:idx], visible)
            self._buffer = self._buffer[idx + len(marker):]
            self._in_reasoning = not self._in_reasoning
        return "".join(visible)

    def flush(self) -> str:
        visible: list[str] = []
        self._route(self._buffer, visible)
        self._buffer = ""
        return "".join(visible)


class LanguageModelProvider:
    """Map logical model ids to provider models and stream their output."""

    def __init__(self, config: LLMConfig) -> None:
        self._config = config
        self._models: dict[str, str] = {
            "chat-model": config.chat_model,
            "chat-model-reasoning": config.reasoning_model,
            "title-model": config.title_model,
            "artifact-model": config.artifact_model,
        }
        if config.api_base:
            logger.debug("[OpenAI Provider] BaseURL: %s", config.api_base)

    @property
    def model_ids(self) -> list[str]:
        return list(self._models)

    def resolve_model(self, model_id: str) -> str:
        """Return the litellm model string for a logical id (``KeyError`` if unknown)."""
        name = self._models[model_id]
        # litellm routes bare names by provider prefix; we always speak OpenAI
        return name if "/" in name else f"openai/{name}"

    async def _raw_stream(
        self, model_id: str, messages: list[dict[str, Any]],
    ) -> AsyncIterator[str]:
        kwargs: dict[str, Any] = {
            "model": self.resolve_model(model_id),
            "messages": messages,
            "stream": True,
        }
        if self._config.api_key:
            kwargs["api_key"] = self._config.api_key
        if self._config.api_base:
            kwargs["api_base"] = self._config.api_base

        import litellm

        try:
            response = await litellm.acompletion(**kwargs)
            async for chunk in response:
                if not chunk.choices:
                    continue
                content = chunk.choices[0].delta.content
                if content:
                    yield content
        except Exception as exc:
            logger.warning("LLM stream failed for %s: %s", model_id, exc)
            raise LLMAPIError(f"Streaming from {model_id} failed") from exc

    async def stream_text(
        self, model_id: str, messages: list[dict[str, Any]],
    ) -> AsyncIterator[str]:
        """Yield visible text chunks for *messages*; may yield nothing."""
        self.resolve_model(model_id)  # fail fast on unknown ids

        if model_id != "chat-model-reasoning":
            async for chunk in self._raw_stream(model_id, messages):
                yield chunk
            return

        extractor = ReasoningExtractor()
        async for chunk in self._raw_stream(model_id, messages):
            visible = extractor.feed(chunk)
            if visible:
                yield visible
        tail = extractor.flush()
        if tail:
            yield tail
