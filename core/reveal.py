# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of AI Chatbot core/server, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Typewriter-style reveal of model output.

While the source is streaming, the displayed text mirrors it exactly.
Once streaming stops and the displayed text lags behind, a timer on the
event loop advances it in steps sized so that any reveal finishes in a
roughly constant number of ticks, whatever the message length.

Timer lifecycle: exactly one ``asyncio.TimerHandle`` is owned at a time
and it is cancelled on completion, on new text, on streaming resuming
and on :meth:`TypewriterReveal.close`.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable

logger = logging.getLogger("chatbot.reveal")

DEFAULT_INTERVAL = 0.02  # seconds between ticks
DEFAULT_TICK_BUDGET = 45


class TypewriterReveal:
    """Incrementally reveal *text*.

    Args:
        text: Current source text.
        is_streaming: Whether the source is still streaming.
        enable_animation: When False, displayed text always mirrors the source.
        on_change: Called with the new displayed text whenever it changes.
        render_fn: Optional render callback used by :meth:`render`.
        loop: Event loop used for the timer; defaults to the running loop.
        interval: Seconds between ticks.
        tick_budget: Target number of ticks for a full reveal.
    """

    def __init__(
        self,
        text: str,
        is_streaming: bool,
        enable_animation: bool = True,
        *,
        on_change: Callable[[str], None] | None = None,
        render_fn: Callable[[str], Any] | None = None,
        loop: asyncio.AbstractEventLoop | None = None,
        interval: float = DEFAULT_INTERVAL,
        tick_budget: int = DEFAULT_TICK_BUDGET,
    ) -> None:
        self._text = text
        self._is_streaming = is_streaming
        self._enable_animation = enable_animation
        self._on_change = on_change
        self._render_fn = render_fn
        self._loop = loop
        self.interval = interval
        self.tick_budget = tick_budget

        self._displayed = text if is_streaming else ""
        self._handle: asyncio.TimerHandle | None = None
        self._reveal_text: str | None = None
        self._index = 0
        self._step = 1
        self._closed = False

        self._sync()

    # ── Public API ─────────────────────────────────────────

    @property
    def text(self) -> str:
        return self._text

    @property
    def is_streaming(self) -> bool:
        return self._is_streaming

    @property
    def displayed_text(self) -> str:
        return self._displayed

    @property
    def is_revealing(self) -> bool:
        return self._reveal_text is not None

    @property
    def has_pending_timer(self) -> bool:
        return self._handle is not None

    @property
    def step(self) -> int:
        return self._step

    def update(
        self,
        text: str,
        is_streaming: bool,
        enable_animation: bool | None = None,
    ) -> None:
        """Feed a new source state; unchanged inputs are a no-op."""
        if self._closed:
            raise RuntimeError("TypewriterReveal is closed")
        if enable_animation is None:
            enable_animation = self._enable_animation

        if (
            text == self._text
            and is_streaming == self._is_streaming
            and enable_animation == self._enable_animation
        ):
            return

        self._text = text
        self._is_streaming = is_streaming
        self._enable_animation = enable_animation
        self._sync()

    def tick(self) -> None:
        """Advance the reveal by one step."""
        if self._reveal_text is None:
            return
        target = len(self._reveal_text)
        self._index = min(target, self._index + self._step)
        self._set_displayed(self._reveal_text[: self._index])
        if self._index >= target:
            self._stop()

    def render(self) -> Any:
        if self._render_fn is not None:
            return self._render_fn(self._displayed)
        return self._displayed

    def close(self) -> None:
        """Tear down; cancels any pending timer."""
        self._stop()
        self._closed = True

    # ── State machine ──────────────────────────────────────

    def _sync(self) -> None:
        self._stop()

        if not self._enable_animation or self._is_streaming:
            self._set_displayed(self._text)
            return

        if self._text == self._displayed:
            return

        start = len(self._displayed)
        target = len(self._text)
        if target <= start:
            # Truncated or corrected source: snap instead of animating
            self._set_displayed(self._text)
            return

        self._reveal_text = self._text
        self._index = start
        self._step = max(1, target // self.tick_budget)
        self._schedule()

    def _schedule(self) -> None:
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(self.interval, self._on_timer)

    def _on_timer(self) -> None:
        self._handle = None
        self.tick()
        if self._reveal_text is not None:
            self._schedule()

    def _stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._reveal_text = None

    def _set_displayed(self, value: str) -> None:
        if value == self._displayed:
            return
        self._displayed = value
        if self._on_change is not None:
            self._on_change(value)
