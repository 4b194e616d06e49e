# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of AI Chatbot core/server, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Database warm-up.

The sign-in path calls :meth:`DatabaseWarmup.trigger` before its first
query.  The trigger never waits: it spawns a background task that opens
the connection with a throwaway lookup and logs any failure.  Calls made
before the first warm-up has settled may each spawn their own attempt;
opening the connection is idempotent, so the duplicates are harmless.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from core.exceptions import WarmupError

logger = logging.getLogger("chatbot.db.init")

WARMUP_USERNAME = "__pool-warmup-check__"


class _UserLookup(Protocol):
    async def get_user_by_username(self, username: str) -> object | None: ...


async def initialize_database(store: _UserLookup) -> None:
    """Open a connection by looking up a username that never exists.

    Errors are logged and swallowed; the connection is usually still
    usable on the next real query.
    """
    try:
        await _probe(store)
    except WarmupError as exc:
        logger.warning("Database warm-up failed; continuing without it: %s", exc)
        return
    logger.info("Database connection warmed up")


async def _probe(store: _UserLookup) -> None:
    try:
        await store.get_user_by_username(WARMUP_USERNAME)
    except Exception as exc:
        raise WarmupError(f"warm-up lookup failed: {exc}") from exc


class DatabaseWarmup:
    """Process-wide, fire-and-forget warm-up trigger.

    ``initialized`` only ever goes from False to True.
    """

    def __init__(self, store: _UserLookup) -> None:
        self._store = store
        self._initialized = False
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def trigger(self) -> None:
        """Start a warm-up in the background unless one already completed."""
        if self._initialized:
            return
        try:
            task = asyncio.get_running_loop().create_task(
                initialize_database(self._store),
            )
        except RuntimeError:
            logger.error("[Init] No running event loop; skipping database warm-up")
            return
        self._tasks.add(task)
        task.add_done_callback(self._on_done)

    def _on_done(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.debug("[Init] Database warm-up cancelled")
            return
        exc = task.exception()
        if exc is not None:
            logger.error("[Init] Failed to initialize database: %s", exc)
            return
        self._initialized = True

    async def wait(self) -> None:
        """Wait for in-flight warm-ups. Used by shutdown and tests only."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)
