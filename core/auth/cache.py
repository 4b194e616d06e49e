# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of AI Chatbot core/server, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Short-lived in-memory cache for authentication lookups.

Entries expire after ``ttl`` seconds (5 minutes by default) or on restart.
Expiry is checked lazily on read; there is no background sweep, so a
``get`` that finds a stale entry also deletes it.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

logger = logging.getLogger("chatbot.auth.cache")

K = TypeVar("K")
V = TypeVar("V")

DEFAULT_TTL = 5 * 60  # seconds


@dataclass
class CacheEntry(Generic[V]):
    value: V
    timestamp: float


class ExpiringCache(Generic[K, V]):
    """Mapping of key to value where each entry is visible for ``ttl`` seconds."""

    def __init__(
        self,
        ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[K, CacheEntry[V]] = {}

    def set(self, key: K, value: V) -> None:
        self._entries[key] = CacheEntry(value=value, timestamp=self._clock())

    def get(self, key: K) -> V | None:
        """Return the cached value, or ``None`` when missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None

        if self._clock() - entry.timestamp > self.ttl:
            # pop, not del: a concurrent reader may have evicted it already
            self._entries.pop(key, None)
            logger.debug("Evicted stale cache entry for %r", key)
            return None

        return entry.value

    def has(self, key: K) -> bool:
        return self.get(key) is not None

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
