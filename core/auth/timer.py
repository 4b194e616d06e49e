# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0

"""Performance timing for the sign-in flow.

Tracks the time of individual steps (validation, user lookup, token
signing) relative to the moment the timer was created.  All values are
milliseconds.  Lookups of unknown labels return ``-1`` instead of raising.
"""

from __future__ import annotations

import logging
import time
from typing import Callable

logger = logging.getLogger("chatbot.perf")

MISSING = -1.0


class AuthTimer:
    def __init__(self, clock: Callable[[], float] = time.perf_counter) -> None:
        self._clock = clock
        self.start_time = clock()
        self.marks: dict[str, float] = {}

    def mark(self, label: str) -> None:
        # Re-marking moves the label to the end of the insertion order
        self.marks.pop(label, None)
        self.marks[label] = self._clock()

    def get_elapsed(self, label: str) -> float:
        """Milliseconds from timer start to the *label* mark."""
        mark_time = self.marks.get(label)
        if mark_time is None:
            return MISSING
        return (mark_time - self.start_time) * 1000

    def get_time_since(self, label: str) -> float:
        """Milliseconds from the *label* mark until now."""
        mark_time = self.marks.get(label)
        if mark_time is None:
            return MISSING
        return (self._clock() - mark_time) * 1000

    def get_total_elapsed(self) -> float:
        return (self._clock() - self.start_time) * 1000

    def get_metrics(self) -> dict[str, float]:
        """Return ``total`` plus ``<label>_total`` / ``<label>_delta`` per mark.

        Marks are walked in chronological order; equal timestamps keep
        their insertion order (``sorted`` is stable).
        """
        metrics: dict[str, float] = {"total": self.get_total_elapsed()}

        ordered = sorted(self.marks.items(), key=lambda item: item[1])
        prev_time = self.start_time
        for label, mark_time in ordered:
            metrics[f"{label}_total"] = (mark_time - self.start_time) * 1000
            metrics[f"{label}_delta"] = (mark_time - prev_time) * 1000
            prev_time = mark_time

        return metrics

    def format_metrics(self, prefix: str = "Auth") -> str:
        metrics_str = ", ".join(
            f"{key}={value:.2f}ms" for key, value in self.get_metrics().items()
        )
        return f"[{prefix}] {metrics_str}"

    def log_metrics(self, prefix: str = "Auth") -> None:
        logger.info(self.format_metrics(prefix))
