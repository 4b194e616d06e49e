"""Unit tests for core/auth/timer.py: sign-in timing instrumentation."""
# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging

import pytest

from core.auth.timer import MISSING, AuthTimer
from tests.helpers.fakes import ManualClock


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(start=10.0)


class TestLookups:
    def test_elapsed_for_mark(self, clock):
        timer = AuthTimer(clock)
        clock.advance(0.005)
        timer.mark("validate")
        assert timer.get_elapsed("validate") == pytest.approx(5.0)

    def test_unknown_label_returns_sentinel(self, clock):
        timer = AuthTimer(clock)
        assert timer.get_elapsed("missing") == MISSING == -1
        assert timer.get_time_since("missing") == -1

    def test_mark_at_start_is_not_treated_as_missing(self, clock):
        timer = AuthTimer(clock)
        timer.mark("immediate")
        assert timer.get_elapsed("immediate") == 0.0

    def test_time_since(self, clock):
        timer = AuthTimer(clock)
        timer.mark("a")
        clock.advance(0.010)
        assert timer.get_time_since("a") == pytest.approx(10.0)

    def test_remark_overwrites(self, clock):
        timer = AuthTimer(clock)
        timer.mark("a")
        clock.advance(0.003)
        timer.mark("a")
        assert timer.get_elapsed("a") == pytest.approx(3.0)


class TestMetrics:
    def test_totals_and_deltas_in_chronological_order(self, clock):
        timer = AuthTimer(clock)
        clock.advance(0.001)
        timer.mark("validate")
        clock.advance(0.002)
        timer.mark("beforeUserLookup")
        clock.advance(0.004)
        timer.mark("afterUserLookup")
        clock.advance(0.001)

        metrics = timer.get_metrics()
        assert list(metrics) == [
            "total",
            "validate_total", "validate_delta",
            "beforeUserLookup_total", "beforeUserLookup_delta",
            "afterUserLookup_total", "afterUserLookup_delta",
        ]
        assert metrics["total"] == pytest.approx(8.0)
        assert metrics["validate_delta"] == pytest.approx(1.0)
        assert metrics["beforeUserLookup_delta"] == pytest.approx(2.0)
        assert metrics["afterUserLookup_total"] == pytest.approx(7.0)
        assert metrics["afterUserLookup_delta"] == pytest.approx(4.0)

    def test_remarked_label_moves_to_its_new_position(self, clock):
        timer = AuthTimer(clock)
        timer.mark("a")
        clock.advance(0.001)
        timer.mark("b")
        clock.advance(0.001)
        timer.mark("a")

        labels = [k[: -len("_total")] for k in timer.get_metrics() if k.endswith("_total")]
        assert labels == ["b", "a"]

    def test_equal_timestamps_keep_insertion_order(self, clock):
        timer = AuthTimer(clock)
        timer.mark("first")
        timer.mark("second")
        metrics = timer.get_metrics()
        keys = [k for k in metrics if k.endswith("_delta")]
        assert keys == ["first_delta", "second_delta"]
        assert metrics["second_delta"] == 0.0

    def test_log_metrics_format(self, clock, caplog):
        timer = AuthTimer(clock)
        clock.advance(0.0015)
        timer.mark("validate")
        with caplog.at_level(logging.INFO, logger="chatbot.perf"):
            timer.log_metrics("Credentials")
        assert caplog.records[-1].getMessage() == (
            "[Credentials] total=1.50ms, validate_total=1.50ms, validate_delta=1.50ms"
        )
