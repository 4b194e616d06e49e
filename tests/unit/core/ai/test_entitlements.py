"""Unit tests for core/ai/models.py and core/ai/entitlements.py."""
# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from core.ai.entitlements import get_entitlements
from core.ai.models import DEFAULT_CHAT_MODEL, get_chat_models
from core.config.models import LLMConfig


class TestChatModels:
    def test_default_display_names(self):
        models = get_chat_models(LLMConfig())
        assert [m.id for m in models] == ["chat-model", "chat-model-reasoning"]
        assert [m.name for m in models] == ["GPT-4o", "GPT-4o Mini"]

    def test_configured_display_names(self):
        models = get_chat_models(
            LLMConfig(chat_model_display_name="Qwen", reasoning_model_display_name="R1"),
        )
        assert [m.name for m in models] == ["Qwen", "R1"]


class TestEntitlements:
    def test_regular_user(self):
        ent = get_entitlements("regular")
        assert ent.max_messages_per_day == 100
        assert DEFAULT_CHAT_MODEL in ent.available_chat_model_ids
        assert "chat-model-reasoning" in ent.available_chat_model_ids
