# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0

"""Chat models offered in the model selector."""

from __future__ import annotations

from pydantic import BaseModel

from core.config.models import LLMConfig

DEFAULT_CHAT_MODEL = "chat-model"
REASONING_CHAT_MODEL = "chat-model-reasoning"


class ChatModel(BaseModel):
    id: str
    name: str
    description: str


def get_chat_models(config: LLMConfig) -> list[ChatModel]:
    """Return the selectable models with their configured display names."""
    return [
        ChatModel(
            id=DEFAULT_CHAT_MODEL,
            name=config.chat_model_display_name,
            description="Advanced multimodal model with vision and text capabilities",
        ),
        ChatModel(
            id=REASONING_CHAT_MODEL,
            name=config.reasoning_model_display_name,
            description="Fast and efficient model with advanced reasoning capabilities",
        ),
    ]
