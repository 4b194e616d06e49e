# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from pydantic import BaseModel

from core.ai.models import DEFAULT_CHAT_MODEL, REASONING_CHAT_MODEL
from core.auth.models import UserType


class Entitlements(BaseModel):
    max_messages_per_day: int
    available_chat_model_ids: list[str]


ENTITLEMENTS_BY_USER_TYPE: dict[str, Entitlements] = {
    "regular": Entitlements(
        max_messages_per_day=100,
        available_chat_model_ids=[DEFAULT_CHAT_MODEL, REASONING_CHAT_MODEL],
    ),
}


def get_entitlements(user_type: UserType) -> Entitlements:
    return ENTITLEMENTS_BY_USER_TYPE[user_type]
