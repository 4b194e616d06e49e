# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0

"""Row types returned by the storage layer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Visibility = Literal["public", "private"]
Role = Literal["user", "assistant", "system"]


@dataclass(frozen=True)
class User:
    id: str
    username: str
    created_at: float


@dataclass(frozen=True)
class Chat:
    id: str
    user_id: str
    title: str
    visibility: Visibility
    created_at: float


@dataclass(frozen=True)
class Message:
    id: str
    chat_id: str
    role: Role
    content: str
    created_at: float


@dataclass(frozen=True)
class DeleteUserResult:
    deleted_user: User | None
    deleted_chats: int
