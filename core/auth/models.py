# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of AI Chatbot core/server, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Authentication data models for AI Chatbot."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

UserType = Literal["regular"]

USERNAME_MAX_LENGTH = 64


class LoginForm(BaseModel):
    """Submitted sign-in form.  There is no password field."""

    model_config = ConfigDict(populate_by_name=True)

    username: str = Field(min_length=1, max_length=USERNAME_MAX_LENGTH)
    redirect_url: str | None = Field(default=None, alias="redirectUrl")


class LoginStatus(str, Enum):
    IDLE = "idle"
    IN_PROGRESS = "in_progress"
    SUCCESS = "success"
    FAILED = "failed"
    INVALID_DATA = "invalid_data"


class LoginActionState(BaseModel):
    """Coarse outcome of a sign-in attempt, safe to show to end users."""

    model_config = ConfigDict(populate_by_name=True)

    status: LoginStatus = LoginStatus.IDLE
    redirect_url: str | None = Field(default=None, alias="redirectUrl")


class IdentityClaim(BaseModel):
    """Minimal verified facts about a user, produced by authentication."""

    model_config = ConfigDict(frozen=True)

    id: str
    username: str = Field(min_length=1)
    type: UserType = "regular"


class SessionUser(BaseModel):
    id: str
    username: str
    type: UserType
    name: str


class SessionView(BaseModel):
    """Client-visible projection of a session token."""

    user: SessionUser
    expires: str | None = None
