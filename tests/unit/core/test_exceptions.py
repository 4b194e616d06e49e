"""Unit tests for core.exceptions: unified exception hierarchy."""
# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import pytest

from core.exceptions import (
    ChatbotError,
    AuthError, CredentialValidationError, IdentityResolutionError,
    DatabaseError, WarmupError,
    ExecutionError, LLMAPIError,
    ConfigError, ConfigValidationError,
)

# ── Helpers ──────────────────────────────────────────────────

LEAF_EXCEPTIONS = [
    CredentialValidationError, IdentityResolutionError,
    WarmupError,
    LLMAPIError,
    ConfigValidationError,
]

FAMILY_MAP: dict[type[ChatbotError], list[type[ChatbotError]]] = {
    AuthError: [CredentialValidationError, IdentityResolutionError],
    DatabaseError: [WarmupError],
    ExecutionError: [LLMAPIError],
    ConfigError: [ConfigValidationError],
}


# ── Hierarchy ───────────────────────────────────────────────


class TestHierarchy:
    @pytest.mark.parametrize("exc_cls", LEAF_EXCEPTIONS, ids=lambda c: c.__name__)
    def test_catch_all_with_base(self, exc_cls: type[ChatbotError]) -> None:
        with pytest.raises(ChatbotError):
            raise exc_cls("test message")

    @pytest.mark.parametrize(
        "parent, children",
        list(FAMILY_MAP.items()),
        ids=lambda x: x.__name__ if isinstance(x, type) else None,
    )
    def test_family_catch(
        self,
        parent: type[ChatbotError],
        children: list[type[ChatbotError]],
    ) -> None:
        for child in children:
            with pytest.raises(parent):
                raise child(f"testing {child.__name__}")


# ── Isolation ───────────────────────────────────────────────


class TestFamilyIsolation:
    def test_auth_error_not_caught_by_execution_error(self) -> None:
        with pytest.raises(AuthError):
            try:
                raise IdentityResolutionError("lookup failed")
            except ExecutionError:
                pytest.fail("AuthError should not be caught by ExecutionError")

    def test_database_error_not_an_auth_error(self) -> None:
        assert not issubclass(WarmupError, AuthError)

    def test_message_and_chaining_preserved(self) -> None:
        cause = OSError("disk I/O error")
        try:
            try:
                raise cause
            except OSError as exc:
                raise IdentityResolutionError("resolve failed") from exc
        except IdentityResolutionError as err:
            assert str(err) == "resolve failed"
            assert err.__cause__ is cause
