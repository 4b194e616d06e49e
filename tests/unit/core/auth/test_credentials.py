"""Unit tests for core/auth/credentials.py: username-only sign-in flow."""
# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest

from core.auth.cache import ExpiringCache
from core.auth.credentials import CredentialsAuthenticator, parse_login_form
from core.auth.models import LoginStatus
from core.auth.session import SessionSigner
from core.exceptions import CredentialValidationError
from tests.helpers.fakes import FakeResolver


def _make_auth(
    resolver: FakeResolver | None = None,
    *,
    warmup: MagicMock | None = None,
    cache: ExpiringCache | None = None,
) -> tuple[CredentialsAuthenticator, FakeResolver, SessionSigner]:
    resolver = resolver or FakeResolver()
    signer = SessionSigner("test-secret")
    auth = CredentialsAuthenticator(resolver, signer, warmup=warmup, cache=cache)
    return auth, resolver, signer


# ── Form validation ──────────────────────────────────────


class TestParseLoginForm:
    @pytest.mark.parametrize("length", [1, 2, 32, 63, 64])
    def test_accepts_lengths_1_to_64(self, length):
        form = parse_login_form({"username": "x" * length})
        assert form.username == "x" * length

    @pytest.mark.parametrize("username", ["", "x" * 65, None, 42])
    def test_rejects_invalid_username(self, username):
        with pytest.raises(CredentialValidationError):
            parse_login_form({"username": username})

    def test_redirect_url_passthrough(self):
        form = parse_login_form({"username": "a", "redirectUrl": "/chat/1"})
        assert form.redirect_url == "/chat/1"

    def test_redirect_url_optional(self):
        assert parse_login_form({"username": "a"}).redirect_url is None


# ── authorize ────────────────────────────────────────────


class TestAuthorize:
    @pytest.mark.asyncio
    async def test_creates_unseen_user(self):
        auth, resolver, _ = _make_auth()
        claim = await auth.authorize({"username": "alice"})
        assert claim is not None
        assert claim.username == "alice"
        assert claim.type == "regular"
        assert resolver.users["alice"].id == claim.id

    @pytest.mark.asyncio
    async def test_same_username_same_id(self):
        auth, _, _ = _make_auth()
        first = await auth.authorize({"username": "newcomer"})
        second = await auth.authorize({"username": "newcomer"})
        assert first is not None and second is not None
        assert first.id == second.id

    @pytest.mark.asyncio
    @pytest.mark.parametrize("credentials", [None, {}, {"username": ""}, {"username": 7}])
    async def test_missing_username_returns_none(self, credentials):
        auth, resolver, _ = _make_auth()
        assert await auth.authorize(credentials) is None
        assert resolver.calls == []

    @pytest.mark.asyncio
    async def test_resolver_error_returns_none(self, caplog):
        auth, _, _ = _make_auth(FakeResolver(fail_with=RuntimeError("db down")))
        with caplog.at_level(logging.ERROR, logger="chatbot.auth"):
            assert await auth.authorize({"username": "alice"}) is None
        assert any("Failed to ensure user" in r.getMessage() for r in caplog.records)

    @pytest.mark.asyncio
    async def test_triggers_warmup_before_lookup(self):
        warmup = MagicMock()
        auth, _, _ = _make_auth(warmup=warmup)
        await auth.authorize({"username": "alice"})
        warmup.trigger.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_warmup_triggered_even_without_username(self):
        warmup = MagicMock()
        auth, _, _ = _make_auth(warmup=warmup)
        await auth.authorize({})
        warmup.trigger.assert_called_once_with()

    @pytest.mark.asyncio
    async def test_cache_hit_skips_resolver(self):
        cache: ExpiringCache = ExpiringCache()
        auth, resolver, _ = _make_auth(cache=cache)
        await auth.authorize({"username": "alice"})
        await auth.authorize({"username": "alice"})
        assert resolver.calls == ["alice"]
        assert cache.has("alice")

    @pytest.mark.asyncio
    async def test_failed_resolution_is_not_cached(self):
        cache: ExpiringCache = ExpiringCache()
        auth, _, _ = _make_auth(FakeResolver(fail_with=RuntimeError("x")), cache=cache)
        await auth.authorize({"username": "alice"})
        assert not cache.has("alice")


# ── login ────────────────────────────────────────────────


class TestLogin:
    @pytest.mark.asyncio
    async def test_success_issues_token(self):
        auth, _, signer = _make_auth()
        result = await auth.login({"username": "小明"})

        assert result.state.status == LoginStatus.SUCCESS
        assert result.token is not None
        view = signer.read_session(result.token)
        assert view is not None
        assert view.user.username == "小明"
        assert view.user.type == "regular"

    @pytest.mark.asyncio
    async def test_success_carries_redirect(self):
        auth, _, _ = _make_auth()
        result = await auth.login({"username": "a", "redirectUrl": "/chat/9"})
        assert result.state.redirect_url == "/chat/9"

    @pytest.mark.asyncio
    async def test_empty_username_is_invalid_data(self):
        auth, resolver, _ = _make_auth()
        result = await auth.login({"username": ""})
        assert result.state.status == LoginStatus.INVALID_DATA
        assert result.token is None
        assert resolver.calls == []

    @pytest.mark.asyncio
    async def test_overlong_username_is_invalid_data(self):
        auth, _, _ = _make_auth()
        result = await auth.login({"username": "x" * 65})
        assert result.state.status == LoginStatus.INVALID_DATA

    @pytest.mark.asyncio
    async def test_resolver_failure_is_failed_without_token(self):
        auth, _, _ = _make_auth(FakeResolver(fail_with=RuntimeError("db password wrong")))
        result = await auth.login({"username": "alice"})
        assert result.state.status == LoginStatus.FAILED
        assert result.token is None
        assert result.claim is None

    @pytest.mark.asyncio
    async def test_signing_failure_is_failed(self):
        auth, _, signer = _make_auth()
        signer.issue = MagicMock(side_effect=RuntimeError("sign"))  # type: ignore[method-assign]
        result = await auth.login({"username": "alice"})
        assert result.state.status == LoginStatus.FAILED
        assert result.token is None

    @pytest.mark.asyncio
    async def test_logs_timing_metrics(self, caplog):
        auth, _, _ = _make_auth()
        with caplog.at_level(logging.INFO, logger="chatbot.perf"):
            await auth.login({"username": "alice"})
        perf = [r for r in caplog.records if r.name == "chatbot.perf"]
        message = perf[-1].getMessage()
        assert message.startswith("[Credentials] total=")
        assert "afterUserLookup_delta=" in message
