# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of AI Chatbot core/server, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Username-only sign-in.

There is no password: a user is whoever claims the username, and an
unseen username is enrolled on first sign-in (``ensure`` semantics).

Outcomes are reported as a coarse :class:`LoginStatus` only:

- ``invalid_data``: the form failed validation, the user must fix it
- ``failed``: anything else went wrong, the user may simply retry

No error detail from the storage layer crosses this boundary.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Protocol

from pydantic import ValidationError

from core.auth.cache import ExpiringCache
from core.auth.models import IdentityClaim, LoginActionState, LoginForm, LoginStatus
from core.auth.session import SessionSigner
from core.auth.timer import AuthTimer
from core.db.init import DatabaseWarmup
from core.db.models import User
from core.exceptions import CredentialValidationError, IdentityResolutionError

logger = logging.getLogger("chatbot.auth")


class IdentityResolver(Protocol):
    async def ensure_user_by_username(self, username: str) -> User: ...


@dataclass(frozen=True)
class LoginResult:
    state: LoginActionState
    token: str | None = None
    claim: IdentityClaim | None = None


def parse_login_form(form_data: Mapping[str, Any]) -> LoginForm:
    """Validate the submitted fields, raising :class:`CredentialValidationError`."""
    try:
        return LoginForm.model_validate({
            "username": form_data.get("username"),
            "redirectUrl": form_data.get("redirectUrl", form_data.get("redirect_url")),
        })
    except ValidationError as exc:
        raise CredentialValidationError(str(exc)) from exc


class CredentialsAuthenticator:
    """Resolve a claimed username to an identity and a signed session."""

    def __init__(
        self,
        resolver: IdentityResolver,
        signer: SessionSigner,
        *,
        warmup: DatabaseWarmup | None = None,
        cache: ExpiringCache[str, User] | None = None,
    ) -> None:
        self._resolver = resolver
        self._signer = signer
        self._warmup = warmup
        self._cache = cache

    async def resolve_identity(self, username: str) -> User:
        """Get-or-create the user, consulting the short-lived cache first."""
        if self._cache is not None:
            cached = self._cache.get(username)
            if cached is not None:
                return cached

        try:
            user = await self._resolver.ensure_user_by_username(username)
        except Exception as exc:
            raise IdentityResolutionError(f"Could not resolve user '{username}'") from exc

        if self._cache is not None:
            self._cache.set(username, user)
        return user

    async def authorize(
        self,
        credentials: Mapping[str, Any] | None,
        timer: AuthTimer | None = None,
    ) -> IdentityClaim | None:
        """Return the identity claim for *credentials*, or ``None`` on failure."""
        timer = timer or AuthTimer()
        raw_username = (credentials or {}).get("username")

        timer.mark("validate")

        if self._warmup is not None:
            self._warmup.trigger()

        if not raw_username or not isinstance(raw_username, str):
            logger.error("[Auth] Invalid credentials: username is required")
            return None

        try:
            timer.mark("beforeUserLookup")
            user = await self.resolve_identity(raw_username)
            timer.mark("afterUserLookup")
        except IdentityResolutionError:
            logger.exception("[Auth] Failed to ensure user by username")
            return None

        return IdentityClaim(id=user.id, username=user.username, type="regular")

    async def login(self, form_data: Mapping[str, Any]) -> LoginResult:
        """Run the full sign-in flow and return its outcome."""
        timer = AuthTimer()
        try:
            form = parse_login_form(form_data)
        except CredentialValidationError:
            logger.info("[Auth] Rejected sign-in form")
            return LoginResult(LoginActionState(status=LoginStatus.INVALID_DATA))

        claim = await self.authorize({"username": form.username}, timer)
        if claim is None:
            return LoginResult(LoginActionState(status=LoginStatus.FAILED))

        try:
            token = self._signer.issue(claim)
        except Exception:
            logger.exception("[Auth] Failed to sign session for '%s'", claim.username)
            return LoginResult(LoginActionState(status=LoginStatus.FAILED))
        timer.mark("sessionIssued")
        timer.log_metrics("Credentials")

        logger.info("User '%s' signed in", claim.username)
        return LoginResult(
            LoginActionState(status=LoginStatus.SUCCESS, redirect_url=form.redirect_url),
            token=token,
            claim=claim,
        )
