# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of AI Chatbot core/server, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Signed session tokens.

A token carries exactly the identity claim fields ``id``, ``username``
and ``type``.  Signing and the issued-at timestamp are handled by
itsdangerous; this module only defines the claim shape on top of it and
the projection into the client-visible :class:`SessionView`.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from pydantic import ValidationError

from core.auth.models import IdentityClaim, SessionUser, SessionView

logger = logging.getLogger("chatbot.auth.session")

_SALT = "chatbot.session"
_CLAIM_FIELDS = ("id", "username", "type")


class SessionSigner:
    """Issue and verify session tokens for identity claims."""

    def __init__(self, secret_key: str, max_age: int = 30 * 24 * 3600) -> None:
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self.max_age = max_age
        self._serializer = URLSafeTimedSerializer(secret_key, salt=_SALT)

    def issue(self, claim: IdentityClaim) -> str:
        payload = {name: getattr(claim, name) for name in _CLAIM_FIELDS}
        return self._serializer.dumps(payload)

    def verify(self, token: str | None) -> tuple[IdentityClaim, datetime] | None:
        """Return the embedded claim and its issue time, or ``None`` if invalid."""
        if not token:
            return None
        try:
            payload, issued_at = self._serializer.loads(
                token, max_age=self.max_age, return_timestamp=True,
            )
        except SignatureExpired:
            logger.info("Rejected expired session token")
            return None
        except BadSignature:
            logger.warning("Rejected session token with bad signature")
            return None

        try:
            claim = IdentityClaim.model_validate(_pick_claims(payload))
        except ValidationError:
            logger.warning("Rejected session token with malformed claims")
            return None
        return claim, issued_at

    def project(self, claim: IdentityClaim, issued_at: datetime | None = None) -> SessionView:
        """Build the client-visible session; the display name is the username."""
        expires = None
        if issued_at is not None:
            if issued_at.tzinfo is None:
                issued_at = issued_at.replace(tzinfo=timezone.utc)
            expires = (issued_at + timedelta(seconds=self.max_age)).isoformat()
        return SessionView(
            user=SessionUser(
                id=claim.id,
                username=claim.username,
                type=claim.type,
                name=claim.username,
            ),
            expires=expires,
        )

    def read_session(self, token: str | None) -> SessionView | None:
        verified = self.verify(token)
        if verified is None:
            return None
        return self.project(*verified)


def _pick_claims(payload: Any) -> dict[str, Any]:
    if not isinstance(payload, dict):
        return {}
    return {name: payload.get(name) for name in _CLAIM_FIELDS}
