# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of AI Chatbot core/server, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Unified exception hierarchy for AI Chatbot.

All domain-specific exceptions derive from :class:`ChatbotError`,
enabling callers to catch the entire family with a single clause::

    try:
        ...
    except ChatbotError as e:
        logger.error("Domain error: %s", e)

Only :class:`CredentialValidationError` and :class:`IdentityResolutionError`
ever reach the login boundary, and even then only as a coarse status.
"""

from __future__ import annotations


class ChatbotError(Exception):
    """Base exception for all AI Chatbot errors."""


# ── Authentication ───────────────────────────────────────────


class AuthError(ChatbotError):
    """Authentication errors."""


class CredentialValidationError(AuthError):
    """Submitted sign-in form failed schema validation."""


class IdentityResolutionError(AuthError):
    """Looking up or creating the user record failed."""


# ── Database ─────────────────────────────────────────────────


class DatabaseError(ChatbotError):
    """Storage layer errors."""


class WarmupError(DatabaseError):
    """Connection warm-up failed. Logged only, never surfaced."""


# ── Execution ────────────────────────────────────────────────


class ExecutionError(ChatbotError):
    """LLM execution errors."""


class LLMAPIError(ExecutionError):
    """LLM API call failure (network, auth, rate limit)."""


# ── Configuration ────────────────────────────────────────────


class ConfigError(ChatbotError):
    """Configuration errors."""


class ConfigValidationError(ConfigError):
    """Configuration validation failure."""
