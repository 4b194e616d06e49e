# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0
#
# This file is part of AI Chatbot core/server, licensed under Apache-2.0.
# See LICENSE for the full license text.

"""Central configuration module for AI Chatbot.

Defines Pydantic models for config.json and provides load / save helpers
with a module-level singleton cache.  Environment variables override the
file values on every :func:`load_config` call.
"""

from __future__ import annotations

import json
import logging
import os
import secrets
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from core.exceptions import ConfigValidationError

logger = logging.getLogger("chatbot.config")

# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class SystemConfig(BaseModel):
    log_level: str = "INFO"


class AuthSettings(BaseModel):
    """Session signing and identity cache settings."""

    secret_key: str = ""
    session_max_age: int = 30 * 24 * 3600  # seconds
    cookie_name: str = "session_token"
    user_cache_ttl: float = 300.0  # seconds


class DatabaseConfig(BaseModel):
    path: str | None = None  # None = <data_dir>/chatbot.db


class LLMConfig(BaseModel):
    """OpenAI-compatible endpoint and logical model name mapping."""

    api_base: str | None = None
    api_key: str = ""
    chat_model: str = "gpt-4o"
    reasoning_model: str = "gpt-4o-mini"
    title_model: str = "gpt-4o-mini"
    artifact_model: str = "gpt-4o"
    chat_model_display_name: str = "GPT-4o"
    reasoning_model_display_name: str = "GPT-4o Mini"


class ChatbotConfig(BaseModel):
    version: int = 1
    system: SystemConfig = SystemConfig()
    auth: AuthSettings = AuthSettings()
    database: DatabaseConfig = DatabaseConfig()
    llm: LLMConfig = LLMConfig()


# ---------------------------------------------------------------------------
# Singleton cache
# ---------------------------------------------------------------------------

_config: ChatbotConfig | None = None
_config_path: Path | None = None
_config_mtime: float = 0.0

# Process-lifetime fallback when no AUTH_SECRET / auth.secret_key is set
_generated_secret: str | None = None


def invalidate_cache() -> None:
    """Reset the module-level singleton cache."""
    global _config, _config_path, _config_mtime
    _config = None
    _config_path = None
    _config_mtime = 0.0


def get_config_path(data_dir: Path | None = None) -> Path:
    """Return the path to config.json inside *data_dir*."""
    if data_dir is None:
        from core.paths import get_data_dir

        data_dir = get_data_dir()
    return data_dir / "config.json"


# ---------------------------------------------------------------------------
# Environment overrides
# ---------------------------------------------------------------------------


def normalize_base_url(url: str | None) -> str | None:
    """Strip trailing slashes from an API base URL; empty becomes None."""
    if not url:
        return None
    return url.rstrip("/")


def _env_first(*names: str) -> str | None:
    for name in names:
        value = os.environ.get(name)
        if value:
            return value
    return None


def _ensure_secret(config: ChatbotConfig) -> None:
    global _generated_secret
    if config.auth.secret_key:
        return
    if _generated_secret is None:
        _generated_secret = secrets.token_urlsafe(32)
        logger.warning(
            "No AUTH_SECRET configured; using a random per-process secret. "
            "Sessions will not survive a restart.",
        )
    config.auth.secret_key = _generated_secret


def apply_env_overrides(config: ChatbotConfig) -> ChatbotConfig:
    """Return a copy of *config* with environment variables applied."""
    config = config.model_copy(deep=True)
    llm = config.llm

    api_base = _env_first("OPENAI_API_URL")
    if api_base:
        llm.api_base = api_base
    llm.api_base = normalize_base_url(llm.api_base)

    llm.api_key = _env_first("OPENAI_API_KEY") or llm.api_key
    llm.chat_model = _env_first("OPENAI_CHAT_MODEL") or llm.chat_model
    llm.reasoning_model = _env_first("OPENAI_REASONING_MODEL") or llm.reasoning_model
    llm.title_model = _env_first("OPENAI_TITLE_MODEL") or llm.title_model
    llm.artifact_model = _env_first("OPENAI_ARTIFACT_MODEL") or llm.artifact_model
    llm.chat_model_display_name = _env_first(
        "NEXT_PUBLIC_OPENAI_CHAT_MODEL_DISPLAY_NAME",
        "OPENAI_CHAT_MODEL_DISPLAY_NAME",
    ) or llm.chat_model_display_name
    llm.reasoning_model_display_name = _env_first(
        "NEXT_PUBLIC_OPENAI_REASONING_MODEL_DISPLAY_NAME",
        "OPENAI_REASONING_MODEL_DISPLAY_NAME",
    ) or llm.reasoning_model_display_name

    config.auth.secret_key = _env_first("AUTH_SECRET") or config.auth.secret_key
    config.system.log_level = _env_first("CHATBOT_LOG_LEVEL") or config.system.log_level

    _ensure_secret(config)
    return config


# ---------------------------------------------------------------------------
# Load / Save
# ---------------------------------------------------------------------------


def _read_config_file(path: Path) -> ChatbotConfig:
    if not path.is_file():
        logger.info("Config file not found at %s; using defaults", path)
        return ChatbotConfig()

    logger.debug("Loading config from %s", path)
    try:
        data: dict[str, Any] = json.loads(path.read_text(encoding="utf-8"))
        return ChatbotConfig.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as exc:
        logger.error("Failed to load config from %s: %s", path, exc)
        raise ConfigValidationError(f"Invalid config file {path}: {exc}") from exc


def load_config(path: Path | None = None) -> ChatbotConfig:
    """Load configuration from disk, returning cached instance when possible.

    The cache is invalidated when the file's mtime changes, so manual edits
    are picked up without a server restart.  Environment overrides are
    applied on every call.
    """
    global _config, _config_path, _config_mtime

    if path is None:
        path = get_config_path()

    try:
        disk_mtime = path.stat().st_mtime
    except OSError:
        disk_mtime = 0.0

    if _config is None or _config_path != path or disk_mtime != _config_mtime:
        if _config is not None and _config_path == path:
            logger.debug(
                "Config file changed on disk (mtime %.3f → %.3f); reloading",
                _config_mtime, disk_mtime,
            )
        _config = _read_config_file(path)
        _config_path = path
        _config_mtime = disk_mtime

    return apply_env_overrides(_config)


def save_config(config: ChatbotConfig, path: Path | None = None) -> None:
    """Atomically persist *config* as pretty-printed JSON (mode 0o600)."""
    global _config, _config_path, _config_mtime

    if path is None:
        path = get_config_path()

    path.parent.mkdir(parents=True, exist_ok=True)

    text = config.model_dump_json(indent=2) + "\n"
    tmp = path.with_suffix(".tmp")
    tmp.write_text(text, encoding="utf-8")
    os.replace(tmp, path)

    # Restrict permissions: the file may contain API keys.
    os.chmod(path, 0o600)

    logger.debug("Config saved to %s", path)

    _config = config
    _config_path = path
    try:
        _config_mtime = path.stat().st_mtime
    except OSError:
        _config_mtime = 0.0
