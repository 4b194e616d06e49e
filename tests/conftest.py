# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0
"""Global test fixtures.

Provides filesystem isolation and config cache management for all
test modules.
"""

from __future__ import annotations

from pathlib import Path

import pytest

# Environment variables that would leak developer settings into tests
_ENV_OVERRIDES = (
    "OPENAI_API_URL",
    "OPENAI_API_KEY",
    "OPENAI_CHAT_MODEL",
    "OPENAI_REASONING_MODEL",
    "OPENAI_TITLE_MODEL",
    "OPENAI_ARTIFACT_MODEL",
    "OPENAI_CHAT_MODEL_DISPLAY_NAME",
    "NEXT_PUBLIC_OPENAI_CHAT_MODEL_DISPLAY_NAME",
    "OPENAI_REASONING_MODEL_DISPLAY_NAME",
    "NEXT_PUBLIC_OPENAI_REASONING_MODEL_DISPLAY_NAME",
    "AUTH_SECRET",
    "CHATBOT_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_OVERRIDES:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create an isolated runtime data directory.

    - Redirects ``CHATBOT_DATA_DIR`` to a temp directory
    - Invalidates the config cache before and after the test
    """
    from core.config import invalidate_cache

    d = tmp_path / ".chatbot"
    d.mkdir()
    monkeypatch.setenv("CHATBOT_DATA_DIR", str(d))
    invalidate_cache()

    yield d

    invalidate_cache()
