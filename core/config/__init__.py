# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from core.config.models import (
    AuthSettings,
    ChatbotConfig,
    DatabaseConfig,
    LLMConfig,
    SystemConfig,
    apply_env_overrides,
    get_config_path,
    invalidate_cache,
    load_config,
    normalize_base_url,
    save_config,
)
