"""Unit tests for server/app.py: FastAPI app factory and lifespan."""
# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from pathlib import Path

from fastapi.testclient import TestClient

from core.ai.providers import LanguageModelProvider
from core.auth.credentials import CredentialsAuthenticator
from core.db import Database


class TestCreateApp:
    def test_defaults_from_data_dir(self, data_dir: Path, monkeypatch):
        from server.app import create_app

        monkeypatch.setenv("AUTH_SECRET", "from-env")
        app = create_app()

        assert app.state.config.auth.secret_key == "from-env"
        assert isinstance(app.state.provider, LanguageModelProvider)
        assert isinstance(app.state.authenticator, CredentialsAuthenticator)
        assert app.state.database.path == data_dir.resolve() / "chatbot.db"

    def test_configured_database_path(self, tmp_path: Path):
        from server.app import create_app
        from tests.helpers.server import make_config

        config = make_config()
        config.database.path = str(tmp_path / "custom.db")
        app = create_app(config)
        assert app.state.database.path == tmp_path / "custom.db"

    def test_routes_mounted_under_api(self):
        from server.app import create_app
        from tests.helpers.server import make_config

        app = create_app(make_config(), database=Database(":memory:"))
        paths = {route.path for route in app.routes}
        assert {"/api/auth/login", "/api/auth/session", "/api/chat", "/api/models"} <= paths


class TestLifespan:
    def test_shutdown_closes_database(self, tmp_path: Path):
        from server.app import create_app
        from tests.helpers.server import make_config

        database = Database(tmp_path / "life.db")
        app = create_app(make_config(), database=database)

        with TestClient(app) as client:
            resp = client.post("/api/auth/login", json={"username": "alice"})
            assert resp.status_code == 200
            assert database.is_open

        assert not database.is_open
        assert (tmp_path / "life.db").is_file()
