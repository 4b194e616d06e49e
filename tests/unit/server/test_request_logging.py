"""Tests for RequestLoggingMiddleware."""
# AI Chatbot - Streaming chat with username sign-in
# Copyright (C) 2026 AI Chatbot Authors
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from server.app import RequestLoggingMiddleware


class TestRequestLoggingMiddleware:
    @pytest.fixture()
    def app(self):
        app = FastAPI()
        app.add_middleware(RequestLoggingMiddleware)

        @app.get("/api/test")
        async def test_endpoint():
            return {"ok": True}

        @app.get("/api/health")
        async def health():
            return {"status": "ok"}

        return app

    @pytest.fixture()
    def client(self, app):
        return TestClient(app)

    def test_adds_request_id_header(self, client):
        response = client.get("/api/test")
        assert response.status_code == 200
        assert len(response.headers["X-Request-ID"]) > 0

    def test_respects_existing_request_id(self, client):
        response = client.get("/api/test", headers={"X-Request-ID": "custom-id-123"})
        assert response.headers["X-Request-ID"] == "custom-id-123"

    def test_noisy_path_not_logged(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="chatbot.request"):
            client.get("/api/health")
        assert not any("/api/health" in rec.getMessage() for rec in caplog.records)

    def test_normal_path_logged(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="chatbot.request"):
            client.get("/api/test")
        assert any(
            "/api/test" in rec.getMessage() and "200" in rec.getMessage()
            for rec in caplog.records
        )
