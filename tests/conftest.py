from __future__ import annotations

from datetime import datetime, timezone

import pytest

from hr_portal.main import create_app

# 12:00 in Asia/Kolkata on Tuesday 2024-07-30, the latest day in the seed data.
FIXED_NOW = datetime(2024, 7, 30, 6, 30, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def make_app(tmp_path, monkeypatch, fixed_now):
    monkeypatch.setenv("APP_ENV", "testing")

    def factory(overrides=None, **kwargs):
        settings = {
            "UPLOAD_DIR": str(tmp_path / "uploads"),
            "STORAGE_DIR": str(tmp_path / "storage"),
            "SETTINGS_FILE": None,
            **(overrides or {}),
        }
        kwargs.setdefault("clock", lambda: fixed_now)
        return create_app(settings, **kwargs)

    return factory


@pytest.fixture
def app(make_app):
    return make_app()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def container(app):
    return app.extensions["hr_portal"]


@pytest.fixture
def login(client):
    def _login(email: str, password: str = "password"):
        resp = client.post("/api/auth/login", json={"email": email, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return resp

    return _login
