from __future__ import annotations

import pytest

from hr_portal.core.exceptions import AuthenticationError, ValidationError


def test_sign_in_reports_firebase_style_codes(container):
    auth = container.auth_service

    with pytest.raises(AuthenticationError, match="auth/user-not-found"):
        auth.sign_in("nobody@paradigm.com", "password")
    with pytest.raises(AuthenticationError, match="auth/wrong-password"):
        auth.sign_in("hr@paradigm.com", "letmein")

    user = auth.sign_in("HR@paradigm.com", "password")
    assert user.user_id == "user_2"
    assert "manage_users" in user.permissions


def test_reset_token_flow(container):
    auth = container.auth_service

    assert auth.send_password_reset("nobody@paradigm.com") is None
    token = auth.send_password_reset("field@paradigm.com")

    with pytest.raises(ValidationError, match="at least 6"):
        auth.reset_password(token, "abc")
    auth.reset_password(token, "s3cret!")

    assert auth.sign_in("field@paradigm.com", "s3cret!").user_id == "user_6"
    with pytest.raises(ValidationError, match="Invalid password reset link"):
        auth.reset_password(token + "x", "another1")


def test_update_password_needs_session(container):
    with pytest.raises(AuthenticationError, match="auth/requires-recent-login"):
        container.auth_service.update_password(None, "whatever1")


def test_login_me_logout(client, login):
    assert client.get("/api/auth/me").status_code == 401

    resp = login("field@paradigm.com")
    assert resp.get_json()["message"] == "Welcome back, Ravi Kumar!"

    me = client.get("/api/auth/me").get_json()["data"]
    assert me["id"] == "user_6"
    assert me["role"] == "field_officer"

    client.post("/api/auth/logout")
    resp = client.get("/api/auth/me")
    assert resp.status_code == 401
    assert resp.get_json()["redirect"] == "/auth/login"


def test_bad_login_is_401(client):
    resp = client.post("/api/auth/login", json={"email": "hr@paradigm.com", "password": "nope"})

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "auth/wrong-password"}


def test_forgot_password_never_reveals_accounts(client):
    resp = client.post("/api/auth/forgot-password", json={"email": "nobody@paradigm.com"})

    assert resp.status_code == 200
    assert "If an account exists" in resp.get_json()["message"]


def test_update_password_route(client, login):
    assert client.post("/api/auth/update-password", json={"password": "newpass1"}).status_code == 401

    login("anil@paradigm.com")
    assert client.post("/api/auth/update-password", json={"password": "newpass1"}).status_code == 200
    client.post("/api/auth/logout")

    login("anil@paradigm.com", "newpass1")


def test_deleted_user_session_is_dropped(container, client, login):
    login("anil@paradigm.com")
    container.user_service.delete_user("user_7")

    assert client.get("/api/auth/me").status_code == 401
