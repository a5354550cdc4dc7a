from __future__ import annotations

from flask import Flask, session

from ..common.http import json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    guards = container.guards

    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    def login():
        body = json_body()
        s_user = container.auth_service.sign_in(body.get("email", ""), body.get("password", ""))

        session.clear()
        session.permanent = bool(body.get("remember"))
        session["user_id"] = s_user.user_id
        session["role"] = s_user.role.value
        return ok(s_user.to_dict(), message=f"Welcome back, {s_user.name}!")

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return ok(message="Signed out.")

    @app.route("/api/auth/me", methods=["GET"], endpoint="me")
    @guards.login_required
    def me():
        return ok(guards.current_user().to_dict())

    @app.route("/api/auth/forgot-password", methods=["POST"], endpoint="forgot_password")
    def forgot_password():
        container.auth_service.send_password_reset(json_body().get("email", ""))
        return ok(message="If an account exists for this email, a password reset link has been sent.")

    @app.route("/api/auth/reset-password", methods=["POST"], endpoint="reset_password")
    def reset_password():
        body = json_body()
        container.auth_service.reset_password(body.get("token", ""), body.get("password", ""))
        return ok(message="Password has been reset. Please sign in.")

    @app.route("/api/auth/update-password", methods=["POST"], endpoint="update_password")
    def update_password():
        container.auth_service.update_password(session.get("user_id"), json_body().get("password", ""))
        return ok(message="Password updated.")
