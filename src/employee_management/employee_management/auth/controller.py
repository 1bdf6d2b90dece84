from __future__ import annotations

from flask import Flask

from ..common.http import ok, request_data
from ..container import Container
from .gate import current_caller


def register(app: Flask, container: Container) -> None:
    prefix = app.config.get("API_PREFIX", "")
    gate = container.gate

    @app.route(f"{prefix}/auth/login", methods=["POST"], endpoint="auth_login")
    def login():
        data = request_data()
        result = container.auth_service.login(data.get("email"), data.get("password"))
        return ok(token=result.token, user=result.account.to_public_dict())

    @app.route(f"{prefix}/auth/verify", methods=["GET", "POST"], endpoint="auth_verify")
    @gate.login_required
    def verify():
        return ok(user=current_caller().to_dict())

    @app.route(f"{prefix}/auth/change-password", methods=["PUT"], endpoint="auth_change_password")
    @gate.login_required
    def change_password():
        data = request_data()
        container.auth_service.change_password(
            caller=current_caller(),
            old_password=data.get("oldPassword"),
            new_password=data.get("newPassword"),
            confirm_password=data.get("confirmPassword"),
        )
        return ok(message="Password changed successfully")
