from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import bearer_token, json_object
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/auth/signin", methods=["POST"], endpoint="auth_signin")
    def auth_signin():
        body = json_object()
        container.auth_service.send_otp(body.get("email"))
        return jsonify({"message": "OTP sent to email"})

    @app.route("/auth/verify", methods=["POST"], endpoint="auth_verify")
    def auth_verify():
        body = json_object()
        result = container.auth_service.verify_otp(body.get("email"), body.get("token"))
        return jsonify(result)

    @app.route("/auth/user", methods=["GET"], endpoint="auth_user")
    def auth_user():
        user = container.auth_service.resolve_user(bearer_token())
        return jsonify({"user": user.to_dict()})

    @app.route("/auth/link-student", methods=["POST"], endpoint="auth_link_student")
    def auth_link_student():
        token = bearer_token()
        body = json_object()
        student = container.auth_service.link_student(token, body.get("nama") or body.get("name"))
        return jsonify({"message": "Student linked successfully", "student": student})
