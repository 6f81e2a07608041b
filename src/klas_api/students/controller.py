from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import bearer_token, uploaded_file
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/students/profile-picture", methods=["POST"], endpoint="upload_profile_picture")
    def upload_profile_picture():
        token = bearer_token()
        result = container.student_service.upload_avatar(token, uploaded_file("avatar", "file"))
        return jsonify(result)

    @app.route("/students/profile-picture", methods=["GET"], endpoint="get_profile_picture")
    def get_profile_picture():
        return jsonify(container.student_service.get_avatar(bearer_token()))
