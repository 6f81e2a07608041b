from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import bearer_token, json_object, uploaded_file
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _requested_status():
        """Status from JSON body, then multipart form, then ?status=."""
        body = request.get_json(silent=True)
        if isinstance(body, dict) and body.get("status"):
            return body["status"]
        if request.form.get("status"):
            return request.form["status"]
        return request.args.get("status")

    @app.route("/absen", methods=["POST"], endpoint="absen")
    def absen():
        token = bearer_token()
        result = container.attendance_service.check_in(
            token,
            _requested_status(),
            uploaded_file("attachment", "file"),
        )
        return jsonify(result.to_response()), 201

    @app.route("/absen/qr", methods=["POST"], endpoint="absen_qr")
    def absen_qr():
        token = bearer_token()
        body = json_object()
        result = container.attendance_service.check_in_with_qr(token, body.get("token"))
        return jsonify(result.to_response()), 201

    @app.route("/absen/today", methods=["GET"], endpoint="absen_today")
    def absen_today():
        return jsonify(container.attendance_service.today_for(bearer_token()))

    @app.route("/students", methods=["GET"], endpoint="students_list")
    def students_list():
        return jsonify(list(container.student_service.list_students()))
