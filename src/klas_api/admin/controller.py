from __future__ import annotations

from functools import wraps

from flask import Flask, jsonify

from ..common.http import bearer_token, json_body
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def admin_required(view):
        """Allow-list first, then bearer token, then admin membership."""

        @wraps(view)
        def wrapper(table: str, *args, **kwargs):
            container.admin_service.check_table(table)
            container.admin_service.require_admin(bearer_token())
            return view(table, *args, **kwargs)

        return wrapper

    @app.route("/admin/<table>", methods=["GET"], endpoint="admin_list")
    @admin_required
    def admin_list(table: str):
        return jsonify({"data": container.admin_service.list_rows(table)})

    @app.route("/admin/<table>/<row_id>", methods=["GET"], endpoint="admin_get")
    @admin_required
    def admin_get(table: str, row_id: str):
        return jsonify({"data": container.admin_service.get_row(table, row_id)})

    @app.route("/admin/<table>", methods=["POST"], endpoint="admin_create")
    @admin_required
    def admin_create(table: str):
        return jsonify({"data": container.admin_service.create_rows(table, json_body())}), 201

    @app.route("/admin/<table>/<row_id>", methods=["PUT"], endpoint="admin_update")
    @admin_required
    def admin_update(table: str, row_id: str):
        return jsonify({"data": container.admin_service.update_row(table, row_id, json_body())})

    @app.route("/admin/<table>/<row_id>", methods=["DELETE"], endpoint="admin_delete")
    @admin_required
    def admin_delete(table: str, row_id: str):
        return jsonify({"data": container.admin_service.delete_row(table, row_id)})
