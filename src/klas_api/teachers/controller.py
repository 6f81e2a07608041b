from __future__ import annotations

import csv
import io
from functools import wraps

from flask import Flask, g, jsonify, request, send_file

from ..common.http import bearer_token, json_object
from ..container import Container

HISTORY_CSV_FIELDS = [
    "date",
    "student_id",
    "nama",
    "nisn",
    "kelas",
    "class_name",
    "status",
    "attachment_path",
]


def register(app: Flask, container: Container) -> None:
    def teacher_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.teacher = container.teacher_service.get_for_token(bearer_token())
            return view(*args, **kwargs)

        return wrapper

    def _history_rows():
        return container.teacher_service.history(
            class_id=request.args.get("class_id"),
            student_id=request.args.get("student_id"),
            date_from=request.args.get("from"),
            date_to=request.args.get("to"),
        )

    def _write_history_csv(rows, *, filename: str):
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=HISTORY_CSV_FIELDS, extrasaction="ignore")
        writer.writeheader()
        for row in rows:
            student = row.get("students") or {}
            klass = student.get("class") or {}
            writer.writerow(
                {
                    "date": row.get("date"),
                    "student_id": row.get("student_id"),
                    "nama": student.get("nama"),
                    "nisn": student.get("nisn"),
                    "kelas": student.get("kelas"),
                    "class_name": klass.get("class_name"),
                    "status": row.get("status"),
                    "attachment_path": row.get("attachment_path"),
                }
            )

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/teacher/qr/generate", methods=["POST"], endpoint="teacher_qr_generate")
    @teacher_required
    def teacher_qr_generate():
        body = json_object()
        qr = container.teacher_service.generate_qr(g.teacher, body.get("class_id"))
        return jsonify({"token": qr.token, "expires_in": qr.expires_in, "class_id": qr.class_id})

    @app.route("/teacher/qr/image", methods=["GET"], endpoint="teacher_qr_image")
    @teacher_required
    def teacher_qr_image():
        """Issue a token and return it as a printable PNG QR code."""
        qr = container.teacher_service.generate_qr(g.teacher, request.args.get("class_id"))
        png = container.teacher_service.render_qr(qr)
        response = send_file(io.BytesIO(png), mimetype="image/png")
        response.headers["X-QR-Token"] = qr.token
        response.headers["X-QR-Expires-In"] = str(qr.expires_in)
        response.headers["Cache-Control"] = "no-store"
        return response

    @app.route("/teacher/classes", methods=["GET"], endpoint="teacher_classes")
    @teacher_required
    def teacher_classes():
        return jsonify(list(container.teacher_service.list_classes()))

    @app.route("/teacher/attendances/mark-alfa", methods=["POST"], endpoint="teacher_mark_alfa")
    @teacher_required
    def teacher_mark_alfa():
        body = json_object()
        result = container.teacher_service.mark_alfa(
            class_id=body.get("class_id"),
            student_ids=body.get("student_ids"),
            date=body.get("date"),
        )
        return jsonify(result)

    @app.route("/teacher/attendances/today", methods=["GET"], endpoint="teacher_attendances_today")
    @teacher_required
    def teacher_attendances_today():
        return jsonify(container.teacher_service.today_roster(request.args.get("class_id")))

    @app.route("/teacher/attendances/history", methods=["GET"], endpoint="teacher_attendances_history")
    @teacher_required
    def teacher_attendances_history():
        return jsonify(_history_rows())

    @app.route("/teacher/attendances/history.csv", methods=["GET"], endpoint="teacher_attendances_history_csv")
    @teacher_required
    def teacher_attendances_history_csv():
        rows = _history_rows()
        suffix = request.args.get("class_id") or "all"
        return _write_history_csv(rows, filename=f"attendance_history_{suffix}.csv")
