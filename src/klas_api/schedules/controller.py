from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    # d = day override, t = HH:MM time override
    @app.route("/schedule", methods=["GET"], endpoint="schedule")
    def schedule():
        return jsonify(container.schedule_service.weekly_subjects())

    @app.route("/duty", methods=["GET"], endpoint="duty")
    def duty():
        return jsonify(container.schedule_service.weekly_duty())

    @app.route("/today-schedule", methods=["GET"], endpoint="today_schedule")
    def today_schedule():
        return jsonify(container.schedule_service.today_schedule(request.args.get("d")))

    @app.route("/ongoing", methods=["GET"], endpoint="ongoing")
    def ongoing():
        return jsonify(container.schedule_service.ongoing(request.args.get("d"), request.args.get("t")))

    @app.route("/today-duty", methods=["GET"], endpoint="today_duty")
    def today_duty():
        return jsonify(container.schedule_service.today_duty(request.args.get("d")))
