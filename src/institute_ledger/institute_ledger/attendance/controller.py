from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import today_local
from ..common.http import json_errors
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/batches", methods=["GET"], endpoint="api_attendance_batches")
    @json_errors
    def api_attendance_batches():
        return jsonify({"success": True, "batches": service.list_batches()})

    @app.route("/api/attendance/mark", methods=["POST"], endpoint="api_attendance_mark")
    @json_errors
    def api_attendance_mark():
        """Body: {"date": "YYYY-MM-DD", "batch_timing": "...", "statuses": {"<id>": "ABSENT"}}"""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Attendance data must be a JSON object")
        statuses = data.get("statuses") or {}
        if not isinstance(statuses, dict):
            raise ValidationError("statuses must map student ids to PRESENT/ABSENT")

        written = service.mark_batch(
            work_date=data.get("date") or today_local(),
            batch_timing=data.get("batch_timing") or "",
            statuses=statuses,
        )
        return jsonify({"success": True, "message": "Attendance saved successfully!", "saved": written})

    @app.route("/api/attendance/history", methods=["GET"], endpoint="api_attendance_history")
    @json_errors
    def api_attendance_history():
        view = service.batch_history(
            work_date=request.args.get("date") or today_local(),
            batch_timing=request.args.get("batch_timing", ""),
            status_filter=request.args.get("status", "ALL"),
        )
        return jsonify({"success": True, "attendance": [m.to_dict() for m in view.rows], "skipped": view.skipped})

    @app.route("/api/attendance/student/<int:student_id>", methods=["GET"], endpoint="api_attendance_student")
    @json_errors
    def api_attendance_student(student_id: int):
        marks = service.student_history(student_id)
        return jsonify({"success": True, "attendance": [m.to_dict() for m in marks]})

    @app.route("/api/attendance/defaulters", methods=["GET"], endpoint="api_attendance_defaulters")
    @json_errors
    def api_attendance_defaulters():
        threshold_s = request.args.get("threshold")
        if threshold_s is not None and not threshold_s.strip().isdigit():
            raise ValidationError("threshold must be a positive whole number")

        report = service.find_defaulters(
            request.args.get("batch_timing", ""),
            threshold=int(threshold_s) if threshold_s is not None else None,
        )
        return jsonify(
            {
                "success": True,
                "batch_timing": report.batch_timing,
                "threshold": report.threshold,
                "defaulters": [d.to_dict() for d in report.defaulters],
                "skipped": report.skipped,
            }
        )
