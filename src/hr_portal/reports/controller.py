from __future__ import annotations

import io

from flask import Flask, request, send_file

from ..common.http import date_arg
from ..container import Container
from ..core.permissions import Permission
from .service import ALL_USERS


def register(app: Flask, container: Container) -> None:
    guards = container.guards

    @app.route("/api/reports/attendance", methods=["GET"], endpoint="download_attendance_report")
    @guards.permission_required(Permission.DOWNLOAD_ATTENDANCE_REPORT)
    def download_attendance_report():
        report = container.report_service.generate(
            report_format=request.args.get("format", "monthly_muster"),
            output=request.args.get("output", "csv"),
            user=request.args.get("user") or ALL_USERS,
            start=date_arg("start"),
            end=date_arg("end"),
        )
        return send_file(
            io.BytesIO(report.content),
            mimetype=report.mimetype,
            as_attachment=True,
            download_name=report.filename,
        )
