from __future__ import annotations

import logging

from flask import Flask, jsonify, request, send_file, session

from ..container import Container
from .store import StoreError

logger = logging.getLogger(__name__)

_ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


def register(app: Flask, container: Container) -> None:
    functions = container.functions_service

    def _run(required: tuple[str, ...], call):
        """Serverless contract: 405 / 400 missing field / 500 store error / 400 anything else."""

        if request.method != "POST":
            return jsonify({"error": "Method Not Allowed"}), 405
        try:
            body = request.get_json(silent=True)
            if not isinstance(body, dict):
                raise ValueError("Request body must be a JSON object")
            if any(not body.get(name) for name in required):
                return jsonify({"error": f"Missing {' or '.join(required)} in request body"}), 400
            data = call(body)
        except StoreError as e:
            logger.error("Functions database error: %s", e)
            return jsonify({"error": str(e)}), 500
        except Exception as e:
            logger.exception("Function error")
            return jsonify({"error": str(e)}), 400
        return jsonify({"success": True, "data": data}), 200

    @app.route("/functions/v1/generate-invoice", methods=_ALL_METHODS, endpoint="fn_generate_invoice")
    def generate_invoice():
        return _run(("enrollment_id",), lambda body: functions.generate_invoice(str(body["enrollment_id"])))

    @app.route("/functions/v1/send-welcome-email", methods=_ALL_METHODS, endpoint="fn_send_welcome_email")
    def send_welcome_email():
        return _run(
            ("user_email", "user_name"),
            lambda body: functions.send_welcome_email(
                body["user_email"], body["user_name"], user_id=session.get("user_id")
            ),
        )

    @app.route("/functions/v1/submit-attendance", methods=_ALL_METHODS, endpoint="fn_submit_attendance")
    def submit_attendance():
        return _run(
            ("site_id",),
            lambda body: functions.submit_attendance(str(body["site_id"]), user_id=session.get("user_id")),
        )

    @app.route("/storage/v1/object/sign/<bucket>/<name>", methods=["GET"], endpoint="signed_object")
    def signed_object(bucket: str, name: str):
        path = container.object_storage.resolve_signed(bucket, name, request.args.get("token", ""))
        return send_file(path, mimetype="application/pdf" if name.endswith(".pdf") else None)
