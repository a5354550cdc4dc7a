from __future__ import annotations

from dataclasses import replace

from flask import Flask, request, send_file

from ..common.http import json_body, ok
from ..container import Container
from ..core.exceptions import NotFoundError, ValidationError
from ..core.permissions import Permission
from .helpers import cross_verify_names, get_pincode_details, suggest_department
from .model import OnboardingData


def _parse_submission(data: dict) -> OnboardingData:
    try:
        return OnboardingData.from_dict(data)
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Invalid submission: {e}")


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    onboarding = container.onboarding_service

    @app.route("/api/onboarding", methods=["GET"], endpoint="list_submissions")
    @guards.permission_required(Permission.VIEW_ALL_SUBMISSIONS)
    def list_submissions():
        rows = onboarding.get_submissions(
            status=request.args.get("status") or None,
            organization_id=request.args.get("organization_id") or None,
        )
        return ok([s.to_dict() for s in rows])

    @app.route("/api/onboarding/<submission_id>", methods=["GET"], endpoint="get_submission")
    @guards.login_required
    def get_submission(submission_id: str):
        submission = onboarding.get_by_id(submission_id)
        if not submission:
            raise NotFoundError("Submission not found")
        return ok(submission.to_dict())

    @app.route("/api/onboarding/drafts", methods=["POST"], endpoint="save_draft")
    @guards.permission_required(Permission.CREATE_ENROLLMENT)
    def save_draft():
        return ok(onboarding.save_draft(_parse_submission(json_body())), message="Draft saved.")

    @app.route("/api/onboarding", methods=["POST"], endpoint="submit_onboarding")
    @guards.permission_required(Permission.CREATE_ENROLLMENT)
    def submit_onboarding():
        submission = onboarding.submit(_parse_submission(json_body()))
        return ok(submission.to_dict(), message="Enrollment submitted.", status=201)

    @app.route("/api/onboarding/<submission_id>", methods=["PUT"], endpoint="update_submission")
    @guards.permission_required(Permission.CREATE_ENROLLMENT)
    def update_submission(submission_id: str):
        data = replace(_parse_submission(json_body()), id=submission_id)
        return ok(onboarding.update(data).to_dict(), message="Submission updated.")

    @app.route("/api/onboarding/<submission_id>/verify", methods=["POST"], endpoint="verify_submission")
    @guards.permission_required(Permission.VIEW_ALL_SUBMISSIONS)
    def verify_submission(submission_id: str):
        return ok(onboarding.verify(submission_id).to_dict(), message="Submission verified.")

    @app.route("/api/onboarding/<submission_id>/request-changes", methods=["POST"], endpoint="request_changes")
    @guards.permission_required(Permission.VIEW_ALL_SUBMISSIONS)
    def request_changes(submission_id: str):
        submission = onboarding.request_changes(submission_id, json_body().get("reason", ""))
        return ok(submission.to_dict(), message="Changes requested.")

    @app.route("/api/onboarding/<submission_id>/sync", methods=["POST"], endpoint="sync_portals")
    @guards.permission_required(Permission.VIEW_ALL_SUBMISSIONS)
    def sync_portals(submission_id: str):
        submission = onboarding.sync_portals(submission_id)
        status = submission.portal_sync_status.value if submission.portal_sync_status else None
        return ok(submission.to_dict(), message=f"Portal sync: {status}")

    @app.route("/api/onboarding/upload", methods=["POST"], endpoint="upload_document")
    @guards.permission_required(Permission.CREATE_ENROLLMENT)
    def upload_document():
        file = request.files.get("file")
        if file is None:
            raise ValidationError("No file uploaded")
        return ok(onboarding.upload_document(file.stream, file.filename), status=201)

    @app.route("/uploads/<name>", methods=["GET"], endpoint="uploaded_file")
    @guards.login_required
    def uploaded_file(name: str):
        return send_file(onboarding.upload_path(name))

    @app.route("/api/onboarding/pincode/<pincode>", methods=["GET"], endpoint="pincode_details")
    @guards.login_required
    def pincode_details(pincode: str):
        return ok(get_pincode_details(pincode))

    @app.route("/api/onboarding/cross-verify-names", methods=["POST"], endpoint="cross_verify_names")
    @guards.login_required
    def cross_verify():
        body = json_body()
        return ok(cross_verify_names(body.get("name1", ""), body.get("name2", "")))

    @app.route("/api/onboarding/suggest-department", methods=["GET"], endpoint="suggest_department")
    @guards.login_required
    def department_suggestion():
        return ok({"department": suggest_department(request.args.get("designation", ""))})
