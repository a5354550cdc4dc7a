from __future__ import annotations

import copy
import logging
import time
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import BinaryIO, Optional

from werkzeug.utils import secure_filename

from ..common.datetime_utils import parse_iso_date
from ..common.ids import new_id
from ..core.enums import PortalSyncStatus, SubmissionStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..settings.service import SettingsService
from .model import OnboardingData, SubmissionCostBreakdown, VerificationUsage
from .repository import SubmissionRepository
from .verification import MockVerificationGateway

logger = logging.getLogger(__name__)


def _log_usage(usage: tuple[VerificationUsage, ...], name: str) -> tuple[VerificationUsage, ...]:
    out = list(usage)
    for i, item in enumerate(out):
        if item.name == name:
            out[i] = VerificationUsage(name=name, count=item.count + 1)
            return tuple(out)
    out.append(VerificationUsage(name=name, count=1))
    return tuple(out)


class OnboardingService:
    """Use case: enrollment submissions from draft to portal sync."""

    def __init__(
        self,
        submissions: SubmissionRepository,
        gateway: MockVerificationGateway,
        settings: SettingsService,
        *,
        upload_dir: str | Path,
        public_base_url: str,
    ):
        self._submissions = submissions
        self._gateway = gateway
        self._settings = settings
        self._upload_dir = Path(upload_dir)
        self._public_base_url = public_base_url.rstrip("/")

    def get_submissions(self, *, status: Optional[str] = None, organization_id: Optional[str] = None) -> list[OnboardingData]:
        rows = list(self._submissions.list_all())
        if status:
            rows = [s for s in rows if s.status.value == status]
        if organization_id:
            rows = [s for s in rows if s.organization_id == organization_id]
        return rows

    def get_by_id(self, submission_id: str) -> Optional[OnboardingData]:
        return self._submissions.get(submission_id)

    def find_by_email(self, email: str) -> Optional[OnboardingData]:
        needle = (email or "").lower()
        return next((s for s in self._submissions.list_all() if (s.email or "").lower() == needle), None)

    def save_draft(self, data: OnboardingData) -> dict:
        if data.enrollment_date:
            self._check_enrollment_date(data.enrollment_date)
        if data.id and self._submissions.get(data.id):
            self._submissions.save(data)
            return {"draft_id": data.id}
        draft = replace(data, id=new_id("draft"), status=SubmissionStatus.DRAFT)
        self._submissions.add(draft)
        return {"draft_id": draft.id}

    @staticmethod
    def _check_enrollment_date(value) -> None:
        try:
            parse_iso_date(str(value))
        except ValueError:
            raise ValidationError(f"Invalid enrollment date: {value}. Use YYYY-MM-DD")

    def submit(self, data: OnboardingData) -> OnboardingData:
        if not data.enrollment_date:
            raise ValidationError("Enrollment date is required")
        self._check_enrollment_date(data.enrollment_date)
        submission = replace(data, id=new_id("sub"), status=SubmissionStatus.PENDING)
        self._submissions.add(submission)
        logger.info("Onboarding submission %s received", submission.id)
        return submission

    def update(self, data: OnboardingData) -> OnboardingData:
        if not data.id or not self._submissions.get(data.id):
            raise NotFoundError("Submission not found")
        if data.enrollment_date:
            self._check_enrollment_date(data.enrollment_date)
        return self._submissions.save(data)

    def _require(self, submission_id: str) -> OnboardingData:
        submission = self._submissions.get(submission_id)
        if not submission:
            raise NotFoundError("Submission not found")
        return submission

    def verify(self, submission_id: str) -> OnboardingData:
        submission = self._require(submission_id)
        return self._submissions.save(
            replace(submission, status=SubmissionStatus.VERIFIED, portal_sync_status=PortalSyncStatus.PENDING_SYNC)
        )

    def request_changes(self, submission_id: str, reason: str) -> OnboardingData:
        submission = self._require(submission_id)
        return self._submissions.save(
            replace(submission, status=SubmissionStatus.REJECTED, change_request_reason=(reason or "").strip() or None)
        )

    def sync_portals(self, submission_id: str) -> OnboardingData:
        """Run the external verifications for a verified submission and record the outcome."""

        submission = self._require(submission_id)
        if submission.status != SubmissionStatus.VERIFIED:
            return submission

        personal = copy.deepcopy(submission.personal)
        bank = copy.deepcopy(submission.bank)
        uan = copy.deepcopy(submission.uan)
        usage = submission.verification_usage

        usage = _log_usage(usage, "Aadhaar Verification")
        aadhaar = self._gateway.verify_aadhaar(personal.get("id_proof_number"))

        usage = _log_usage(usage, "Bank AC Verification Advanced")
        bank_result = self._gateway.verify_bank_account(
            account_number=bank.get("account_number"),
            ifsc_code=bank.get("ifsc_code"),
            account_holder_name=bank.get("account_holder_name"),
        )

        uan_success = True
        has_pf = bool(uan.get("has_previous_pf"))
        uan_verified = True
        if has_pf and uan.get("uan_number"):
            usage = _log_usage(usage, "EPF UAN Lookup")
            uan_result = self._gateway.lookup_uan(uan.get("uan_number"))
            uan_success = uan_result.success
            uan_verified = uan_result.verified_fields.get("uan_number")

        personal.setdefault("verified_status", {})["id_proof_number"] = aadhaar.success
        bank_status = bank.setdefault("verified_status", {})
        bank_status["account_number"] = bank_result.verified_fields.get("account_number")
        bank_status["account_holder_name"] = bank_result.verified_fields.get("account_holder_name")
        uan.setdefault("verified_status", {})
        if has_pf:
            uan["verified_status"]["uan_number"] = uan_verified

        all_success = aadhaar.success and bank_result.success and uan_success
        updated = replace(
            submission,
            personal=personal,
            bank=bank,
            uan=uan,
            verification_usage=usage,
            portal_sync_status=PortalSyncStatus.SYNCED if all_success else PortalSyncStatus.FAILED,
            status=SubmissionStatus.VERIFIED if all_success else SubmissionStatus.PENDING,
        )
        self._submissions.save(updated)
        logger.info("Portal sync for %s: %s", submission_id, updated.portal_sync_status.value)
        return updated

    def upload_document(self, stream: BinaryIO, filename: str) -> dict:
        name = secure_filename(filename or "")
        if not name:
            raise ValidationError("A file name is required")
        stored = f"{int(time.time() * 1000)}-{name}"
        self._upload_dir.mkdir(parents=True, exist_ok=True)
        with (self._upload_dir / stored).open("wb") as fh:
            fh.write(stream.read())
        return {"url": f"{self._public_base_url}/uploads/{stored}"}

    def upload_path(self, stored_name: str) -> Path:
        path = self._upload_dir / secure_filename(stored_name)
        if not path.is_file():
            raise NotFoundError("File not found")
        return path

    def verification_cost_breakdown(self, start: date, end: date) -> list[SubmissionCostBreakdown]:
        """Verified submissions enrolled in [start, end] with their verification spend."""

        costs = self._settings.cost_table()
        rows = []
        for s in self._submissions.list_all():
            if s.status != SubmissionStatus.VERIFIED or not s.enrollment_date:
                continue
            try:
                enrolled = parse_iso_date(s.enrollment_date)
            except ValueError:
                logger.warning("Skipping submission %s with unreadable enrollment date %r", s.id, s.enrollment_date)
                continue
            if not (start <= enrolled <= end):
                continue
            total = sum(u.count * costs.get(u.name, 0) for u in s.verification_usage)
            rows.append(
                SubmissionCostBreakdown(
                    id=s.id or "",
                    employee_id=s.employee_id,
                    employee_name=s.employee_name,
                    enrollment_date=s.enrollment_date,
                    total_cost=round(total, 2),
                    breakdown=s.verification_usage,
                )
            )
        return rows
