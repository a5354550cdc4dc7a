from __future__ import annotations

import io
import random
from datetime import date

import pytest

from hr_portal.core.enums import PortalSyncStatus, SubmissionStatus
from hr_portal.core.exceptions import NotFoundError, ValidationError
from hr_portal.onboarding.helpers import cross_verify_names, get_pincode_details, suggest_department
from hr_portal.onboarding.model import OnboardingData
from hr_portal.onboarding.verification import MockVerificationGateway


def _usage(submission) -> dict:
    return {u.name: u.count for u in submission.verification_usage}


def test_gateway_checks_format_before_luck():
    gateway = MockVerificationGateway(success_rate=1.0, rng=random.Random(1))

    assert gateway.verify_aadhaar("123456789012").success
    assert not gateway.verify_aadhaar("1234").success
    assert not gateway.lookup_uan("UAN123").success

    unlucky = MockVerificationGateway(success_rate=0.0)
    result = unlucky.verify_bank_account(account_number="1", ifsc_code="X", account_holder_name="Y")
    assert result.verified_fields == {"account_holder_name": False, "account_number": True}


def test_sync_success_records_usage(container):
    synced = container.onboarding_service.sync_portals("sub_seed_2")

    assert synced.portal_sync_status == PortalSyncStatus.SYNCED
    assert synced.status == SubmissionStatus.VERIFIED
    assert _usage(synced) == {"Aadhaar Verification": 2, "Cheque OCR": 1, "Bank AC Verification Advanced": 1}
    assert synced.personal["verified_status"] == {"id_proof_number": True}
    assert synced.bank["verified_status"] == {"account_number": True, "account_holder_name": True}
    assert "uan_number" not in synced.uan["verified_status"]
    assert container.onboarding_service.get_by_id("sub_seed_2") == synced


def test_sync_with_previous_pf_looks_up_uan(container):
    synced = container.onboarding_service.sync_portals("sub_seed_1")

    assert _usage(synced)["EPF UAN Lookup"] == 2
    assert synced.uan["verified_status"] == {"uan_number": True}


def test_sync_failure_sends_submission_back(make_app):
    app = make_app({"VERIFICATION_SUCCESS_RATE": 0.0})
    service = app.extensions["hr_portal"].onboarding_service

    result = service.sync_portals("sub_seed_2")

    assert result.portal_sync_status == PortalSyncStatus.FAILED
    assert result.status == SubmissionStatus.PENDING
    assert result.bank["verified_status"]["account_holder_name"] is False


def test_sync_ignores_unverified_submissions(container):
    pending = container.onboarding_service.get_by_id("sub_seed_3")

    assert container.onboarding_service.sync_portals("sub_seed_3") == pending
    with pytest.raises(NotFoundError):
        container.onboarding_service.sync_portals("sub_missing")


def test_draft_submit_and_review(container):
    service = container.onboarding_service
    form = OnboardingData(id=None, status=SubmissionStatus.DRAFT, enrollment_date="2024-07-30", personal={"first_name": "Lakshmi"})

    draft_id = service.save_draft(form)["draft_id"]
    assert draft_id.startswith("draft")
    assert service.save_draft(OnboardingData.from_dict({**form.to_dict(), "id": draft_id}))["draft_id"] == draft_id

    submitted = service.submit(form)
    assert submitted.status == SubmissionStatus.PENDING

    rejected = service.request_changes(submitted.id, "  Upload a clearer Aadhaar  ")
    assert rejected.status == SubmissionStatus.REJECTED
    assert rejected.change_request_reason == "Upload a clearer Aadhaar"

    verified = service.verify(submitted.id)
    assert verified.status == SubmissionStatus.VERIFIED
    assert verified.portal_sync_status == PortalSyncStatus.PENDING_SYNC


def test_submit_requires_enrollment_date(container):
    with pytest.raises(ValidationError):
        container.onboarding_service.submit(OnboardingData(id=None, status=SubmissionStatus.DRAFT, enrollment_date=""))


def test_filters_and_lookup(container):
    service = container.onboarding_service

    assert [s.id for s in service.get_submissions(status="verified")] == ["sub_seed_1", "sub_seed_2"]
    assert [s.id for s in service.get_submissions(organization_id="org_2")] == ["sub_seed_2", "draft_seed_1"]
    assert service.find_by_email("ANIL@paradigm.com").id == "sub_seed_2"
    assert service.find_by_email("nobody@paradigm.com") is None


def test_verification_cost_breakdown(container):
    rows = container.onboarding_service.verification_cost_breakdown(date(2024, 7, 1), date(2024, 7, 31))

    assert [(r.employee_id, r.employee_name, r.total_cost) for r in rows] == [
        ("PFC-0012", "Ravi Kumar", 9.5),
        ("BGE-0101", "Anil Gowda", 4.75),
    ]
    assert container.onboarding_service.verification_cost_breakdown(date(2024, 7, 16), date(2024, 7, 21)) == []


def test_upload_document(container):
    service = container.onboarding_service

    result = service.upload_document(io.BytesIO(b"hello"), "../my aadhaar.pdf")

    assert result["url"].startswith("http://localhost/uploads/")
    stored = result["url"].rsplit("/", 1)[1]
    assert stored.endswith("-my_aadhaar.pdf")
    assert service.upload_path(stored).read_bytes() == b"hello"
    with pytest.raises(ValidationError):
        service.upload_document(io.BytesIO(b""), "")
    with pytest.raises(NotFoundError):
        service.upload_path("missing.pdf")


def test_helpers():
    assert get_pincode_details("560076") == {"city": "Bengaluru", "state": "Karnataka"}
    with pytest.raises(ValidationError):
        get_pincode_details("110001")

    assert cross_verify_names("Ravi Kumar", " ravi kumar")["is_match"] is True
    assert cross_verify_names("Ravi Kumar", "Ravi K")["reason"] == "First names match, but full names differ."
    assert cross_verify_names("Ravi", "Anil")["is_match"] is False

    assert suggest_department("Security Guard") == "Security"
    assert suggest_department("Housekeeping Staff") == "Housekeeping"
    assert suggest_department("Site Supervisor") == "Management"
    assert suggest_department("Electrician") == "Other"


@pytest.mark.parametrize("bad_date", ["31/07/2024", "soon"])
def test_enrollment_date_must_be_iso(container, bad_date):
    service = container.onboarding_service
    form = OnboardingData(id=None, status=SubmissionStatus.DRAFT, enrollment_date=bad_date)

    with pytest.raises(ValidationError, match="Invalid enrollment date"):
        service.submit(form)
    with pytest.raises(ValidationError, match="Invalid enrollment date"):
        service.save_draft(form)

    existing = service.get_by_id("sub_seed_3")
    with pytest.raises(ValidationError, match="Invalid enrollment date"):
        service.update(OnboardingData.from_dict({**existing.to_dict(), "enrollment_date": bad_date}))
    assert service.get_by_id("sub_seed_3") == existing


def test_cost_breakdown_skips_unreadable_dates(container):
    seeded = container.onboarding_service.get_by_id("sub_seed_1")
    container.submissions_repo.add(
        OnboardingData.from_dict({**seeded.to_dict(), "id": "sub_legacy", "enrollment_date": "31/07/2024"})
    )

    rows = container.onboarding_service.verification_cost_breakdown(date(2024, 7, 1), date(2024, 7, 31))

    assert [r.employee_id for r in rows] == ["PFC-0012", "BGE-0101"]


def test_gateway_accepts_numeric_ids():
    gateway = MockVerificationGateway(success_rate=1.0, rng=random.Random(1))

    assert gateway.verify_aadhaar(123456789012).success
    assert gateway.lookup_uan(100123456789).success
    assert not gateway.verify_aadhaar(1234).success
    assert not gateway.lookup_uan(None).success


def test_uan_lookup_has_its_own_success_rate():
    gateway = MockVerificationGateway(success_rate=1.0, uan_success_rate=0.0)

    assert gateway.verify_aadhaar("123456789012").success
    assert not gateway.lookup_uan("100123456789").success


def test_sync_with_numeric_aadhaar(container):
    service = container.onboarding_service
    seeded = service.get_by_id("sub_seed_2")
    service.update(
        OnboardingData.from_dict({**seeded.to_dict(), "personal": {**seeded.personal, "id_proof_number": 234567890123}})
    )

    synced = service.sync_portals("sub_seed_2")

    assert synced.portal_sync_status == PortalSyncStatus.SYNCED
    assert synced.personal["verified_status"] == {"id_proof_number": True}


def test_sync_with_short_numeric_aadhaar_fails(container):
    service = container.onboarding_service
    seeded = service.get_by_id("sub_seed_2")
    service.update(OnboardingData.from_dict({**seeded.to_dict(), "personal": {**seeded.personal, "id_proof_number": 1234}}))

    synced = service.sync_portals("sub_seed_2")

    assert synced.portal_sync_status == PortalSyncStatus.FAILED
    assert synced.status == SubmissionStatus.PENDING
