from __future__ import annotations

from datetime import date

import pytest

from hr_portal.core.enums import LeaveRequestStatus
from hr_portal.core.exceptions import NotFoundError, ValidationError


@pytest.fixture
def leaves(container):
    return container.leave_service


def test_submit_routes_to_reporting_manager(leaves):
    req = leaves.submit(
        user_id="user_6",
        leave_type="Earned",
        start_date=date(2024, 8, 12),
        end_date=date(2024, 8, 13),
        reason="  Wedding  ",
    )

    assert req.status == LeaveRequestStatus.PENDING_MANAGER_APPROVAL
    assert req.current_approver_id == "user_5"
    assert req.reason == "Wedding"
    assert req.user_name == "Ravi Kumar"


def test_submit_without_manager_goes_straight_to_hr(leaves):
    req = leaves.submit(user_id="user_4", leave_type="Floating", start_date=date(2024, 8, 2), end_date=date(2024, 8, 2), reason="Festival")

    assert req.status == LeaveRequestStatus.PENDING_HR_CONFIRMATION
    assert req.current_approver_id == "user_2"


def test_final_approver_follows_workflow_setting(container, leaves):
    container.settings_service.update_approval_workflow({"final_confirmation_role": "admin"})

    req = leaves.submit(user_id="user_4", leave_type="Earned", start_date=date(2024, 8, 2), end_date=date(2024, 8, 2), reason="Trip")

    assert req.current_approver_id == "user_1"


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"leave_type": "Casual"}, "Invalid leave type"),
        ({"day_option": "quarter"}, "Invalid day option"),
        ({"end_date": date(2024, 8, 1)}, "End date cannot be before start date"),
        ({"reason": "   "}, "Reason is required"),
        ({"day_option": "half"}, "Half day leave"),
        ({"leave_type": "Sick", "end_date": date(2024, 8, 7)}, "doctor's certificate"),
    ],
)
def test_submit_validation(leaves, kwargs, message):
    params = {
        "user_id": "user_6",
        "leave_type": "Earned",
        "start_date": date(2024, 8, 5),
        "end_date": date(2024, 8, 6),
        "reason": "Personal",
        **kwargs,
    }
    with pytest.raises(ValidationError, match=message):
        leaves.submit(**params)


def test_long_sick_leave_with_certificate_is_accepted(leaves):
    req = leaves.submit(
        user_id="user_6",
        leave_type="Sick",
        start_date=date(2024, 8, 5),
        end_date=date(2024, 8, 7),
        reason="Fever",
        doctor_certificate="http://localhost:5000/uploads/cert.pdf",
    )

    assert req.doctor_certificate.endswith("cert.pdf")


def test_submit_unknown_user(leaves):
    with pytest.raises(NotFoundError):
        leaves.submit(user_id="ghost", leave_type="Earned", start_date=date(2024, 8, 5), end_date=date(2024, 8, 5), reason="x")


def test_manager_approval_then_hr_confirmation(leaves):
    step1 = leaves.approve("leave_seed_3", "user_5", "Enjoy")

    assert step1.status == LeaveRequestStatus.PENDING_HR_CONFIRMATION
    assert step1.current_approver_id == "user_2"
    assert step1.approval_history[-1].approver_name == "Sunita Menon"
    assert step1.approval_history[-1].comments == "Enjoy"

    step2 = leaves.confirm_by_hr("leave_seed_3", "user_2")

    assert step2.status == LeaveRequestStatus.APPROVED
    assert step2.current_approver_id is None
    assert len(step2.approval_history) == 2
    assert step2 in leaves.get_approved(user_id="user_6")


def test_reject_ends_the_flow(leaves):
    rejected = leaves.reject("leave_seed_4", "user_2", "Short staffed")

    assert rejected.status == LeaveRequestStatus.REJECTED
    assert rejected.current_approver_id is None
    with pytest.raises(ValidationError, match="already been decided"):
        leaves.confirm_by_hr("leave_seed_4", "user_2")


def test_decide_unknown_request(leaves):
    with pytest.raises(NotFoundError):
        leaves.approve("leave_missing", "user_5")


def test_get_requests_filters(leaves):
    pending_for_manager = leaves.get_requests(for_approver_id="user_5")
    assert [r.id for r in pending_for_manager] == ["leave_seed_3"]

    with pytest.raises(ValidationError):
        leaves.get_requests(status="maybe")


def test_balances_count_approved_days_in_year(leaves):
    anil = leaves.balances("user_7", 2024)
    assert anil.earned_total == 5.0
    assert anil.earned_used == 1
    assert anil.sick_total == 12.0
    assert anil.floating_total == 12.0

    sunita = leaves.balances("user_5", 2024)
    assert sunita.sick_used == 0.5
    assert sunita.floating_used == 0

    assert leaves.balances("user_7", 2023).earned_used == 0
