from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from datetime import date

from ..common.datetime_utils import parse_iso_date


@dataclass(frozen=True)
class AttendanceSettings:
    minimum_hours_full_day: float = 8
    minimum_hours_half_day: float = 4
    annual_earned_leaves: int = 5
    annual_sick_leaves: int = 12
    monthly_floating_leaves: int = 1
    enable_attendance_notifications: bool = False
    sick_leave_certificate_threshold: int = 2

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def field_names(cls) -> set[str]:
        return {f.name for f in fields(cls)}


@dataclass(frozen=True)
class Holiday:
    id: str
    date: date
    name: str

    def to_dict(self) -> dict:
        return {"id": self.id, "date": self.date.isoformat(), "name": self.name}

    @classmethod
    def from_dict(cls, data: dict) -> "Holiday":
        return cls(id=str(data["id"]), date=parse_iso_date(str(data["date"])), name=str(data["name"]))


@dataclass(frozen=True)
class VerificationCost:
    id: str
    name: str
    cost: float

    def to_dict(self) -> dict:
        return asdict(self)


DEFAULT_HOLIDAYS = (
    Holiday(id="hol_1", date=date(2024, 8, 15), name="Independence Day"),
    Holiday(id="hol_2", date=date(2024, 10, 2), name="Gandhi Jayanti"),
    Holiday(id="hol_3", date=date(2024, 12, 25), name="Christmas"),
)

DEFAULT_VERIFICATION_COSTS = (
    VerificationCost(id="cost_1", name="Profile Picture", cost=0),
    VerificationCost(id="cost_2", name="Mobile to Form Prefill", cost=7),
    VerificationCost(id="cost_3", name="KYC OCR (Plus)", cost=1.5),
    VerificationCost(id="cost_4", name="Aadhaar Mobile Link", cost=2.5),
    VerificationCost(id="cost_5", name="EPF UAN Lookup", cost=2.5),
    VerificationCost(id="cost_6", name="Cheque OCR", cost=3),
    VerificationCost(id="cost_7", name="Bank AC Verification Advanced", cost=2.25),
    VerificationCost(id="cost_8", name="PAN Profile Detailed", cost=5),
    VerificationCost(id="cost_9", name="Aadhaar Verification", cost=1.75),
    VerificationCost(id="cost_10", name="Voter ID OCR", cost=1.5),
    VerificationCost(id="cost_11", name="Driving License OCR", cost=1.5),
    VerificationCost(id="cost_12", name="Education Certificate OCR", cost=2.0),
    VerificationCost(id="cost_13", name="Experience/Salary Slip OCR", cost=2.0),
    VerificationCost(id="cost_14", name="ESI Card OCR", cost=1.5),
)

DEFAULT_SITE_MANAGEMENT = {"enable_provisional_sites": False}
DEFAULT_ADDRESS = {"enable_pincode_verification": True}
DEFAULT_APPROVAL_WORKFLOW = {"final_confirmation_role": "hr"}

DEFAULT_ENROLLMENT_RULES = {
    "esi_ctc_threshold": 21000,
    "enforce_manpower_limit": True,
    "manpower_limit_rule": "warn",
    "allow_salary_edit": True,
    "salary_threshold": 21000,
    "default_policy_single": "1L",
    "default_policy_married": "2L",
    "enable_esi_rule": True,
    "enable_gmc_rule": True,
    "enforce_family_validation": True,
    "rules_by_designation": {
        "Security Guard": {
            "documents": {
                "aadhaar": True,
                "pan": True,
                "bank_proof": True,
                "education_certificate": False,
                "salary_slip": False,
                "uan_proof": False,
                "family_aadhaar": False,
            },
            "verifications": {"require_bengaluru_address": True, "require_dob_verification": True},
        }
    },
}
