from __future__ import annotations

from ..core.exceptions import ValidationError

_PINCODE_PREFIXES = {
    "560": ("Bengaluru", "Karnataka"),
    "600": ("Chennai", "Tamil Nadu"),
}

_DEPARTMENT_KEYWORDS = (
    (("security", "guard"), "Security"),
    (("housekeep", "clean"), "Housekeeping"),
    (("manager", "supervisor"), "Management"),
)


def get_pincode_details(pincode: str) -> dict:
    pincode = (pincode or "").strip()
    for prefix, (city, state) in _PINCODE_PREFIXES.items():
        if pincode.startswith(prefix):
            return {"city": city, "state": state}
    raise ValidationError("Invalid pincode")


def cross_verify_names(name1: str, name2: str) -> dict:
    a, b = (name1 or "").strip().lower(), (name2 or "").strip().lower()
    if a == b:
        return {"is_match": True, "reason": "Names are an exact match."}
    if a.split(" ")[0] == b.split(" ")[0]:
        return {"is_match": False, "reason": "First names match, but full names differ."}
    return {"is_match": False, "reason": "Names do not appear to match."}


def suggest_department(designation: str) -> str:
    lower = (designation or "").lower()
    for keywords, department in _DEPARTMENT_KEYWORDS:
        if any(k in lower for k in keywords):
            return department
    return "Other"
