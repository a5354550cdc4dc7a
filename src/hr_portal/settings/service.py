from __future__ import annotations

import copy
import json
import logging
import math
import threading
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import Optional

from ..common.ids import new_id
from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..store.mock_database import MockDatabase
from .model import (
    DEFAULT_ADDRESS,
    DEFAULT_APPROVAL_WORKFLOW,
    DEFAULT_ENROLLMENT_RULES,
    DEFAULT_HOLIDAYS,
    DEFAULT_SITE_MANAGEMENT,
    DEFAULT_VERIFICATION_COSTS,
    AttendanceSettings,
    Holiday,
    VerificationCost,
)

logger = logging.getLogger(__name__)


class SettingsService:
    """Portal-wide settings (attendance rules, holidays, costs, ...).

    Kept in memory and written to ``settings_file`` as JSON after every change
    when a file is configured.
    """

    def __init__(self, db: MockDatabase, *, settings_file: Optional[str | Path] = None):
        self._db = db
        self._file = Path(settings_file) if settings_file else None
        self._lock = threading.RLock()

        self._attendance = AttendanceSettings()
        self._holidays: list[Holiday] = list(DEFAULT_HOLIDAYS)
        self._costs: list[VerificationCost] = list(DEFAULT_VERIFICATION_COSTS)
        self._site_management = dict(DEFAULT_SITE_MANAGEMENT)
        self._address = dict(DEFAULT_ADDRESS)
        self._approval_workflow = dict(DEFAULT_APPROVAL_WORKFLOW)
        with db.lock:
            if not db.enrollment_rules:
                db.enrollment_rules.update(copy.deepcopy(DEFAULT_ENROLLMENT_RULES))

        self._load()

    # ----- persistence -----
    def _load(self) -> None:
        if not self._file or not self._file.exists():
            return
        try:
            data = json.loads(self._file.read_text(encoding="utf-8"))
            self._attendance = self._merge_attendance(self._attendance, data.get("attendance") or {})
            if "holidays" in data:
                self._holidays = sorted((Holiday.from_dict(h) for h in data["holidays"]), key=lambda h: h.date)
            if "verification_costs" in data:
                self._costs = [VerificationCost(id=str(c["id"]), name=str(c["name"]), cost=float(c["cost"])) for c in data["verification_costs"]]
            self._site_management.update(data.get("site_management") or {})
            self._address.update(data.get("address") or {})
            self._approval_workflow.update(data.get("approval_workflow") or {})
        except (OSError, ValueError, KeyError, TypeError, ValidationError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", self._file, e)

    def _save(self) -> None:
        if not self._file:
            return
        self._file.parent.mkdir(parents=True, exist_ok=True)
        self._file.write_text(json.dumps(self.export(), indent=2), encoding="utf-8")

    def export(self) -> dict:
        with self._lock:
            return {
                "attendance": self._attendance.to_dict(),
                "holidays": [h.to_dict() for h in self._holidays],
                "verification_costs": [c.to_dict() for c in self._costs],
                "site_management": dict(self._site_management),
                "address": dict(self._address),
                "approval_workflow": dict(self._approval_workflow),
            }

    # ----- attendance -----
    _COUNT_FIELDS = (
        "annual_earned_leaves",
        "annual_sick_leaves",
        "monthly_floating_leaves",
        "sick_leave_certificate_threshold",
    )

    @classmethod
    def _coerce_attendance(cls, name: str, value):
        label = name.replace("_", " ").capitalize()
        if name == "enable_attendance_notifications":
            if isinstance(value, bool):
                return value
            if isinstance(value, str) and value.strip().lower() in {"true", "false"}:
                return value.strip().lower() == "true"
            raise ValidationError(f"{label} must be true or false")

        # bool is an int subclass; reject it for numeric fields
        if isinstance(value, bool):
            raise ValidationError(f"{label} must be a number")
        try:
            number = float(value)
        except (TypeError, ValueError):
            raise ValidationError(f"{label} must be a number")
        if not math.isfinite(number):
            raise ValidationError(f"{label} must be a number")
        if number < 0:
            raise ValidationError(f"{label} cannot be negative")
        if name in cls._COUNT_FIELDS:
            if not number.is_integer():
                raise ValidationError(f"{label} must be a whole number")
            return int(number)
        return number

    @classmethod
    def _merge_attendance(cls, current: AttendanceSettings, updates: dict) -> AttendanceSettings:
        unknown = set(updates) - AttendanceSettings.field_names()
        if unknown:
            raise ValidationError(f"Unknown attendance settings: {', '.join(sorted(unknown))}")
        converted = {name: cls._coerce_attendance(name, value) for name, value in updates.items()}
        merged = replace(current, **converted)
        if merged.minimum_hours_half_day > merged.minimum_hours_full_day:
            raise ValidationError("Half day hours cannot exceed full day hours")
        return merged

    def get_attendance_settings(self) -> AttendanceSettings:
        with self._lock:
            return self._attendance

    def update_attendance_settings(self, updates: dict) -> AttendanceSettings:
        with self._lock:
            self._attendance = self._merge_attendance(self._attendance, updates)
            self._save()
            return self._attendance

    # ----- holidays -----
    def get_holidays(self) -> list[Holiday]:
        with self._lock:
            return list(self._holidays)

    def add_holiday(self, *, holiday_date: date, name: str) -> Holiday:
        name = require_non_empty(name, "Holiday name")
        holiday = Holiday(id=new_id("hol"), date=holiday_date, name=name)
        with self._lock:
            self._holidays = sorted([*self._holidays, holiday], key=lambda h: h.date)
            self._save()
        return holiday

    def remove_holiday(self, holiday_id: str) -> None:
        with self._lock:
            self._holidays = [h for h in self._holidays if h.id != holiday_id]
            self._save()

    # ----- verification costs -----
    def get_verification_costs(self) -> list[VerificationCost]:
        with self._lock:
            return list(self._costs)

    def update_verification_costs(self, costs: list[dict]) -> list[VerificationCost]:
        parsed = []
        for c in costs:
            try:
                cost = float(c["cost"])
            except (KeyError, TypeError, ValueError):
                raise ValidationError("Each verification cost needs a numeric cost")
            if cost < 0:
                raise ValidationError("Verification cost cannot be negative")
            parsed.append(VerificationCost(id=str(c.get("id") or new_id("cost")), name=require_non_empty(c.get("name", ""), "Name"), cost=cost))
        with self._lock:
            self._costs = parsed
            self._save()
        return parsed

    def cost_table(self) -> dict[str, float]:
        return {c.name: c.cost for c in self.get_verification_costs()}

    # ----- site management / address / workflow -----
    def get_site_management(self) -> dict:
        with self._lock:
            return dict(self._site_management)

    def update_site_management(self, updates: dict) -> dict:
        with self._lock:
            self._site_management.update(updates)
            self._save()
            return dict(self._site_management)

    def get_address_settings(self) -> dict:
        with self._lock:
            return dict(self._address)

    def update_address_settings(self, updates: dict) -> dict:
        with self._lock:
            self._address.update(updates)
            self._save()
            return dict(self._address)

    def get_approval_workflow(self) -> dict:
        with self._lock:
            return dict(self._approval_workflow)

    def update_approval_workflow(self, updates: dict) -> dict:
        role = updates.get("final_confirmation_role")
        if role is not None:
            try:
                Role(role)
            except ValueError:
                raise ValidationError(f"Unknown role: {role}")
        with self._lock:
            self._approval_workflow.update(updates)
            self._save()
            return dict(self._approval_workflow)

    # ----- enrollment rules (stored alongside the mock data) -----
    def get_enrollment_rules(self) -> dict:
        with self._db.lock:
            return copy.deepcopy(self._db.enrollment_rules)

    def update_enrollment_rules(self, updates: dict) -> dict:
        if "manpower_limit_rule" in updates and updates["manpower_limit_rule"] not in {"warn", "block"}:
            raise ValidationError("Manpower limit rule must be 'warn' or 'block'")
        with self._db.lock:
            self._db.enrollment_rules.update(copy.deepcopy(updates))
            return copy.deepcopy(self._db.enrollment_rules)

