from __future__ import annotations

import json
import logging
from dataclasses import replace
from datetime import date, timedelta
from pathlib import Path
from typing import Callable, Optional

from ..attendance.model import AttendanceEvent
from ..common.datetime_utils import parse_timestamp, to_iso
from ..core.constants import MOCK_LATEST_DATE
from ..leave.model import LeaveRequest
from ..notifications.model import Notification
from ..onboarding.model import OnboardingData
from ..organizations.model import Organization
from ..support.model import SupportTicket
from ..tasks.model import Task
from ..users.model import User
from .mock_database import MockDatabase

logger = logging.getLogger(__name__)

DEFAULT_SEED_DIR = Path(__file__).resolve().parent / "seed_data"

FALLBACK_ORGANIZATIONS = [
    Organization(
        id="org_1",
        short_name="Prestige Falcon City",
        full_name="Prestige Falcon City Phase 1",
        address="Kanakapura Road, Bengaluru",
    ),
    Organization(
        id="org_2",
        short_name="Brigade Gateway",
        full_name="Brigade Gateway Enclave",
        address="Malleswaram, Bengaluru",
        manpower_approved_count=150,
    ),
]

_SEED_FILES = (
    "users.json",
    "organizations.json",
    "onboarding.json",
    "attendance.json",
    "leave.json",
    "tasks.json",
    "notifications.json",
    "support.json",
)


class DateShifter:
    """Moves mock dates so the mock data's latest day lands on ``today``.

    Shifting is by whole days so punch times keep their time of day.
    """

    def __init__(self, today: date):
        self.delta = timedelta(days=(today - MOCK_LATEST_DATE.date()).days)

    def date_str(self, value: Optional[str]) -> Optional[str]:
        if not value:
            return value
        if "T" in value:
            return self.timestamp_str(value)
        return (date.fromisoformat(value[:10]) + self.delta).isoformat()

    def timestamp_str(self, value: Optional[str]) -> Optional[str]:
        if not value:
            return value
        return to_iso(parse_timestamp(value) + self.delta)


def _read(seed_dir: Path, name: str):
    with (seed_dir / name).open("r", encoding="utf-8") as fh:
        return json.load(fh)


def _shift_ticket(raw: dict, shift: DateShifter) -> dict:
    data = dict(raw)
    for key in ("raised_at", "resolved_at", "closed_at"):
        data[key] = shift.timestamp_str(data.get(key))
    posts = []
    for p in data.get("posts") or ():
        post = dict(p)
        post["created_at"] = shift.timestamp_str(post.get("created_at"))
        post["comments"] = [
            {**c, "created_at": shift.timestamp_str(c.get("created_at"))} for c in post.get("comments") or ()
        ]
        posts.append(post)
    data["posts"] = posts
    return data


def load_seed(
    db: MockDatabase,
    *,
    seed_dir: Optional[Path] = None,
    today: date,
    password_hash: Callable[[str], str],
    default_password: str,
) -> None:
    """Populate ``db`` from the bundled JSON mock data.

    A missing or corrupt file falls back to the two default organizations.
    """

    seed_dir = Path(seed_dir) if seed_dir else DEFAULT_SEED_DIR
    shift = DateShifter(today)

    try:
        raw = {name: _read(seed_dir, name) for name in _SEED_FILES}

        users = [User.from_dict(u) for u in raw["users.json"]]
        hashed = password_hash(default_password)
        users = [replace(u, password_hash=u.password_hash or hashed) for u in users]

        orgs = raw["organizations.json"]
        organizations = [
            Organization.from_dict({**o, "provisional_creation_date": shift.date_str(o.get("provisional_creation_date"))})
            for o in orgs.get("organizations") or ()
        ]

        submissions = [
            OnboardingData.from_dict({**s, "enrollment_date": shift.date_str(s.get("enrollment_date"))})
            for s in raw["onboarding.json"]
        ]
        events = [
            AttendanceEvent.from_dict({**e, "timestamp": shift.timestamp_str(e["timestamp"])})
            for e in raw["attendance.json"]
        ]
        leaves = [
            LeaveRequest.from_dict(
                {**r, "start_date": shift.date_str(r["start_date"]), "end_date": shift.date_str(r["end_date"])}
            )
            for r in raw["leave.json"]
        ]
        tasks = [Task.from_dict({**t, "due_date": shift.date_str(t.get("due_date"))}) for t in raw["tasks.json"]]
        notifications = [Notification.from_dict(n) for n in raw["notifications.json"]]
        tickets = [SupportTicket.from_dict(_shift_ticket(t, shift)) for t in raw["support.json"]]
    except (OSError, ValueError, KeyError, TypeError) as e:
        logger.error("Failed to load mock data from %s: %s", seed_dir, e)
        with db.lock:
            db.organizations[:] = list(FALLBACK_ORGANIZATIONS)
        return

    with db.lock:
        db.users[:] = users
        db.organizations[:] = organizations
        db.organization_groups[:] = orgs.get("groups") or []
        db.onboarding_submissions[:] = submissions
        db.attendance_events[:] = events
        db.leave_requests[:] = leaves
        db.tasks[:] = tasks
        db.notifications[:] = notifications
        db.support_tickets[:] = tickets

    logger.info(
        "Loaded mock data: %d users, %d sites, %d attendance events (shifted %d days)",
        len(users),
        len(organizations),
        len(events),
        shift.delta.days,
    )
