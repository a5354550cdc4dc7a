from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Callable, Optional

from ..common.datetime_utils import parse_iso_date, to_iso, utc_now
from ..common.ids import new_id
from ..core.constants import PROVISIONAL_REMINDER_DAYS, PROVISIONAL_SITE_DAYS
from ..core.enums import Role
from ..organizations.repository import OrganizationRepository
from ..settings.service import SettingsService
from ..users.repository import UserRepository
from .model import Notification
from .repository import NotificationRepository

logger = logging.getLogger(__name__)

PROVISIONAL_SITE_REMINDER = "provisional_site_reminder"


class NotificationService:
    def __init__(self, notifications: NotificationRepository, *, clock: Callable[[], datetime] = utc_now):
        self._notifications = notifications
        self._clock = clock

    def create(self, *, user_id: str, type: str, message: str, link_to: Optional[str] = None) -> Notification:
        notification = Notification(
            id=new_id("notif"),
            user_id=user_id,
            type=type,
            message=message,
            link_to=link_to,
            is_read=False,
            created_at=to_iso(self._clock()),
        )
        return self._notifications.add(notification)

    def get_for_user(self, user_id: str) -> list[Notification]:
        return list(self._notifications.list_for_user(user_id))

    def mark_as_read(self, notification_id: str) -> None:
        self._notifications.mark_read(notification_id)

    def mark_all_as_read(self, user_id: str) -> None:
        self._notifications.mark_all_read(user_id)


class ProvisionalSiteMonitor:
    """Reminds admins and HR once a provisional site is close to its 90-day limit."""

    def __init__(
        self,
        organizations: OrganizationRepository,
        users: UserRepository,
        notifications: NotificationService,
        settings: SettingsService,
    ):
        self._organizations = organizations
        self._users = users
        self._notifications = notifications
        self._settings = settings

    def run(self, today: date) -> list[Notification]:
        if not self._settings.get_site_management().get("enable_provisional_sites"):
            return []

        recipients = [u for u in self._users.list_all() if u.role in (Role.ADMIN, Role.HR)]
        created = []
        for site in self._organizations.list_all():
            if not site.provisional_creation_date:
                continue
            days_left = PROVISIONAL_SITE_DAYS - (today - parse_iso_date(site.provisional_creation_date)).days
            if not (0 < days_left <= PROVISIONAL_REMINDER_DAYS):
                continue
            for user in recipients:
                already = any(
                    n.type == PROVISIONAL_SITE_REMINDER and f"'{site.short_name}'" in n.message
                    for n in self._notifications.get_for_user(user.id)
                )
                if already:
                    continue
                created.append(
                    self._notifications.create(
                        user_id=user.id,
                        type=PROVISIONAL_SITE_REMINDER,
                        message=(
                            f"The provisional site '{site.short_name}' is due for full configuration. "
                            f"{days_left} days remaining."
                        ),
                        link_to="/admin/sites",
                    )
                )
        if created:
            logger.info("Sent %d provisional site reminders", len(created))
        return created
