from __future__ import annotations

import logging
import random
from datetime import datetime
from typing import Callable, Optional

import requests

from ..common.datetime_utils import to_iso, utc_now
from ..core.constants import SIGNED_URL_EXPIRES_SECONDS
from .storage import ObjectStorage, placeholder_invoice_pdf
from .store import FunctionStore, StoreError

logger = logging.getLogger(__name__)

INVOICE_BUCKET = "invoices"
SENDGRID_URL = "https://api.sendgrid.com/v3/mail/send"
ANONYMOUS_USER = "anonymous"


class FunctionsService:
    """The three serverless endpoints: invoice generation, welcome e-mail, site attendance.

    ``store_factory`` opens the functions database; it raises ``ValueError``
    when the database is not configured. Write failures surface as
    ``StoreError``; the activity log and the placeholder PDF are best effort.
    """

    def __init__(
        self,
        store_factory: Callable[[], FunctionStore],
        storage: ObjectStorage,
        *,
        use_mock_email: bool,
        sendgrid_api_key: Optional[str],
        sender: str,
        rng: Optional[random.Random] = None,
        clock: Callable[[], datetime] = utc_now,
        http_post: Callable = requests.post,
    ):
        self._store_factory = store_factory
        self._storage = storage
        self._use_mock_email = use_mock_email
        self._sendgrid_api_key = sendgrid_api_key
        self._sender = sender
        self._rng = rng or random.Random()
        self._clock = clock
        self._http_post = http_post

    def generate_invoice(self, enrollment_id: str) -> dict:
        store = self._store_factory()
        invoice = store.insert_invoice(
            {
                "enrollment_id": enrollment_id,
                "amount": self._rng.randrange(10000) / 100,
                "currency": "USD",
                "status": "generated",
                "generated_at": to_iso(self._clock()),
            }
        )

        file_name = f"invoice_{invoice.get('id')}.pdf"
        try:
            self._storage.upload(INVOICE_BUCKET, file_name, placeholder_invoice_pdf(enrollment_id))
        except OSError as e:
            logger.warning("Could not upload placeholder PDF (this is optional): %s", e)

        signed_url = self._storage.create_signed_url(INVOICE_BUCKET, file_name, SIGNED_URL_EXPIRES_SECONDS)
        logger.info("Invoice %s generated for enrollment %s", invoice.get("id"), enrollment_id)
        return {"invoice": invoice, "signed_url": signed_url}

    def send_welcome_email(self, user_email: str, user_name: str, *, user_id: Optional[str] = None) -> dict:
        store = self._store_factory()

        if self._use_mock_email:
            logger.info("MOCK EMAIL: Sending welcome email to %s for %s", user_email, user_name)
            service_response = "Mock email sent"
        else:
            if not self._sendgrid_api_key:
                raise ValueError("Missing SENDGRID_API_KEY for non-mock email sending.")
            resp = self._http_post(
                SENDGRID_URL,
                headers={"Authorization": f"Bearer {self._sendgrid_api_key}"},
                json={
                    "personalizations": [{"to": [{"email": user_email}]}],
                    "from": {"email": self._sender},
                    "subject": "Welcome to Our Service!",
                    "content": [{"type": "text/plain", "value": f"Hello {user_name},\n\nWelcome to our service!"}],
                },
                timeout=10,
            )
            if not resp.ok:
                raise ValueError(f"Failed to send email via SendGrid: {resp.status_code} - {resp.text}")
            service_response = "Email sent via SendGrid"

        try:
            store.insert_activity_log(
                {
                    "user_id": user_id or ANONYMOUS_USER,
                    "activity_type": "welcome_email_sent",
                    "details": {
                        "user_email": user_email,
                        "user_name": user_name,
                        "email_sent": True,
                        "email_service_response": service_response,
                    },
                }
            )
        except StoreError as e:
            logger.warning("Activity log insert failed: %s", e)

        return {"email_sent": True, "email_service_response": service_response}

    def submit_attendance(self, site_id: str, *, user_id: Optional[str] = None) -> dict:
        store = self._store_factory()
        return store.insert_site_attendance(
            {"site_id": site_id, "user_id": user_id or ANONYMOUS_USER, "check_in_time": to_iso(self._clock())}
        )
