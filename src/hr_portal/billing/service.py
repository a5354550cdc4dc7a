from __future__ import annotations

from datetime import date, timedelta

from ..core.enums import InvoiceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..organizations.repository import OrganizationRepository
from ..store.mock_database import MockDatabase
from .model import STANDARD_LINE_ITEMS, InvoiceData


def month_key(month: date) -> str:
    return month.strftime("%Y-%m")


class BillingService:
    """Use case: monthly invoice summaries and their status per site."""

    def __init__(self, db: MockDatabase, organizations: OrganizationRepository):
        self._db = db
        self._organizations = organizations

    def invoice_statuses(self, month: date) -> dict[str, str]:
        prefix = month_key(month) + ":"
        with self._db.lock:
            stored = {k[len(prefix):]: v for k, v in self._db.invoice_statuses.items() if k.startswith(prefix)}
        return {o.id: stored.get(o.id, InvoiceStatus.NOT_GENERATED.value) for o in self._organizations.list_all()}

    def set_invoice_status(self, site_id: str, month: date, status: InvoiceStatus | str) -> str:
        if not self._organizations.get_by_id(site_id):
            raise NotFoundError("Site not found")
        try:
            status = InvoiceStatus(status)
        except ValueError:
            raise ValidationError(f"Invalid invoice status: {status}")
        with self._db.lock:
            self._db.invoice_statuses[f"{month_key(month)}:{site_id}"] = status.value
        return status.value

    def invoice_summary(self, site_id: str, month: date) -> InvoiceData:
        site = self._organizations.get_by_id(site_id)
        if not site:
            raise NotFoundError("Site not found")
        return InvoiceData(
            site_name=site.full_name,
            site_address=site.address,
            invoice_number=f"INV-{month:%Y%m}-{site_id[-3:]}",
            invoice_date=(month + timedelta(days=5)).strftime("%d-%m-%Y"),
            statement_month=month.strftime("%B %Y"),
            line_items=STANDARD_LINE_ITEMS,
        )
