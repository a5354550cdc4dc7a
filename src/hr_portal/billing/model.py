from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class InvoiceLineItem:
    id: str
    description: str
    deployment: int
    no_of_days: int
    rate_per_day: float
    rate_per_month: float
    is_deduction: bool = False

    @property
    def amount(self) -> float:
        if self.is_deduction:
            return -self.rate_per_month
        return self.deployment * self.rate_per_month

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "description": self.description,
            "deployment": self.deployment,
            "no_of_days": self.no_of_days,
            "rate_per_day": self.rate_per_day,
            "rate_per_month": self.rate_per_month,
            "amount": self.amount,
        }


@dataclass(frozen=True)
class InvoiceData:
    site_name: str
    site_address: str
    invoice_number: str
    invoice_date: str
    statement_month: str
    line_items: tuple[InvoiceLineItem, ...]

    @property
    def total(self) -> float:
        return sum(item.amount for item in self.line_items)

    def to_dict(self) -> dict:
        return {
            "site_name": self.site_name,
            "site_address": self.site_address,
            "invoice_number": self.invoice_number,
            "invoice_date": self.invoice_date,
            "statement_month": self.statement_month,
            "line_items": [i.to_dict() for i in self.line_items],
            "total": self.total,
        }


STANDARD_LINE_ITEMS = (
    InvoiceLineItem(id="1", description="Security Guard", deployment=10, no_of_days=31, rate_per_day=800, rate_per_month=24000),
    InvoiceLineItem(id="2", description="Security Supervisor", deployment=2, no_of_days=31, rate_per_day=1000, rate_per_month=30000),
    InvoiceLineItem(id="3", description="Uniform Deduction", deployment=0, no_of_days=1, rate_per_day=0, rate_per_month=500, is_deduction=True),
)
