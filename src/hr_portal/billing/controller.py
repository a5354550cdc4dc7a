from __future__ import annotations

from datetime import date

from flask import Flask, request

from ..common.http import date_arg, json_body, ok
from ..container import Container
from ..core.exceptions import ValidationError
from ..core.permissions import Permission


def _month_arg(value) -> date:
    """``YYYY-MM`` (or a full date) -> first day of that month."""
    if not value:
        raise ValidationError("month is required")
    try:
        year, month = str(value).split("-")[:2]
        return date(int(year), int(month), 1)
    except ValueError:
        raise ValidationError(f"Invalid month: {value}")


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    billing = container.billing_service

    @app.route("/api/billing/invoices", methods=["GET"], endpoint="invoice_statuses")
    @guards.permission_required(Permission.VIEW_INVOICE_SUMMARY)
    def invoice_statuses():
        return ok(billing.invoice_statuses(_month_arg(request.args.get("month"))))

    @app.route("/api/billing/invoices/<site_id>", methods=["GET"], endpoint="invoice_summary")
    @guards.permission_required(Permission.VIEW_INVOICE_SUMMARY)
    def invoice_summary(site_id: str):
        return ok(billing.invoice_summary(site_id, _month_arg(request.args.get("month"))).to_dict())

    @app.route("/api/billing/invoices/<site_id>/status", methods=["PUT"], endpoint="set_invoice_status")
    @guards.permission_required(Permission.VIEW_INVOICE_SUMMARY)
    def set_invoice_status(site_id: str):
        body = json_body()
        status = billing.set_invoice_status(site_id, _month_arg(body.get("month")), body.get("status", ""))
        return ok({"site_id": site_id, "status": status}, message=f"Invoice marked as {status}.")

    @app.route("/api/billing/verification-costs", methods=["GET"], endpoint="verification_cost_breakdown")
    @guards.permission_required(Permission.VIEW_VERIFICATION_COSTING)
    def verification_cost_breakdown():
        today = container.today()
        start = date_arg("start", today.replace(day=1))
        end = date_arg("end", today)
        if end < start:
            raise ValidationError("Invalid date range provided.")
        rows = container.onboarding_service.verification_cost_breakdown(start, end)
        return ok({"rows": [r.to_dict() for r in rows], "total_cost": round(sum(r.total_cost for r in rows), 2)})
