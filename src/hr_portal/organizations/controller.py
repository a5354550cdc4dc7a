from __future__ import annotations

from flask import Flask

from ..common.http import json_body, ok
from ..container import Container
from ..core.exceptions import NotFoundError, ValidationError
from ..core.permissions import Permission
from .model import Organization


def _parse_org(data) -> Organization:
    try:
        return Organization.from_dict(data)
    except (KeyError, TypeError, ValueError):
        raise ValidationError("Each site needs an id, short name and a numeric manpower count")


def register(app: Flask, container: Container) -> None:
    guards = container.guards
    orgs = container.organization_service

    @app.route("/api/organizations", methods=["GET"], endpoint="list_organizations")
    @guards.login_required
    def list_organizations():
        return ok([o.to_dict() for o in orgs.get_organizations()])

    @app.route("/api/organizations", methods=["POST"], endpoint="create_organization")
    @guards.permission_required(Permission.MANAGE_SITES)
    def create_organization():
        org = orgs.create_organization(_parse_org(json_body()))
        return ok(org.to_dict(), message="Site created.", status=201)

    @app.route("/api/organizations/bulk", methods=["POST"], endpoint="bulk_upload_organizations")
    @guards.permission_required(Permission.MANAGE_SITES)
    def bulk_upload_organizations():
        rows = json_body().get("organizations")
        if not isinstance(rows, list):
            raise ValidationError("organizations must be a list")
        result = orgs.bulk_upload([_parse_org(r) for r in rows])
        return ok(result, message=f"{result['count']} sites uploaded.")

    @app.route("/api/organizations/structure", methods=["GET"], endpoint="organization_structure")
    @guards.permission_required(Permission.VIEW_ENTITY_MANAGEMENT)
    def organization_structure():
        return ok(orgs.get_organization_structure())

    @app.route("/api/organizations/<org_id>", methods=["GET"], endpoint="get_organization")
    @guards.login_required
    def get_organization(org_id: str):
        org = orgs.get_organization(org_id)
        if not org:
            raise NotFoundError("Site not found")
        return ok(org.to_dict())

    @app.route("/api/organizations/provisional-checks", methods=["POST"], endpoint="provisional_site_checks")
    @guards.permission_required(Permission.MANAGE_SITES)
    def provisional_site_checks():
        created = container.provisional_site_monitor.run(container.today())
        return ok([n.to_dict() for n in created])
