from __future__ import annotations

import pytest

from hr_portal.core.exceptions import ValidationError
from hr_portal.organizations.model import Organization


def test_create_rejects_duplicates(container):
    service = container.organization_service

    created = service.create_organization(Organization(id="org_4", short_name="Embassy Tech", full_name="Embassy Tech Village"))
    assert service.get_organization("org_4") == created

    with pytest.raises(ValidationError, match="Site org_1 already exists"):
        service.create_organization(Organization(id="org_1", short_name="Again", full_name="Again"))
    with pytest.raises(ValidationError):
        service.create_organization(Organization(id="org_5", short_name=" ", full_name=""))


def test_bulk_upload_upserts(container):
    service = container.organization_service

    result = service.bulk_upload(
        [
            Organization(id="org_1", short_name="Prestige Falcon City", full_name="Renamed", manpower_approved_count=45),
            Organization(id="org_6", short_name="RMZ Ecoworld", full_name="RMZ Ecoworld"),
        ]
    )

    assert result == {"count": 2}
    assert service.get_organization("org_1").manpower_approved_count == 45
    assert len(service.get_organizations()) == 4


def test_from_dict_fills_names():
    org = Organization.from_dict({"id": "org_7", "manpower_approved_count": "12"})

    assert (org.short_name, org.full_name, org.manpower_approved_count) == ("org_7", "org_7", 12)


def test_organization_routes(client, login):
    login("hr@paradigm.com")

    assert client.post("/api/organizations", json={"short_name": "No id"}).status_code == 400
    resp = client.post("/api/organizations/bulk", json={"organizations": [{"id": "org_8", "short_name": "Manyata"}]})
    assert resp.get_json()["message"] == "1 sites uploaded."
    assert client.get("/api/organizations/org_8").get_json()["data"]["full_name"] == "Manyata"
    assert client.get("/api/organizations/org_404").status_code == 404

    structure = client.get("/api/organizations/structure").get_json()["data"]
    assert [g["name"] for g in structure] == ["Prestige Group", "Brigade Group"]

    # Provisional reminders are off until enabled in site management.
    assert client.post("/api/organizations/provisional-checks").get_json()["data"] == []
    client.patch("/api/settings/site-management", json={"enable_provisional_sites": True})
    reminders = client.post("/api/organizations/provisional-checks").get_json()["data"]
    assert {n["user_id"] for n in reminders} == {"user_1", "user_2"}


def test_site_manager_cannot_create_sites(client, login):
    login("site@paradigm.com")

    assert client.post("/api/organizations", json={"id": "org_9", "short_name": "X"}).status_code == 403
    assert client.get("/api/organizations").status_code == 200
