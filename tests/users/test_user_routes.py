from __future__ import annotations


def test_hr_manages_users(client, login):
    login("hr@paradigm.com")

    rows = client.get("/api/users").get_json()["data"]
    ravi = next(r for r in rows if r["id"] == "user_6")
    assert ravi["manager_name"] == "Sunita Menon"

    created = client.post("/api/users", json={"name": "Kiran", "email": "kiran@paradigm.com", "role": "field_officer"})
    assert created.status_code == 201
    new_id = created.get_json()["data"]["id"]

    patched = client.patch(f"/api/users/{new_id}", json={"organization_id": "org_2"})
    assert patched.get_json()["data"]["organization_id"] == "org_2"

    assert client.put(f"/api/users/{new_id}/reporting-manager", json={"manager_id": "user_5"}).status_code == 200
    assert client.get(f"/api/users/{new_id}").get_json()["data"]["reporting_manager_id"] == "user_5"

    assert client.delete(f"/api/users/{new_id}").status_code == 200
    assert client.get(f"/api/users/{new_id}").status_code == 404


def test_duplicate_email_is_400(client, login):
    login("admin@paradigm.com")

    resp = client.post("/api/users", json={"name": "Dup", "email": "FIELD@paradigm.com", "role": "hr"})

    assert resp.status_code == 400
    assert resp.get_json() == {"success": False, "message": "A user with this email already exists"}


def test_field_officer_lists(client, login):
    login("ops@paradigm.com")

    officers = client.get("/api/field-officers").get_json()["data"]
    assert [u["id"] for u in officers] == ["user_6", "user_7"]

    nearby = client.get("/api/users/nearby").get_json()["data"]
    assert [u["id"] for u in nearby] == ["user_2", "user_4", "user_5"]


def test_field_officer_cannot_manage_users(client, login):
    login("field@paradigm.com")

    assert client.get("/api/users").status_code == 403
    assert client.get("/api/users/user_5").status_code == 200
