from __future__ import annotations

import pytest

from hr_portal.core.enums import Role
from hr_portal.core.exceptions import NotFoundError, ValidationError
from hr_portal.store.mock_database import MockDatabase
from hr_portal.users.memory_user_repository import InMemoryUserRepository
from hr_portal.users.model import User
from hr_portal.users.service import UserService


@pytest.fixture
def service():
    repo = InMemoryUserRepository(MockDatabase())
    repo.add(User(id="m1", name="Manager", email="manager@example.com", role=Role.SITE_MANAGER))
    repo.add(User(id="f1", name="Officer", email="officer@example.com", role=Role.FIELD_OFFICER, reporting_manager_id="m1"))
    return UserService(repo)


def test_create_user(service):
    user = service.create_user(name=" Priya ", email="priya@example.com", role="hr", reporting_manager_id="m1")

    assert user.id.startswith("user")
    assert user.name == "Priya"
    assert user.role == Role.HR
    assert service.get_user(user.id) == user


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"name": ""}, "Name is required"),
        ({"email": "not-an-email"}, "not a valid email"),
        ({"role": "ceo"}, "Unknown role"),
        ({"email": "OFFICER@example.com"}, "already exists"),
        ({"reporting_manager_id": "ghost"}, "Reporting manager not found"),
    ],
)
def test_create_user_validation(service, kwargs, message):
    params = {"name": "New", "email": "new@example.com", "role": "field_officer", **kwargs}
    with pytest.raises(ValidationError, match=message):
        service.create_user(**params)


def test_update_user(service):
    updated = service.update_user("f1", {"phone": "9000000000", "role": "site_manager"})

    assert updated.phone == "9000000000"
    assert updated.role == Role.SITE_MANAGER


def test_update_user_rules(service):
    with pytest.raises(ValidationError, match="already exists"):
        service.update_user("f1", {"email": "manager@example.com"})
    with pytest.raises(ValidationError, match="Cannot update fields"):
        service.update_user("f1", {"password_hash": "x"})
    with pytest.raises(ValidationError, match="report to themselves"):
        service.update_user("f1", {"reporting_manager_id": "f1"})
    with pytest.raises(NotFoundError):
        service.update_user("ghost", {"name": "x"})

    # Keeping one's own email is fine.
    assert service.update_user("f1", {"email": "officer@example.com"}).email == "officer@example.com"


def test_users_with_manager_names(service):
    rows = {r["id"]: r for r in service.get_users_with_managers()}

    assert rows["f1"]["manager_name"] == "Manager"
    assert rows["m1"]["manager_name"] is None
    assert "password_hash" not in rows["f1"]


def test_role_lists(service):
    assert [u.id for u in service.get_field_officers()] == ["f1"]
    assert [u.id for u in service.get_nearby_users()] == ["m1"]
    assert service.get_first_with_role(Role.SITE_MANAGER).id == "m1"
    assert service.get_first_with_role(Role.ADMIN) is None


def test_reporting_manager_and_delete(service):
    service.update_reporting_manager("f1", "")
    assert service.get_user("f1").reporting_manager_id is None
    with pytest.raises(ValidationError):
        service.update_reporting_manager("m1", "m1")
    # Unknown users are ignored.
    service.update_reporting_manager("ghost", "m1")

    service.delete_user("f1")
    assert service.get_user("f1") is None
    service.delete_user("f1")
