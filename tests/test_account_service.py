import os
import sys

import pytest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from account_service import AccountService
from auth import Identity, TokenService
from db import Database, ExerciseCatalogRepository
from errors import InvariantViolation, NotFoundError
from migrate import seed_catalog
from models import AdminUserUpdate

BENCH = 2


@pytest.fixture
def accounts(tmp_path):
    db = Database(str(tmp_path / "accounts.sqlite"))
    seed_catalog(ExerciseCatalogRepository(db))
    service = AccountService(db, TokenService("test-secret"))
    service.ensure_admin("admin@local", "Admin", "admin123")
    return service


def identity_for(service, email):
    user = service.users.fetch_by_email(email)
    return Identity(user["id"], user["email"], user["role"])


def test_sole_admin_cannot_be_demoted(accounts):
    admin = identity_for(accounts, "admin@local")
    with pytest.raises(InvariantViolation, match="Cannot demote the last admin"):
        accounts.admin_update(admin.id, AdminUserUpdate(role="USER"))
    assert accounts.users.admin_ids() == [admin.id]


def test_admin_cannot_delete_themselves(accounts):
    admin = identity_for(accounts, "admin@local")
    with pytest.raises(InvariantViolation, match="Admins cannot delete themselves"):
        accounts.delete_user(admin, admin.id)


def test_last_admin_survives_until_another_is_promoted(accounts):
    admin = identity_for(accounts, "admin@local")
    accounts.register("second@example.com", "Second", "secret1")
    second = identity_for(accounts, "second@example.com")

    with pytest.raises(InvariantViolation, match="Cannot delete the last admin"):
        accounts.delete_user(second, admin.id)
    assert accounts.users.fetch_detail(admin.id)["role"] == "ADMIN"

    assert accounts.promote(second.id)["role"] == "ADMIN"
    accounts.delete_user(identity_for(accounts, "second@example.com"), admin.id)
    with pytest.raises(NotFoundError):
        accounts.users.fetch_detail(admin.id)
    assert accounts.users.admin_ids() == [second.id]


def test_delete_user_removes_workouts_and_templates(accounts):
    admin = identity_for(accounts, "admin@local")
    accounts.register("lifter@example.com", "Lifter", "secret1")
    lifter = identity_for(accounts, "lifter@example.com")
    accounts.workouts.create(
        lifter,
        {
            "date": "2024-01-01",
            "items": [
                {"itemType": "exercise", "exerciseId": BENCH, "sets": [{"reps": 5, "weight": 100}]}
            ],
        },
    )
    accounts.templates.create(lifter.id, "Push", None, "[]")

    accounts.delete_user(admin, lifter.id)
    assert accounts.users.count("workouts") == 0
    assert accounts.users.count("templates") == 0
    assert accounts.users.count("sets") == 0
    with pytest.raises(NotFoundError):
        accounts.delete_user(admin, lifter.id)
