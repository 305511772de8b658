"""Tests des services"""

from cellarbook.models.user import User
from cellarbook.services.user_service import UserService


def test_ensure_admin_is_idempotent(db):
    service = UserService(db)

    first = service.ensure_admin("admin@example.com", "adminpass123", "Admin")
    second = service.ensure_admin("admin@example.com", "adminpass123", "Admin")

    assert first.id == second.id
    assert first.is_admin is True
    assert db.query(User).filter(User.email == "admin@example.com").count() == 1


def test_create_user_duplicate_email_returns_none(db, test_user):
    service = UserService(db)
    assert service.create_user(email=test_user.email, password="whatever123") is None


def test_authenticate(db, test_user):
    service = UserService(db)
    assert service.authenticate("test@example.com", "testpass123").id == test_user.id
    assert service.authenticate("test@example.com", "nope") is None


def test_ensure_admin_returns_existing_after_concurrent_insert(db, test_user, monkeypatch):
    service = UserService(db)
    real_lookup = service.get_user_by_email
    calls = []

    def lookup(email):
        # le premier appel ne voit pas encore l'utilisateur créé ailleurs
        calls.append(email)
        return None if len(calls) == 1 else real_lookup(email)

    monkeypatch.setattr(service, "get_user_by_email", lookup)

    admin = service.ensure_admin(test_user.email, "adminpass123")

    assert admin is not None
    assert admin.id == test_user.id
    assert db.query(User).filter(User.email == test_user.email).count() == 1
