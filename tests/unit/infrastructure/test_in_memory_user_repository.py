"""
Tests for InMemoryUserRepository.

Validates the guarantees shared with the PostgreSQL adapter:
  - sequential ids, never reused
  - username/email uniqueness
  - timestamp stamping (insert equal, update strictly advancing)
  - stable id ordering and case-insensitive name search
"""

from dataclasses import replace
from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from user_accounts.crosscutting.exceptions import UniqueConstraintError
from user_accounts.domain.entities import User, UserRole
from user_accounts.infrastructure.repositories import InMemoryUserRepository

pytestmark = pytest.mark.unit


def _user(username: str, email: str | None = None, **kwargs) -> User:
    return User(
        username=username,
        email=email or f"{username}@x.io",
        password_hash="h",
        **kwargs,
    )


@pytest.fixture
def repo() -> InMemoryUserRepository:
    return InMemoryUserRepository()


def test_insert_assigns_ids_and_timestamps(repo):
    first = repo.insert(_user("alice"))
    second = repo.insert(_user("bob"))

    assert (first.id, second.id) == (1, 2)
    assert first.created_at is not None
    assert first.created_at == first.updated_at


def test_ids_are_not_reused_after_delete(repo):
    first = repo.insert(_user("alice"))
    repo.delete_by_id(first.id)

    assert repo.insert(_user("bob")).id == 2


@pytest.mark.parametrize(
    "candidate, field",
    [
        (_user("alice", "other@x.io"), "username"),
        (_user("other", "alice@x.io"), "email"),
    ],
)
def test_insert_enforces_uniqueness(repo, candidate, field):
    repo.insert(_user("alice"))

    with pytest.raises(UniqueConstraintError) as exc_info:
        repo.insert(candidate)

    assert exc_info.value.field == field
    assert len(repo.find_all()) == 1


def test_update_enforces_uniqueness_against_others(repo):
    repo.insert(_user("alice"))
    bob = repo.insert(_user("bob"))

    with pytest.raises(UniqueConstraintError):
        repo.update(replace(bob, email="alice@x.io"))

    assert repo.find_by_id(bob.id).email == "bob@x.io"


def test_update_advances_updated_at_even_on_frozen_clock(repo):
    frozen = datetime(2030, 1, 1, tzinfo=timezone.utc)
    with patch.object(InMemoryUserRepository, "_now", return_value=frozen):
        created = repo.insert(_user("alice"))
        once = repo.update(replace(created, first_name="A"))
        twice = repo.update(replace(once, first_name="B"))

    assert created.created_at == frozen
    assert once.updated_at > created.updated_at
    assert twice.updated_at > once.updated_at
    assert twice.created_at == created.created_at


def test_update_keeps_stored_created_at(repo):
    created = repo.insert(_user("alice"))

    updated = repo.update(
        replace(created, created_at=datetime(2000, 1, 1, tzinfo=timezone.utc))
    )

    assert updated.created_at == created.created_at


def test_update_missing_returns_none(repo):
    assert repo.update(_user("ghost", id=99)) is None


def test_update_requires_id(repo):
    with pytest.raises(ValueError):
        repo.update(_user("alice"))


def test_lookups(repo):
    alice = repo.insert(_user("alice"))

    assert repo.find_by_id(alice.id) == alice
    assert repo.find_by_username("alice") == alice
    assert repo.find_by_username("Alice") is None
    assert repo.find_by_email("alice@x.io") == alice
    assert repo.find_by_username_or_email("alice") == alice
    assert repo.find_by_username_or_email("alice@x.io") == alice
    assert repo.exists_by_id(alice.id)
    assert repo.exists_by_username("alice")
    assert repo.exists_by_email("alice@x.io")
    assert not repo.exists_by_email("nobody@x.io")
    assert repo.delete_by_id(alice.id) is True
    assert repo.delete_by_id(alice.id) is False


def test_filters_and_counts(repo):
    a = repo.insert(_user("alice", first_name="Alicia", last_name="Smith"))
    b = repo.insert(_user("bob", first_name="Bob", last_name="SMITHERS", is_enabled=False))
    c = repo.insert(_user("carl", role=UserRole.ADMIN))

    assert [u.id for u in repo.find_all()] == [a.id, b.id, c.id]
    assert [u.id for u in repo.find_by_role(UserRole.ADMIN)] == [c.id]
    assert [u.id for u in repo.find_enabled()] == [a.id, c.id]
    assert [u.id for u in repo.find_by_first_name_containing("LIC")] == [a.id]
    assert [u.id for u in repo.find_by_last_name_containing("smith")] == [a.id, b.id]
    assert repo.count_by_role(UserRole.USER) == 2
    assert repo.count_enabled() == 2
    assert repo.ping() is True
