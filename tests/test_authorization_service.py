from __future__ import annotations

from uuid import uuid4

import pytest

from domain.exceptions import AuthenticationFailed, AuthenticationMissing, AuthorizationDenied
from domain.models.identity import Profile
from domain.services.authorization_service import AuthorizationService
from tests.fakes import InMemoryRepository, StaticIdentity


def _service(repo: InMemoryRepository, **tokens) -> AuthorizationService:
    return AuthorizationService(identity=StaticIdentity(tokens), repository=repo)


@pytest.mark.parametrize("token", [None, ""])
def test_missing_token(repo: InMemoryRepository, token) -> None:
    with pytest.raises(AuthenticationMissing):
        _service(repo).require_admin(token)


def test_unknown_token(repo: InMemoryRepository) -> None:
    with pytest.raises(AuthenticationFailed):
        _service(repo).require_admin("forged")


@pytest.mark.parametrize("role", ["judge", None, "Admin", "admin "])
def test_non_admin_roles_are_denied(repo: InMemoryRepository, role) -> None:
    user_id = repo.add_profile(role)

    with pytest.raises(AuthorizationDenied) as excinfo:
        _service(repo, token=user_id).require_admin("token")

    assert excinfo.value.role == role
    assert str(excinfo.value) == "Only admins can import data"


def test_user_without_profile_is_pending(repo: InMemoryRepository) -> None:
    service = _service(repo, token=uuid4())

    assert service.authenticate("token").role is None
    with pytest.raises(AuthorizationDenied):
        service.require_admin("token")


def test_admin_is_allowed(repo: InMemoryRepository) -> None:
    user_id = repo.add_profile("admin")

    profile = _service(repo, token=user_id).require_admin("token")

    assert profile.id == user_id
    assert profile.is_admin


def test_decision_is_not_cached(repo: InMemoryRepository) -> None:
    user_id = repo.add_profile("admin")
    service = _service(repo, token=user_id)
    service.require_admin("token")

    repo.profiles[user_id] = Profile(id=user_id, role="judge")

    with pytest.raises(AuthorizationDenied):
        service.require_admin("token")
