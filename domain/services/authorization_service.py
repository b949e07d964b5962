import logging
from typing import Optional

from domain.exceptions.auth import (
    AuthenticationFailed,
    AuthenticationMissing,
    AuthorizationDenied,
)
from domain.models.identity import Profile
from domain.ports.identity import IdentityPort
from domain.ports.repository import RepositoryPort


class AuthorizationService:
    """Resolves a bearer token to a dashboard profile. Nothing is cached."""

    def __init__(self, identity: IdentityPort, repository: RepositoryPort):
        self.identity = identity
        self.repository = repository
        self.logger = logging.getLogger(__name__)

    def authenticate(self, access_token: Optional[str]) -> Profile:
        if not access_token:
            raise AuthenticationMissing()

        user_id = self.identity.resolve_user_id(access_token)
        if user_id is None:
            raise AuthenticationFailed()

        profile = self.repository.get_profile(user_id)
        if profile is None:
            # signed up but no profile row yet: treated as pending
            return Profile(id=user_id, role=None)
        return profile

    def require_admin(self, access_token: Optional[str], action: str = "import data") -> Profile:
        profile = self.authenticate(access_token)
        if not profile.is_admin:
            self.logger.warning(f"User {profile.id} with role {profile.role!r} denied: {action}")
            raise AuthorizationDenied(profile.role, action)
        return profile
