from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID


class IdentityPort(ABC):
    @abstractmethod
    def resolve_user_id(self, access_token: str) -> Optional[UUID]:
        """Return the authenticated user id, or None if the token is not valid."""
