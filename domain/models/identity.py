from dataclasses import dataclass
from typing import Optional
from uuid import UUID

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Participant:
    email: str
    first_name: str = ""
    last_name: str = ""
    id: Optional[UUID] = None


@dataclass(frozen=True)
class Profile:
    """Dashboard account. role is 'admin', 'judge' or None while pending."""
    id: UUID
    role: Optional[str] = None

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE
