from typing import Optional

from domain.exceptions.base import DomainError


class AuthError(DomainError):
    pass


class AuthenticationMissing(AuthError):
    def __init__(self):
        super().__init__("Missing authorization")


class AuthenticationFailed(AuthError):
    def __init__(self):
        super().__init__("Unauthorized")


class AuthorizationDenied(AuthError):
    def __init__(self, role: Optional[str] = None, action: str = "import data"):
        self.role = role
        super().__init__(f"Only admins can {action}")
