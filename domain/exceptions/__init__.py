from .base import DomainError

from .auth import (
    AuthError,
    AuthenticationMissing,
    AuthenticationFailed,
    AuthorizationDenied,
)

from .ingest import (
    RequestMalformed,
    CsvParseError,
    RepositoryError,
    PersistenceFailure,
)

__all__ = [
    "DomainError",
    "AuthError",
    "AuthenticationMissing",
    "AuthenticationFailed",
    "AuthorizationDenied",
    "RequestMalformed",
    "CsvParseError",
    "RepositoryError",
    "PersistenceFailure",
]
