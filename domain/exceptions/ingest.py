from __future__ import annotations

from typing import Any, Dict, List, Optional

from domain.exceptions.base import DomainError


class RequestMalformed(DomainError):
    def __init__(self, message: str = "No CSV file provided"):
        super().__init__(message)


class CsvParseError(DomainError):
    MAX_DIAGNOSTICS = 5

    def __init__(self, diagnostics: List[Dict[str, Any]]):
        self.diagnostics = diagnostics[: self.MAX_DIAGNOSTICS]
        super().__init__("CSV parsing errors")


class RepositoryError(DomainError):
    """Raised by repository adapters when the underlying storage fails."""

    def __init__(self, operation: str, details: Optional[str] = None):
        self.operation = operation
        self.details = details
        msg = f"Storage operation failed ({operation})"
        if details:
            msg += f": {details}"
        super().__init__(msg)


class PersistenceFailure(DomainError):
    MESSAGES = {
        "participants": "Failed to import participants",
        "submissions": "Failed to import submissions",
        "id_lookup": "Failed to resolve imported ids",
        "links": "Failed to link participants to submissions",
    }

    def __init__(self, phase: str, details: Optional[str] = None):
        self.phase = phase
        self.details = details
        super().__init__(self.MESSAGES.get(phase, f"Failed during {phase}"))
