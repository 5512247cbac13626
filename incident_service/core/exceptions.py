"""Error types raised by the incident service."""

from typing import Dict, Optional


class IncidentServiceError(Exception):
    """Base exception for incident service errors."""
    pass


class MalformedRequest(IncidentServiceError):
    """Raised when a request body cannot be parsed into an incident."""
    pass


class ValidationFailed(IncidentServiceError):
    """Raised when a candidate incident violates its field constraints."""

    def __init__(self, errors: Dict[str, str]):
        super().__init__(f"Validation failed for: {', '.join(sorted(errors))}")
        self.errors = errors


class ClassificationFailed(IncidentServiceError):
    """Raised when the classification endpoint fails or returns nothing."""
    pass


class PersistenceError(IncidentServiceError):
    """Raised when the incident store cannot read or write."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        if cause is not None:
            message = f"{message}: {type(cause).__name__}"
        super().__init__(message)
        self.cause = cause
