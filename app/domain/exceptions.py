"""Domain exceptions for the EduBridge search service.

Search itself never raises to its callers (it degrades to empty results);
these exceptions cover input validation and an unconfigured document store.
The presentation layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class EduBridgeException(Exception):
    """Base exception for all application errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON error body used by the exception handlers."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(EduBridgeException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class StoreUnavailableException(EduBridgeException):
    """Raised when the document store client is not configured or not initialized."""

    def __init__(self, store: str = "firestore") -> None:
        super().__init__(
            f"Document store is not available: {store}",
            "STORE_UNAVAILABLE",
            {"store": store},
        )
