"""
Domain exceptions for the Ekram prices service.

Every error raised by the core or application layer derives from EkramError
so the API boundary can turn it into a JSON body with a stable code.
"""

from typing import Any


class EkramError(Exception):
    """Base exception for all Ekram errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Request Exceptions
class AuthError(EkramError):
    """Caller supplied a missing or mismatched API key."""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, code="UNAUTHORIZED")


class ValidationError(EkramError):
    """Input validation failed."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            message,
            code="VALIDATION_ERROR",
            details={
                "field": field,
                "value": str(value)[:100] if value is not None else None,
            },
        )
        self.field = field


class UnknownMaterialError(ValidationError):
    """Material key is neither built-in nor a registered custom material."""

    def __init__(self, material: str, valid: list[str]):
        super().__init__(field="material", message="unknown material", value=material)
        self.code = "UNKNOWN_MATERIAL"
        self.valid = list(valid)
        self.details["valid"] = self.valid


# Storage Exceptions
class StorageError(EkramError):
    """Base exception for blob store operations."""

    pass


class DocumentConflictError(StorageError):
    """Conditional write lost against a concurrent writer."""

    def __init__(self, key: str, expected: int, actual: int):
        super().__init__(
            f"Version conflict on '{key}': expected {expected}, found {actual}",
            code="DOCUMENT_CONFLICT",
            details={"key": key, "expected": expected, "actual": actual},
        )


class StoreUnavailableError(StorageError):
    """Blob store could not be reached or answered with an error."""

    def __init__(self, backend: str, reason: str | None = None):
        super().__init__(
            f"Blob store unavailable: {backend}" + (f" - {reason}" if reason else ""),
            code="STORE_UNAVAILABLE",
            details={"backend": backend, "reason": reason},
        )


class MalformedDocumentError(StorageError):
    """Stored document does not have the expected JSON shape."""

    def __init__(self, key: str, expected: str):
        super().__init__(
            f"Document '{key}' is not a JSON {expected}",
            code="MALFORMED_DOCUMENT",
            details={"key": key, "expected": expected},
        )


class ConfigurationError(EkramError):
    """Configuration error."""

    pass
