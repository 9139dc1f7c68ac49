"""Domain error types shared by the store and the services.

The REST layer maps these onto HTTP responses through ``status_code`` and
``error_code``; the core itself only raises them.
"""

from typing import Dict, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError


class KennelError(Exception):
    """Base class for every error raised by the breeding core."""

    status_code: int = 500
    error_code: str = "INTERNAL_ERROR"

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(KennelError):
    """A referenced dog, litter, puppy or event does not exist for the tenant."""

    status_code = 404
    error_code = "NOT_FOUND"

    def __init__(self, entity: str, entity_id: object, detail: Optional[str] = None):
        super().__init__(detail or f"{entity.capitalize()} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class ValidationError(KennelError):
    """
    A business or structural precondition was violated.

    Carries a field -> message map so several violations can be reported
    together.
    """

    status_code = 400
    error_code = "VALIDATION_ERROR"

    def __init__(self, errors: Mapping[str, str], detail: Optional[str] = None):
        self.errors: Dict[str, str] = dict(errors)
        super().__init__(detail or "; ".join(
            f"{field}: {message}" for field, message in self.errors.items()
        ))

    @classmethod
    def from_pydantic(
        cls,
        exc: PydanticValidationError,
        prefix: str = "",
    ) -> "ValidationError":
        """Convert a pydantic validation error into a field map."""
        errors: Dict[str, str] = {}
        for error in exc.errors():
            parts = [prefix] if prefix else []
            parts.extend(str(part) for part in error["loc"])
            field = ".".join(parts) or "__root__"
            errors.setdefault(field, error["msg"])
        return cls(errors)


class ConflictError(KennelError):
    """A concurrent write was detected; the caller may retry."""

    status_code = 409
    error_code = "CONFLICT"


class StoreFailure(KennelError):
    """Unclassified storage failure (connection, constraint violation)."""

    status_code = 500
    error_code = "INTERNAL_ERROR"


def to_error_response(exc: KennelError) -> dict:
    """
    Build the JSON body the REST layer returns for a domain error.

    Args:
        exc: Error raised by the core

    Returns:
        Dict with ``detail`` and ``error_code`` (plus ``errors`` for
        validation failures)
    """
    body = {"detail": exc.detail, "error_code": exc.error_code}
    if isinstance(exc, ValidationError):
        body["errors"] = exc.errors
    return body
