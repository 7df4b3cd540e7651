"""Domain-level exceptions.

Every failure a catalog operation can report is a subclass of CatalogError so
the HTTP layer can translate them uniformly. Each class carries the status code
and a stable machine-readable code for the response body.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any


class CatalogError(Exception):
    """Base class for all catalog errors."""

    status_code: int = 500
    code: str = "catalog_error"
    default_message: str = "Server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"message": self.message, "code": self.code}


class ValidationError(CatalogError):
    """A payload failed schema validation."""

    status_code = 422
    code = "validation_error"
    default_message = "Validation failed"

    def __init__(
        self, errors: list[dict[str, str]], message: str | None = None
    ) -> None:
        super().__init__(message)
        self.errors = errors

    @classmethod
    def from_pydantic(cls, errors: Iterable[Mapping[str, Any]]) -> ValidationError:
        """Build from pydantic/FastAPI error dicts, one ``{field, message}`` per error."""
        details = []
        for error in errors:
            location = [str(part) for part in error.get("loc", ()) if part != "body"]
            details.append(
                {
                    "field": ".".join(location) or "body",
                    "message": error.get("msg", "Invalid value"),
                }
            )
        return cls(details)

    def to_dict(self) -> dict[str, Any]:
        return {**super().to_dict(), "errors": self.errors}


class Unauthenticated(CatalogError):
    """Missing, malformed, badly signed or expired credentials."""

    status_code = 401
    code = "unauthenticated"
    default_message = "Not authorized"


class Forbidden(CatalogError):
    """Valid credentials naming a missing or inactive identity."""

    status_code = 403
    code = "forbidden"
    default_message = "Forbidden"


class InvalidIdentifier(CatalogError):
    status_code = 400
    code = "invalid_identifier"
    default_message = "Invalid product ID format"


class NotFound(CatalogError):
    status_code = 404
    code = "not_found"
    default_message = "Product not found"


class NoFieldsProvided(CatalogError):
    status_code = 400
    code = "no_fields_provided"
    default_message = "No valid fields provided for update"


class InvalidQuery(CatalogError):
    """Listing parameters (pagination, sort, price range) are unusable."""

    status_code = 400
    code = "invalid_query"
    default_message = "Invalid query parameters"


class Conflict(CatalogError):
    status_code = 409
    code = "conflict"
    default_message = "Resource already exists"


class ConcurrentUpdate(Conflict):
    """The record changed between read and write."""

    code = "concurrent_update"
    default_message = "Product was modified concurrently, retry the update"


class StorageError(CatalogError):
    """The store failed. The message is safe to show; details are only logged."""

    status_code = 500
    code = "storage_error"
    default_message = "Server error"
