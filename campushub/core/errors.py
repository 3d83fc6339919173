"""
Failure values returned by the store gateway and the services built on it.

Nothing in the service layer raises for an expected failure; every operation
hands back a ``Result`` and the caller checks ``success`` before using ``data``.
"""
from dataclasses import dataclass
from typing import Any, Optional

# Store-level codes (PostgREST / PostgreSQL compatible)
NO_ROWS = "PGRST116"
UNKNOWN_COLUMN = "PGRST204"
UNKNOWN_TABLE = "PGRST205"
UNIQUE_VIOLATION = "23505"
FOREIGN_KEY_VIOLATION = "23503"
NOT_NULL_VIOLATION = "23502"
CHECK_VIOLATION = "23514"
STORE_FAILURE = "store_failure"

# Domain-level codes
DUPLICATE_REGISTRATION = "duplicate_registration"
INVALID_TRANSITION = "invalid_transition"
INVALID_ROLE = "invalid_role"
IMMUTABLE_FIELD = "immutable_field"


@dataclass(frozen=True)
class StoreError:
    code: str
    message: str

    @property
    def is_not_found(self) -> bool:
        return self.code == NO_ROWS


@dataclass(frozen=True)
class Result:
    """Outcome of a store or workflow operation."""
    success: bool
    data: Any = None
    error: Optional[StoreError] = None

    @classmethod
    def ok(cls, data: Any = None) -> "Result":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, code: str, message: str) -> "Result":
        return cls(success=False, error=StoreError(code=code, message=message))

    @property
    def not_found(self) -> bool:
        return not self.success and self.error is not None and self.error.is_not_found
