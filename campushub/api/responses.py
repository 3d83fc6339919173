"""Translation of service ``Result`` values into HTTP responses."""
from fastapi import HTTPException

from campushub.core import errors
from campushub.core.errors import Result

STATUS_BY_CODE = {
    errors.NO_ROWS: 404,
    errors.DUPLICATE_REGISTRATION: 409,
    errors.INVALID_TRANSITION: 409,
    errors.UNIQUE_VIOLATION: 409,
    errors.IMMUTABLE_FIELD: 400,
    errors.INVALID_ROLE: 400,
    errors.UNKNOWN_COLUMN: 400,
    errors.FOREIGN_KEY_VIOLATION: 400,
    errors.NOT_NULL_VIOLATION: 400,
    errors.CHECK_VIOLATION: 400,
}


def unwrap(result: Result, not_found: str = "Not found"):
    """Return ``result.data`` or raise the matching ``HTTPException``."""
    if result.success:
        return result.data
    code = result.error.code
    status_code = STATUS_BY_CODE.get(code, 500)
    if status_code == 404:
        detail = not_found
    elif status_code == 500:
        detail = "Store failure"
    else:
        detail = result.error.message
    raise HTTPException(status_code=status_code, detail={"code": code, "message": detail})
