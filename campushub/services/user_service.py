from typing import Any, List, Mapping, Optional

from campushub.core import errors
from campushub.core.errors import Result
from campushub.db.gateway import EntityStoreGateway, Row

IMMUTABLE_USER_FIELDS = frozenset({"id", "email", "role", "hashed_password"})


def public_user(row: Optional[Row]) -> Optional[Row]:
    """Strip the password hash from a user row."""
    if row is None:
        return None
    return {k: v for k, v in row.items() if k != "hashed_password"}


class UserService:
    def __init__(self, gateway: EntityStoreGateway):
        self.gateway = gateway

    async def get_all_users(self) -> List[Row]:
        result = await self.gateway.fetch_all("users")
        return [public_user(row) for row in result.data] if result.success else []

    async def get_user_by_id(self, user_id: str) -> Optional[Row]:
        result = await self.gateway.fetch_one("users", {"id": user_id})
        return result.data if result.success else None

    async def get_user_by_email(self, email: str) -> Optional[Row]:
        """Full user row, password hash included; callers strip it with ``public_user``."""
        result = await self.gateway.fetch_one("users", {"email": email})
        return result.data if result.success else None

    async def update_user_profile(self, user_id: str, updates: Mapping[str, Any]) -> Result:
        """
        Update the base user record.

        Identity columns and the role cannot be changed here.
        """
        locked = sorted(IMMUTABLE_USER_FIELDS.intersection(updates))
        if locked:
            return Result.fail(errors.IMMUTABLE_FIELD, f"Cannot update field(s): {', '.join(locked)}")
        if not updates:
            result = await self.gateway.fetch_one("users", {"id": user_id})
            return Result.ok(public_user(result.data)) if result.success else result

        result = await self.gateway.update("users", {"id": user_id}, dict(updates))
        if not result.success:
            return result
        if not result.data:
            return Result.fail(errors.NO_ROWS, f"No user {user_id}")
        return Result.ok(public_user(result.data[0]))
