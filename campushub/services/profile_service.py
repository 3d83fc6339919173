"""
Role-to-profile resolution.

Each role owns exactly one profile table. Reads trust the role tag supplied by
the caller, so passing the wrong role reads the wrong table and yields
``None``. Writes that create a row check the tag against the role stored on
the user, so a user never owns a profile outside their own role's table.
"""
from typing import Any, Dict, Mapping, Optional

from campushub.core import errors
from campushub.core.errors import Result
from campushub.core.logging import for_user, logger
from campushub.db.gateway import EntityStoreGateway, Row
from campushub.db.models import RoleEnum

PROFILE_TABLES: Dict[RoleEnum, str] = {
    RoleEnum.student: "student_profiles",
    RoleEnum.teacher: "teacher_profiles",
    RoleEnum.committee: "committee_profiles",
}


def parse_role(role: Any) -> Optional[RoleEnum]:
    """Return the matching ``RoleEnum`` member, or None for an unknown tag."""
    try:
        return RoleEnum(role)
    except ValueError:
        return None


def profile_table(role: Any) -> Optional[str]:
    parsed = parse_role(role)
    return PROFILE_TABLES[parsed] if parsed is not None else None


class ProfileService:
    def __init__(self, gateway: EntityStoreGateway):
        self.gateway = gateway

    async def resolve_profile(self, user_id: str, role: Any) -> Optional[Row]:
        """
        Load the profile row for ``user_id`` from the table owned by ``role``.

        Returns None when the role is unknown, when no row exists, or when the
        store lookup fails (logged by the gateway).
        """
        table = profile_table(role)
        if table is None:
            logger.debug(f"No profile table for role {role!r}")
            return None

        result = await self.gateway.fetch_one(table, {"id": user_id})
        if not result.success:
            return None
        return result.data

    async def update_profile(self, user_id: str, role: Any, fields: Mapping[str, Any]) -> Result:
        """
        Partially update an existing profile row.

        Fails with ``PGRST116`` when the user has no row in the role's table;
        use ``create_profile`` for that case.
        """
        table = profile_table(role)
        if table is None:
            return Result.fail(errors.INVALID_ROLE, f"Unknown role: {role!r}")

        values = {k: v for k, v in fields.items() if k != "id"}
        if not values:
            return await self.gateway.fetch_one(table, {"id": user_id})

        result = await self.gateway.update(table, {"id": user_id}, values)
        if not result.success:
            return result
        if not result.data:
            return Result.fail(errors.NO_ROWS, f"No {table} row for user {user_id}")
        return Result.ok(result.data[0])

    async def create_profile(self, user_id: str, role: Any, fields: Optional[Mapping[str, Any]] = None) -> Result:
        """
        Insert the profile row for ``user_id`` in the table owned by ``role``.

        ``role`` must be the role stored on the user row; a profile in another
        role's table fails with ``invalid_role``, and a missing user with
        ``PGRST116``.
        """
        parsed = parse_role(role)
        if parsed is None:
            return Result.fail(errors.INVALID_ROLE, f"Unknown role: {role!r}")

        user = await self.gateway.fetch_one("users", {"id": user_id})
        if not user.success:
            return user
        if parse_role(user.data["role"]) != parsed:
            return Result.fail(
                errors.INVALID_ROLE,
                f"User {user_id} is a {user.data['role']}, not a {parsed.value}",
            )

        row = {k: v for k, v in (fields or {}).items() if k != "id"}
        row["id"] = user_id
        result = await self.gateway.insert(PROFILE_TABLES[parsed], row)
        if result.success:
            for_user(user_id).info(f"{parsed.value} profile created")
        return result

    async def save_profile(self, user_id: str, role: Any, fields: Mapping[str, Any]) -> Result:
        """Update the profile, creating it first if the user has none."""
        result = await self.update_profile(user_id, role, fields)
        if result.not_found:
            for_user(user_id).info(f"No {role} profile yet, creating one")
            return await self.create_profile(user_id, role, fields)
        return result
