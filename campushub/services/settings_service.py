from typing import Any, Dict

from campushub.core.errors import Result
from campushub.core.logging import for_user
from campushub.db.gateway import EntityStoreGateway


class SettingsService:
    """
    Per-user preferences.

    ``set_settings`` is a single atomic upsert on the unique ``user_id`` column,
    so two concurrent writers for the same user cannot create two rows; the
    later write wins.
    """

    def __init__(self, gateway: EntityStoreGateway):
        self.gateway = gateway

    async def get_settings(self, user_id: str) -> Result:
        """Succeeds with the settings row, or with None if the user has none yet."""
        result = await self.gateway.fetch_one("settings", {"user_id": user_id})
        if result.not_found:
            return Result.ok(None)
        return result

    async def set_settings(self, user_id: str, preferences: Dict[str, Any]) -> Result:
        # Replaces the whole mapping; keys missing from ``preferences`` are dropped
        result = await self.gateway.upsert(
            "settings",
            {"user_id": user_id, "preferences": dict(preferences)},
            on_conflict=("user_id",),
        )
        if result.success:
            for_user(user_id).debug(f"Settings saved ({len(preferences)} keys)")
        return result
