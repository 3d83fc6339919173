from typing import List, Optional

from campushub.core.errors import Result
from campushub.core.logging import logger
from campushub.db.gateway import EntityStoreGateway, Row
from campushub.schemas import EventCreate


class EventService:
    def __init__(self, gateway: EntityStoreGateway):
        self.gateway = gateway

    async def create_event(self, payload: EventCreate, organizer_id: str) -> Result:
        result = await self.gateway.insert("events", {**payload.model_dump(), "organizer_id": organizer_id})
        if result.success:
            logger.info(f"Event {result.data['id']} created by {organizer_id}")
        return result

    async def get_event(self, event_id: str) -> Optional[Row]:
        result = await self.gateway.fetch_one("events", {"id": event_id})
        return result.data if result.success else None

    async def get_events(self) -> List[Row]:
        result = await self.gateway.fetch_all("events")
        return result.data if result.success else []
