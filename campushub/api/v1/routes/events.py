from fastapi import APIRouter, Depends, HTTPException
from typing import List
from campushub.schemas import EventCreate, EventOut
from campushub.services.event_service import EventService
from campushub.auth import get_gateway, role_required
from campushub.db.gateway import EntityStoreGateway
from campushub.db.models import RoleEnum
from campushub.api.responses import unwrap

router = APIRouter(prefix="/events", tags=["events"])


def get_event_service(gateway: EntityStoreGateway = Depends(get_gateway)) -> EventService:
    return EventService(gateway)


@router.post("", response_model=EventOut)
async def create_event_endpoint(
    payload: EventCreate,
    user=Depends(role_required(RoleEnum.teacher, RoleEnum.committee)),
    event_service: EventService = Depends(get_event_service)
):
    return unwrap(await event_service.create_event(payload, user["id"]))


@router.get("", response_model=List[EventOut])
async def list_events(event_service: EventService = Depends(get_event_service)):
    return await event_service.get_events()


@router.get("/{event_id}", response_model=EventOut)
async def get_event_detail(
    event_id: str,
    event_service: EventService = Depends(get_event_service)
):
    ev = await event_service.get_event(event_id)
    if not ev:
        raise HTTPException(status_code=404, detail="Event not found")
    return ev
