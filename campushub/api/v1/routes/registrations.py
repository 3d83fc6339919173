"""
Registration routes.

Any signed-in user may register themselves; reviewing and deciding
registrations is limited to teachers and committee members.
"""
from fastapi import APIRouter, Depends
from typing import List
from campushub.schemas import RegistrationCreate, RegistrationOut, RegistrationWithEvent
from campushub.services.registration_service import RegistrationService
from campushub.auth import get_current_user, get_gateway, role_required
from campushub.db.gateway import EntityStoreGateway
from campushub.db.models import RoleEnum
from campushub.api.responses import unwrap

router = APIRouter(prefix="/registrations", tags=["registrations"])

reviewer = role_required(RoleEnum.teacher, RoleEnum.committee)


def get_registration_service(gateway: EntityStoreGateway = Depends(get_gateway)) -> RegistrationService:
    return RegistrationService(gateway)


@router.post("", response_model=RegistrationOut)
async def register_for_event(
    payload: RegistrationCreate,
    user=Depends(get_current_user),
    registration_service: RegistrationService = Depends(get_registration_service)
):
    return unwrap(await registration_service.register(user["id"], payload.event_id))


@router.get("/me", response_model=List[RegistrationWithEvent])
async def my_registrations(
    user=Depends(get_current_user),
    registration_service: RegistrationService = Depends(get_registration_service)
):
    return await registration_service.registrations_for_user(user["id"])


@router.get("/event/{event_id}", response_model=List[RegistrationOut])
async def event_registrations(
    event_id: str,
    user=Depends(reviewer),
    registration_service: RegistrationService = Depends(get_registration_service)
):
    return await registration_service.registrations_for_event(event_id)


@router.post("/{registration_id}/approve", response_model=RegistrationOut)
async def approve_registration(
    registration_id: str,
    user=Depends(reviewer),
    registration_service: RegistrationService = Depends(get_registration_service)
):
    result = await registration_service.approve(registration_id)
    return unwrap(result, not_found="Registration not found")


@router.post("/{registration_id}/reject", response_model=RegistrationOut)
async def reject_registration(
    registration_id: str,
    user=Depends(reviewer),
    registration_service: RegistrationService = Depends(get_registration_service)
):
    result = await registration_service.reject(registration_id)
    return unwrap(result, not_found="Registration not found")
