from fastapi import APIRouter, Depends
from typing import List
from campushub.schemas import AttendanceMark, AttendanceOut
from campushub.services.registration_service import RegistrationService
from campushub.auth import get_gateway, role_required
from campushub.db.gateway import EntityStoreGateway
from campushub.db.models import RoleEnum
from campushub.api.responses import unwrap

router = APIRouter(prefix="/attendance", tags=["attendance"])

reviewer = role_required(RoleEnum.teacher, RoleEnum.committee)


def get_registration_service(gateway: EntityStoreGateway = Depends(get_gateway)) -> RegistrationService:
    return RegistrationService(gateway)


@router.put("", response_model=AttendanceOut)
async def mark_attendance(
    payload: AttendanceMark,
    user=Depends(reviewer),
    registration_service: RegistrationService = Depends(get_registration_service)
):
    """Mark a user present or absent; does not depend on the registration state."""
    result = await registration_service.mark_attendance(payload.user_id, payload.event_id, payload.status)
    return unwrap(result)


@router.get("/event/{event_id}", response_model=List[AttendanceOut])
async def event_attendance(
    event_id: str,
    user=Depends(reviewer),
    registration_service: RegistrationService = Depends(get_registration_service)
):
    return await registration_service.attendance_for_event(event_id)
