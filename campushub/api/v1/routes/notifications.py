from fastapi import APIRouter, Depends
from typing import List
from campushub.schemas import NotificationCreate, NotificationOut
from campushub.services.notification_service import NotificationService
from campushub.auth import get_current_user, get_gateway, role_required
from campushub.db.gateway import EntityStoreGateway
from campushub.db.models import RoleEnum
from campushub.api.responses import unwrap

router = APIRouter(prefix="/notifications", tags=["notifications"])


def get_notification_service(gateway: EntityStoreGateway = Depends(get_gateway)) -> NotificationService:
    return NotificationService(gateway)


@router.get("/me", response_model=List[NotificationOut])
async def my_notifications(
    user=Depends(get_current_user),
    notification_service: NotificationService = Depends(get_notification_service)
):
    return await notification_service.notifications_for_user(user["id"])


@router.post("", response_model=NotificationOut)
async def send_notification(
    payload: NotificationCreate,
    user=Depends(role_required(RoleEnum.teacher, RoleEnum.committee)),
    notification_service: NotificationService = Depends(get_notification_service)
):
    result = await notification_service.notify(payload.user_id, payload.title, payload.message)
    return unwrap(result)


@router.post("/{notification_id}/read", response_model=NotificationOut)
async def mark_notification_read(
    notification_id: str,
    user=Depends(get_current_user),
    notification_service: NotificationService = Depends(get_notification_service)
):
    result = await notification_service.mark_read(notification_id, user["id"])
    return unwrap(result, not_found="Notification not found")
