from fastapi import APIRouter, Depends
from typing import Optional
from campushub.schemas import SettingsIn, SettingsOut
from campushub.services.settings_service import SettingsService
from campushub.auth import get_current_user, get_gateway
from campushub.db.gateway import EntityStoreGateway
from campushub.api.responses import unwrap

router = APIRouter(prefix="/settings", tags=["settings"])


def get_settings_service(gateway: EntityStoreGateway = Depends(get_gateway)) -> SettingsService:
    return SettingsService(gateway)


@router.get("/me", response_model=Optional[SettingsOut])
async def get_my_settings(
    user=Depends(get_current_user),
    settings_service: SettingsService = Depends(get_settings_service)
):
    """The caller's settings, or null if none have been saved yet."""
    return unwrap(await settings_service.get_settings(user["id"]))


@router.put("/me", response_model=SettingsOut)
async def save_my_settings(
    payload: SettingsIn,
    user=Depends(get_current_user),
    settings_service: SettingsService = Depends(get_settings_service)
):
    """Replace the caller's preferences wholesale."""
    return unwrap(await settings_service.set_settings(user["id"], payload.preferences))
