"""
Role profile routes.

The caller's own profile is always resolved with the role stored on their
user row; looking up someone else's profile takes the role explicitly.
"""
from fastapi import APIRouter, Body, Depends, HTTPException, Query
from pydantic import ValidationError
from typing import Any, Dict
from campushub.schemas import PROFILE_SCHEMAS
from campushub.services.profile_service import ProfileService, parse_role
from campushub.auth import get_current_user, get_gateway, role_required
from campushub.db.gateway import EntityStoreGateway
from campushub.db.models import RoleEnum
from campushub.api.responses import unwrap

router = APIRouter(prefix="/profiles", tags=["profiles"])


def get_profile_service(gateway: EntityStoreGateway = Depends(get_gateway)) -> ProfileService:
    return ProfileService(gateway)


@router.get("/me", response_model=Dict[str, Any])
async def get_my_profile(
    user=Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service)
):
    profile = await profile_service.resolve_profile(user["id"], user["role"])
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return {"role": user["role"], **profile}


@router.put("/me", response_model=Dict[str, Any])
async def save_my_profile(
    payload: Dict[str, Any] = Body(...),
    user=Depends(get_current_user),
    profile_service: ProfileService = Depends(get_profile_service)
):
    """Update the caller's profile, creating it if it does not exist yet."""
    role = parse_role(user["role"])
    try:
        fields = PROFILE_SCHEMAS[role].model_validate(payload).model_dump(exclude_unset=True)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors(include_url=False))

    result = await profile_service.save_profile(user["id"], role, fields)
    return {"role": role.value, **unwrap(result)}


@router.get("/{user_id}", response_model=Dict[str, Any])
async def get_profile(
    user_id: str,
    role: str = Query(..., description="Role whose profile table to read"),
    user=Depends(role_required(RoleEnum.teacher, RoleEnum.committee)),
    profile_service: ProfileService = Depends(get_profile_service)
):
    profile = await profile_service.resolve_profile(user_id, role)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return {"role": role, **profile}
