from fastapi import APIRouter, Depends, HTTPException
from typing import List
from campushub.schemas import UserOut, UserUpdate
from campushub.services.user_service import UserService
from campushub.auth import get_current_user, get_gateway
from campushub.db.gateway import EntityStoreGateway
from campushub.api.responses import unwrap

router = APIRouter(prefix="/users", tags=["users"])


def get_user_service(gateway: EntityStoreGateway = Depends(get_gateway)) -> UserService:
    return UserService(gateway)


@router.get("", response_model=List[UserOut])
async def list_users(
    user=Depends(get_current_user),
    user_service: UserService = Depends(get_user_service)
):
    return await user_service.get_all_users()


@router.patch("/me", response_model=UserOut)
async def update_me(
    payload: UserUpdate,
    user=Depends(get_current_user),
    user_service: UserService = Depends(get_user_service)
):
    result = await user_service.update_user_profile(user["id"], payload.model_dump(exclude_unset=True))
    return unwrap(result, not_found="User not found")


@router.get("/{user_id}", response_model=UserOut)
async def get_user(
    user_id: str,
    user=Depends(get_current_user),
    user_service: UserService = Depends(get_user_service)
):
    found = await user_service.get_user_by_id(user_id)
    if not found:
        raise HTTPException(status_code=404, detail="User not found")
    return found
