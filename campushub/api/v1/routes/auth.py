"""Sign-up, login and token routes."""
from fastapi import APIRouter, Depends, Request
from campushub.schemas import UserCreate, UserOut, Token, TokenResponse, LoginRequest, RefreshTokenRequest
from campushub.services.auth_service import AuthService
from campushub.auth import get_current_user, get_gateway
from campushub.db.gateway import EntityStoreGateway
from slowapi import Limiter
from slowapi.util import get_remote_address

router = APIRouter(prefix="/auth", tags=["auth"])
limiter = Limiter(key_func=get_remote_address)


def get_auth_service(gateway: EntityStoreGateway = Depends(get_gateway)) -> AuthService:
    return AuthService(gateway)


@router.post("/register", response_model=UserOut)
@limiter.limit("3/minute")
async def register(
    request: Request,
    payload: UserCreate,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Create an account with a fixed role and an empty role profile.
    
    Rate limit: 3 requests per minute
    """
    return await auth_service.register(payload)


@router.post("/login", response_model=TokenResponse)
@limiter.limit("5/minute")
async def login(
    request: Request,
    form_data: LoginRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    """
    Login endpoint returning access and refresh tokens.
    
    Rate limit: 5 requests per minute
    """
    return await auth_service.login(form_data)


@router.post("/refresh", response_model=Token)
@limiter.limit("10/minute")
async def refresh_access_token(
    request: Request,
    payload: RefreshTokenRequest,
    auth_service: AuthService = Depends(get_auth_service)
):
    return await auth_service.refresh_access_token(payload.refresh_token)


@router.get("/me", response_model=UserOut)
async def get_current_user_info(current_user=Depends(get_current_user)):
    return current_user
