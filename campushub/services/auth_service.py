"""Authentication service for sign-up and JWT token operations."""
from fastapi import HTTPException, status

from campushub.core import errors
from campushub.core.logging import logger
from campushub.core.security import (
    create_access_token,
    create_refresh_token,
    decode_token,
    hash_password,
    validate_password,
    verify_password,
)
from campushub.db.gateway import EntityStoreGateway
from campushub.schemas import LoginRequest, UserCreate
from campushub.services.profile_service import ProfileService
from campushub.services.user_service import UserService, public_user


class AuthService:
    """
    Service layer for authentication operations.
    
    Handles sign-up (user row plus an empty profile of the matching role),
    login and token refresh.
    """
    
    def __init__(self, gateway: EntityStoreGateway):
        self.gateway = gateway

    async def register(self, payload: UserCreate) -> dict:
        """
        Register a new user with password validation.
        
        Raises:
            HTTPException: If password is weak or email already exists
        """
        try:
            validate_password(payload.password)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
        
        if await UserService(self.gateway).get_user_by_email(payload.email):
            raise HTTPException(status_code=400, detail="Email already registered")
        
        created = await self.gateway.insert(
            "users",
            {
                "email": payload.email,
                "hashed_password": hash_password(payload.password),
                "role": payload.role,
                "name": payload.name,
            },
        )
        if not created.success:
            if created.error.code == errors.UNIQUE_VIOLATION:
                raise HTTPException(status_code=400, detail="Email already registered")
            raise HTTPException(status_code=500, detail="Could not create user")

        user = created.data
        profile = await ProfileService(self.gateway).create_profile(user["id"], user["role"])
        if not profile.success:
            logger.warning(f"User {user['id']} created without a {user['role']} profile: {profile.error.message}")
        return public_user(user)

    async def login(self, form_data: LoginRequest) -> dict:
        """
        Authenticate user and generate access and refresh tokens.
        
        Raises:
            HTTPException: If credentials are invalid
        """
        user = await UserService(self.gateway).get_user_by_email(form_data.email)
        if not user or not verify_password(form_data.password, user["hashed_password"]):
            raise HTTPException(status_code=401, detail="Incorrect credentials")
        
        return {
            "access_token": create_access_token(user["id"], user["role"]),
            "refresh_token": create_refresh_token(user["id"], user["role"]),
            "token_type": "bearer"
        }

    async def refresh_access_token(self, refresh_token: str) -> dict:
        """
        Generate a new access token using a valid refresh token.
        
        Raises:
            HTTPException: If refresh token is invalid or wrong token type
        """
        try:
            token_data = decode_token(refresh_token)
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid refresh token"
            )
        
        if token_data.get("type") != "refresh":
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid token type"
            )
        
        access_token = create_access_token(token_data["sub"], token_data["role"])
        return {
            "access_token": access_token,
            "token_type": "bearer"
        }
