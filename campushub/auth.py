from typing import Optional
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from campushub.core.security import decode_token
from campushub.db.gateway import EntityStoreGateway, Row
from campushub.db.session import Database

security = HTTPBearer()


def get_database(request: Request) -> Database:
    """Store handle opened by the application lifespan."""
    return request.app.state.database


def get_gateway(database: Database = Depends(get_database)) -> EntityStoreGateway:
    return EntityStoreGateway(database)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    gateway: EntityStoreGateway = Depends(get_gateway),
) -> Row:
    """
    Resolve the user row from the bearer access token.
    
    Raises:
        HTTPException: If the token is invalid or the user no longer exists
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    
    try:
        payload = decode_token(credentials.credentials)
    except ValueError:
        raise credentials_exception
    
    if payload.get("type") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token type",
            headers={"WWW-Authenticate": "Bearer"},
        )
    
    user_id: Optional[str] = payload.get("sub")
    result = await gateway.fetch_one("users", {"id": user_id})
    if not result.success:
        raise credentials_exception
    # role claim must still match the stored role
    if result.data["role"] != payload["role"]:
        raise credentials_exception
    return result.data


def role_required(*roles: str):
    """
    Dependency allowing only users whose role is one of ``roles``.
    
    The role is read from the stored user row, not from the token claims.
    """
    allowed = {getattr(r, "value", r) for r in roles}

    async def role_checker(user: Row = Depends(get_current_user)) -> Row:
        if user.get("role") not in allowed:
            raise HTTPException(status_code=403, detail="Forbidden")
        return user
    return role_checker
