"""
Credentials for CampusHub accounts.

Passwords are bcrypt-hashed. Tokens name the user in ``sub`` and carry the
role fixed at sign-up, so a token whose role is not a known ``RoleEnum`` value
never decodes.
"""
from datetime import datetime, timedelta
from typing import Any, Dict, Optional
from jose import jwt, JWTError
from passlib.context import CryptContext
from campushub.core.config import settings
from campushub.db.models import RoleEnum

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ACCESS = "access"
REFRESH = "refresh"

SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{}|;:,.<>?"

PASSWORD_RULES = (
    (lambda p: len(p) >= 8, "Password must be at least 8 characters long"),
    (lambda p: any(c.isupper() for c in p), "Password must contain at least one uppercase letter"),
    (lambda p: any(c.islower() for c in p), "Password must contain at least one lowercase letter"),
    (lambda p: any(c.isdigit() for c in p), "Password must contain at least one digit"),
    (lambda p: any(c in SPECIAL_CHARACTERS for c in p), "Password must contain at least one special character"),
)


def validate_password(password: str) -> None:
    """Raise ``ValueError`` with the first strength rule ``password`` breaks."""
    for check, message in PASSWORD_RULES:
        if not check(password):
            raise ValueError(message)


def verify_password(plain: str, hashed: str) -> bool:
    return pwd_context.verify(plain, hashed)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def _role_claim(role: Any) -> str:
    try:
        return RoleEnum(role).value
    except ValueError:
        raise ValueError(f"Unknown role: {role!r}")


def _issue(user_id: str, role: Any, token_type: str, lifetime: timedelta) -> str:
    claims = {
        "sub": str(user_id),
        "role": _role_claim(role),
        "type": token_type,
        "exp": datetime.utcnow() + lifetime,
    }
    return jwt.encode(claims, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def create_access_token(user_id: str, role: Any, expires_delta: Optional[timedelta] = None) -> str:
    """
    Short-lived token for API calls.

    Raises:
        ValueError: If ``role`` is not a CampusHub role
    """
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _issue(user_id, role, ACCESS, lifetime)


def create_refresh_token(user_id: str, role: Any) -> str:
    return _issue(user_id, role, REFRESH, timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS))


def decode_token(token: str, expected_type: Optional[str] = None) -> Dict:
    """
    Decode a token and check its claims.

    Args:
        token: Encoded JWT
        expected_type: ``"access"`` or ``"refresh"``; any type when None

    Raises:
        ValueError: If the token is expired, malformed, of the wrong type,
            has no subject or names an unknown role
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise ValueError("Token has expired")
    except JWTError as e:
        raise ValueError(f"Invalid token: {str(e)}")

    if "sub" not in payload:
        raise ValueError("Invalid token payload: missing 'sub' field")
    try:
        _role_claim(payload.get("role"))
    except ValueError:
        raise ValueError(f"Invalid token payload: unknown role {payload.get('role')!r}")
    if expected_type and payload.get("type") != expected_type:
        raise ValueError(f"Invalid token type: expected {expected_type}")

    return payload
