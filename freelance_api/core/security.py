"""
Security Module

Password hashing (passlib/bcrypt) and the access-token service (python-jose).
Tokens are HS256 JWTs carrying the user's id, username and role.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import jwt, JWTError
from passlib.context import CryptContext
from pydantic import ValidationError

from freelance_api.core.config import settings
from freelance_api.core.errors import InvalidTokenError
from freelance_api.models.user import User
from freelance_api.schemas.auth import Identity

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # Malformed hash in the database; treat as a failed check
        return False


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """
    Issue a signed access token for a user.

    Args:
        user: The authenticated user (must be persisted, i.e. have an id)
        expires_delta: Token lifetime, defaults to ACCESS_TOKEN_EXPIRE_MINUTES

    Returns:
        str: The encoded JWT
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = datetime.now(timezone.utc) + expires_delta
    role = user.role.value if hasattr(user.role, "value") else user.role
    to_encode: Dict[str, Any] = {
        "sub": str(user.id),
        "id": user.id,
        "username": user.username,
        "role": role,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> Identity:
    """
    Verify a token's signature and expiry and return the identity it carries.

    Raises:
        InvalidTokenError: On any decode, signature, expiry or payload problem
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        return Identity(
            id=payload.get("id"),
            username=payload.get("username"),
            role=payload.get("role"),
        )
    except (JWTError, ValidationError) as exc:
        raise InvalidTokenError() from exc
