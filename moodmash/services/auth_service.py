# auth service — password hashing and jwt access/refresh tokens
# tokens carry the user id as "sub" and a "type" claim (access | refresh)

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext
from moodmash.config import settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

ACCESS = "access"
REFRESH = "refresh"


def hash_password(password: str) -> str:
    """hash a plaintext password using bcrypt"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """verify a plaintext password against a bcrypt hash"""
    return pwd_context.verify(plain_password, hashed_password)


def _encode(user_id: str, token_type: str, lifetime: timedelta, extra: Optional[dict] = None) -> str:
    claims = dict(extra or {})
    claims.update({
        "sub": user_id,
        "type": token_type,
        "exp": datetime.now(timezone.utc) + lifetime,
    })
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def create_access_token(user_id: str, expires_delta: Optional[timedelta] = None, **extra) -> str:
    """short-lived token sent as the bearer credential on every request"""
    lifetime = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _encode(user_id, ACCESS, lifetime, extra)


def create_refresh_token(user_id: str) -> str:
    """long-lived token only accepted by /auth/refresh"""
    return _encode(user_id, REFRESH, timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS))


def create_token_pair(user_id: str) -> dict:
    return {
        "access_token": create_access_token(user_id),
        "refresh_token": create_refresh_token(user_id),
    }


def decode_token(token: str, expected_type: Optional[str] = None) -> Optional[dict]:
    """decode and validate a jwt token. returns the payload, or None when the
    signature, expiry or (if given) the token type does not check out."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        logger.warning(f"Token decode failed: {e}")
        return None

    if expected_type is not None and payload.get("type") != expected_type:
        logger.warning(f"Rejected {payload.get('type')} token where {expected_type} was expected")
        return None
    return payload
