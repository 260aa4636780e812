from datetime import datetime, timedelta, timezone
from typing import Optional
import jwt

from voyagehub.config import Settings, settings as default_settings


def create_access_token(
    data: dict,
    expires_delta: Optional[timedelta] = None,
    settings: Optional[Settings] = None,
) -> str:
    """
    Create a JWT access token.

    Args:
        data: Claims to encode (``sub`` is the user id, plus ``email``)
        expires_delta: Optional lifetime. If None, uses JWT_ACCESS_TOKEN_EXPIRE_MINUTES.
        settings: Settings carrying the signing key; the process settings by default.

    Returns:
        Encoded JWT token string
    """
    settings = settings or default_settings
    to_encode = data.copy()
    now = datetime.now(timezone.utc)

    if expires_delta:
        expire = now + expires_delta
    else:
        expire = now + timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode.update({"exp": expire, "iat": now})

    return jwt.encode(
        to_encode,
        settings.JWT_SECRET_KEY,
        algorithm=settings.JWT_ALGORITHM
    )


def decode_access_token(token: str, settings: Optional[Settings] = None) -> dict:
    """
    Decode and verify a JWT access token.

    Raises:
        jwt.ExpiredSignatureError: If token has expired
        jwt.InvalidTokenError: If token is invalid
    """
    settings = settings or default_settings
    return jwt.decode(
        token,
        settings.JWT_SECRET_KEY,
        algorithms=[settings.JWT_ALGORITHM]
    )
