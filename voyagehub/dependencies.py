from typing import Optional

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from voyagehub.config import Settings
from voyagehub.db import get_db
from voyagehub.exceptions import UnauthorizedError
from voyagehub.logging_config import get_logger
from voyagehub.models.user import User
from voyagehub.realtime import RoomHub
from voyagehub.services.document_storage import DocumentStorage
from voyagehub.utils.jwt import decode_access_token

logger = get_logger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)

__all__ = ["get_db", "get_settings", "get_current_user", "get_storage", "get_hub"]


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_storage(request: Request) -> DocumentStorage:
    return request.app.state.storage


def get_hub(request: Request) -> RoomHub:
    return request.app.state.hub


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the bearer token to a User, or fail with 401."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Access token required")

    try:
        payload = decode_access_token(credentials.credentials, settings)
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token expired")
    except jwt.InvalidTokenError:
        raise UnauthorizedError("Invalid token")

    user_id = payload.get("sub")
    if not user_id:
        raise UnauthorizedError("Invalid token")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        logger.warning(f"Token for unknown user {user_id}")
        raise UnauthorizedError("User not found")
    return user
