from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from voyagehub.config import Settings
from voyagehub.dependencies import get_current_user, get_db, get_settings
from voyagehub.exceptions import BadRequestError
from voyagehub.logging_config import get_logger
from voyagehub.models.user import User
from voyagehub.schemas.user import AuthResponse, LoginRequest, ProfileUpdate, RegisterRequest, UserPreferences, UserResponse
from voyagehub.utils.jwt import create_access_token
from voyagehub.utils.security import hash_password, verify_password

logger = get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _deep_merge(base: dict, updates: dict) -> dict:
    merged = dict(base)
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _auth_response(user: User, settings: Settings) -> AuthResponse:
    token = create_access_token({"sub": user.id, "email": user.email}, settings=settings)
    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
async def register(
    payload: RegisterRequest,
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db),
):
    """Create an account and return it with a fresh access token."""
    email = payload.email.lower()
    try:
        result = await db.execute(select(User).where(User.email == email))
        if result.scalar_one_or_none() is not None:
            raise BadRequestError("User already exists")

        user = User(
            email=email,
            password_hash=hash_password(payload.password),
            first_name=payload.first_name.strip(),
            last_name=payload.last_name.strip(),
        )
        db.add(user)
        await db.commit()
        await db.refresh(user)

        logger.info(f"Registered user {user.id}")
        return _auth_response(user, settings)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error registering user: {e}")
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to register user"
        )


@router.post("/login", response_model=AuthResponse)
async def login(
    payload: LoginRequest,
    settings: Settings = Depends(get_settings),
    db: AsyncSession = Depends(get_db),
):
    try:
        result = await db.execute(select(User).where(User.email == payload.email.strip().lower()))
        user = result.scalar_one_or_none()
        if user is None or not verify_password(payload.password, user.password_hash):
            raise BadRequestError("Invalid credentials")

        logger.info(f"User {user.id} logged in")
        return _auth_response(user, settings)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error during login: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to log in"
        )


@router.get("/profile", response_model=UserResponse)
async def get_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.patch("/profile", response_model=UserResponse)
async def update_profile(
    payload: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """
    Update name, avatar and preferences.

    Preferences are merged key by key over the stored ones, so a client can
    send ``{"notifications": {"push": false}}`` without repeating the rest.
    """
    try:
        changes = payload.changes()
        if "preferences" in changes:
            merged = _deep_merge(current_user.preferences or {}, changes["preferences"])
            try:
                preferences = UserPreferences.model_validate(merged)
            except ValidationError as e:
                raise BadRequestError(f"Invalid preferences: {e.errors()[0]['msg']}")
            changes["preferences"] = preferences.model_dump(mode="json", by_alias=True)

        for field, value in changes.items():
            setattr(current_user, field, value)

        await db.commit()
        await db.refresh(current_user)
        return current_user

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating profile for user {current_user.id}: {e}")
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update profile"
        )
