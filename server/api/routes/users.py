"""User routes: profile and travel preferences."""
from fastapi import APIRouter, HTTPException, Depends, status
import logging

from api.schemas.request_schemas import CreateUserRequest
from api.schemas.response_schemas import UserResponse
from config.settings import settings
from core.dependencies import get_user_repo
from database.repositories.user_repo import UserRepository
from models.user import UserPreferences

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    request: CreateUserRequest,
    user_repo: UserRepository = Depends(get_user_repo),
):
    defaults = UserPreferences(
        languages=list(settings.DEFAULT_LANGUAGES),
        max_distance=settings.DEFAULT_MAX_DISTANCE_METERS,
    )
    try:
        user = await user_repo.create_user(
            request.model_dump(exclude_none=True), default_preferences=defaults
        )
    except Exception as e:
        logger.error(f"Error creating user: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create user. Please try again.",
        )
    if not user:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="User was not created.",
        )
    return user


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    user_repo: UserRepository = Depends(get_user_repo),
):
    try:
        user = await user_repo.get_by_id(user_id)
    except Exception as e:
        logger.error(f"Error getting user: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load user. Please try again.",
        )
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.put("/{user_id}/preferences", response_model=UserPreferences)
async def update_preferences(
    user_id: str,
    preferences: UserPreferences,
    user_repo: UserRepository = Depends(get_user_repo),
):
    try:
        user = await user_repo.get_by_id(user_id)
    except Exception as e:
        logger.error(f"Error getting user: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load user. Please try again.",
        )
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    if not await user_repo.update_preferences(user_id, preferences):
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update preferences. Please try again.",
        )
    return preferences
