# api/users.py
from fastapi import APIRouter, Depends
from datetime import datetime

from api.deps import get_profile_service, to_http_error
from models.schemas import StreakResponse, UserCreate, UserResponse, UserUpdate
from services.profile_service import ProfileService
from services.streak_engine import StreakEngine
from utils.timezone_utils import get_timezone_offset, get_user_today

router = APIRouter()

@router.post("", response_model=UserResponse)
async def create_user(
    user_data: UserCreate,
    profile_service: ProfileService = Depends(get_profile_service),
):
    """Save the profile created by the identity provider and compute its daily goal"""
    try:
        print(f"🔍 Creating profile for: {user_data.email}")
        created_user = await profile_service.create_user(user_data.model_dump())
        return UserResponse(**created_user)
    except Exception as e:
        raise to_http_error(e, "creating user")

@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    profile_service: ProfileService = Depends(get_profile_service),
):
    """Get user by ID"""
    try:
        user = await profile_service.get_user(user_id)
        return UserResponse(**user)
    except Exception as e:
        raise to_http_error(e, "getting user")

@router.put("/{user_id}/profile")
async def update_profile(
    user_id: str,
    user_data: UserUpdate,
    profile_service: ProfileService = Depends(get_profile_service),
):
    try:
        # Convert to dict and remove None values
        update_data = {k: v for k, v in user_data.model_dump().items() if v is not None}

        updated_user = await profile_service.update_profile(user_id, update_data)

        return {
            "success": True,
            "daily_goal": updated_user.get('daily_goal'),
            "user": UserResponse(**updated_user),
        }
    except Exception as e:
        raise to_http_error(e, "updating user")

@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    profile_service: ProfileService = Depends(get_profile_service),
):
    """Delete the account together with all of its daily records"""
    try:
        result = await profile_service.delete_account(user_id)
        return {"success": True, **result}
    except Exception as e:
        raise to_http_error(e, "deleting user")

@router.get("/{user_id}/streak", response_model=StreakResponse)
async def get_streak(
    user_id: str,
    tz_offset: int = Depends(get_timezone_offset),
    profile_service: ProfileService = Depends(get_profile_service),
):
    """Stored streak and the live value (0 once a day has been missed)"""
    try:
        user = await profile_service.get_user(user_id)
        return StreakResponse(
            current_streak=StreakEngine.current_streak(user, get_user_today(tz_offset)),
            stored_streak=user.get('current_streak') or 0,
            last_streak_update=user.get('last_streak_update'),
        )
    except Exception as e:
        raise to_http_error(e, "getting streak")

@router.get("/")
async def health_check():
    """Health check for users API"""
    return {"status": "Users API is healthy", "timestamp": datetime.utcnow()}
