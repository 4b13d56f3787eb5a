# api/notification_preferences.py
# Reminder settings live on the user row; the scheduler on the device reads them.

from fastapi import APIRouter, Depends

from api.deps import get_profile_service, to_http_error
from models.schemas import NotificationSettings
from services.profile_service import ProfileService, DEFAULT_NOTIFICATION_SETTINGS

router = APIRouter(prefix="/notification-preferences", tags=["notification-preferences"])

@router.get("/{user_id}")
async def get_notification_preferences(
    user_id: str,
    profile_service: ProfileService = Depends(get_profile_service),
):
    """Get user's notification preferences"""
    try:
        preferences = await profile_service.get_notification_settings(user_id)
        return {
            "success": True,
            "preferences": preferences
        }
    except Exception as e:
        raise to_http_error(e, "getting notification preferences")

@router.put("/{user_id}")
async def save_notification_preferences(
    user_id: str,
    prefs: NotificationSettings,
    profile_service: ProfileService = Depends(get_profile_service),
):
    """Save user's notification preferences"""
    try:
        saved = await profile_service.update_notification_settings(user_id, prefs.model_dump())
        print(f"✅ Notification preferences saved for user {user_id}")

        return {
            "success": True,
            "message": "Notification preferences saved successfully",
            "preferences": saved
        }
    except Exception as e:
        raise to_http_error(e, "saving notification preferences")

@router.delete("/{user_id}")
async def reset_notification_preferences(
    user_id: str,
    profile_service: ProfileService = Depends(get_profile_service),
):
    """Reset user's notification preferences to defaults"""
    try:
        saved = await profile_service.update_notification_settings(user_id, dict(DEFAULT_NOTIFICATION_SETTINGS))

        return {
            "success": True,
            "message": "Notification preferences reset to defaults",
            "preferences": saved
        }
    except Exception as e:
        raise to_http_error(e, "resetting notification preferences")
