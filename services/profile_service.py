# services/profile_service.py
from typing import Dict, Any

from services.errors import NotFoundError
from services.goal_calculator import GoalCalculator
from services.hydration_store import HydrationStore

DEFAULT_NOTIFICATION_SETTINGS = {
    'enabled': True,
    'reminder_frequency': 4,
    'start_time': 8,    # 8 AM
    'end_time': 20,     # 8 PM
    'sound_enabled': True,
}

class ProfileService:
    """Profile saves keep the stored daily_goal in sync with the biometrics"""

    def __init__(self, store: HydrationStore):
        self.store = store

    async def create_user(self, user_data: Dict[str, Any]) -> Dict[str, Any]:
        existing = await self.store.get_user(user_data['id'])

        if existing:
            # a re-post must not null out stored fields it leaves empty
            user_dict = {k: v for k, v in user_data.items() if v is not None}
            user_dict['daily_goal'] = GoalCalculator.goal_for_profile({**existing, **user_dict})
        else:
            user_dict = dict(user_data)
            user_dict['daily_goal'] = GoalCalculator.goal_for_profile(user_dict)
            user_dict['current_streak'] = 0
            user_dict['last_streak_update'] = None
            user_dict['notification_settings'] = dict(DEFAULT_NOTIFICATION_SETTINGS)

        print(f"🔍 Saving profile for {user_dict['id']}, daily goal {user_dict['daily_goal']}ml")
        return await self.store.upsert_user(user_dict)

    async def get_user(self, user_id: str) -> Dict[str, Any]:
        user = await self.store.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    async def update_profile(self, user_id: str, update_data: Dict[str, Any]) -> Dict[str, Any]:
        """Merge-write profile edits and recompute the daily goal from the merged profile"""
        user = await self.get_user(user_id)

        merged = {**user, **update_data}
        update_data = dict(update_data)
        update_data['daily_goal'] = GoalCalculator.goal_for_profile(merged)

        updated = await self.store.update_user(user_id, update_data)
        if not updated:
            raise NotFoundError("User not found")

        print(f"✅ Profile updated for {user_id}, daily goal {update_data['daily_goal']}ml")
        return updated

    async def get_notification_settings(self, user_id: str) -> Dict[str, Any]:
        user = await self.get_user(user_id)
        return {**DEFAULT_NOTIFICATION_SETTINGS, **(user.get('notification_settings') or {})}

    async def update_notification_settings(self, user_id: str, settings: Dict[str, Any]) -> Dict[str, Any]:
        current = await self.get_notification_settings(user_id)
        merged = {**current, **settings}

        updated = await self.store.update_user(user_id, {'notification_settings': merged})
        if not updated:
            raise NotFoundError("User not found")
        return merged

    async def delete_account(self, user_id: str) -> Dict[str, Any]:
        """Remove every daily record, then the user row"""
        await self.get_user(user_id)

        deleted_records = await self.store.delete_daily_records(user_id)
        await self.store.delete_user(user_id)

        print(f"🗑️ Deleted user {user_id} and {deleted_records} daily records")
        return {'deleted_records': deleted_records}
