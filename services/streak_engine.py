# services/streak_engine.py
from datetime import date, datetime, timedelta
from typing import Dict, Optional, Any

from services.errors import ConflictError
from services.hydration_store import HydrationStore
from utils.timezone_utils import date_key, parse_date_key

MAX_WRITE_ATTEMPTS = 5

class StreakEngine:
    """
    Consecutive goal-met days per user.

    State lives on the user row as current_streak / last_streak_update.
    A day that reaches 100% credits the streak once: +1 when the previous
    credit was yesterday, reset to 1 after a gap, unchanged when today was
    already credited.
    Crediting a day older than last_streak_update leaves the state alone.
    """

    def __init__(self, store: HydrationStore):
        self.store = store

    @staticmethod
    def next_state(current_streak: int, last_update: Optional[date], today: date) -> Optional[Dict[str, Any]]:
        """New streak state for a goal met on `today`, or None if today or a later day is already credited"""
        if last_update is not None and last_update >= today:
            return None

        if last_update == today - timedelta(days=1):
            new_streak = current_streak + 1
        else:
            new_streak = 1

        return {
            'current_streak': new_streak,
            'last_streak_update': date_key(today),
        }

    @staticmethod
    def current_streak(user: Dict[str, Any], today: date) -> int:
        """Live streak: the stored value lapses to 0 once a full day is missed"""
        stored = user.get('current_streak') or 0
        last_update = StreakEngine._last_update(user)
        if last_update is None or last_update < today - timedelta(days=1):
            return 0
        return stored

    async def record_goal_met(self, user_id: str, today: date) -> Optional[Dict[str, Any]]:
        """
        Credit the streak for `today`. Returns the resulting streak state,
        or None when the user row does not exist.
        """
        for attempt in range(MAX_WRITE_ATTEMPTS):
            user = await self.store.get_user(user_id)
            if not user:
                print(f"⚠️ Cannot credit streak, no user row for {user_id}")
                return None

            stored_streak = user.get('current_streak')
            stored_last = user.get('last_streak_update')
            new_state = self.next_state(stored_streak or 0, self._last_update(user), today)

            if new_state is None:
                return {
                    'current_streak': stored_streak or 0,
                    'last_streak_update': stored_last,
                }

            updated = await self.store.update_streak_if(user_id, stored_streak, stored_last, new_state)
            if updated:
                print(f"🔥 Streak for {user_id} is now {new_state['current_streak']}")
                return new_state

            print(f"⚠️ Streak for {user_id} changed concurrently, retrying ({attempt + 1}/{MAX_WRITE_ATTEMPTS})")

        raise ConflictError("Streak was updated concurrently, please try again")

    @staticmethod
    def _last_update(user: Dict[str, Any]) -> Optional[date]:
        value = user.get('last_streak_update')
        if not value:
            return None
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        return parse_date_key(value)
