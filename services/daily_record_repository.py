# services/daily_record_repository.py
from datetime import date
from typing import Dict, List, Optional, Any, Tuple

from services.errors import NotFoundError, TransientIOError
from services.hydration_store import HydrationStore
from services.weather_service import WeatherService
from utils.timezone_utils import date_key

DEFAULT_DAILY_GOAL = 2000  # ml

class DailyRecordRepository:
    """One record per (user, calendar day), created lazily on first read"""

    def __init__(self, store: HydrationStore, weather_service: WeatherService):
        self.store = store
        self.weather_service = weather_service

    async def get(self, user_id: str, day: date) -> Optional[Dict[str, Any]]:
        return await self.store.get_daily_record(user_id, date_key(day))

    async def get_or_create(
        self,
        user_id: str,
        day: date,
        location: Optional[Tuple[float, float]] = None,
    ) -> Dict[str, Any]:
        """
        Return the day's record, creating it on first access.

        The goal and weather adjustment are sampled once, at creation. An
        existing record is returned as stored even if the profile or the
        weather changed since.
        """
        existing = await self.get(user_id, day)
        if existing:
            return existing

        user = await self.store.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")

        base_goal = user.get('daily_goal') or DEFAULT_DAILY_GOAL
        latitude, longitude = self.resolve_location(user, location)
        weather_adjustment = await self.weather_service.get_adjustment(latitude, longitude)

        print(f"💧 Creating daily record for {user_id} on {day}: base {base_goal}ml, weather {weather_adjustment:+d}ml")
        return await self._create(user_id, day, base_goal, weather_adjustment)

    async def create_default(self, user_id: str, day: date) -> Dict[str, Any]:
        """Record with the 2000ml default goal, for users without a profile row"""
        existing = await self.get(user_id, day)
        if existing:
            return existing

        print(f"⚠️ No profile for {user_id}, using default goal of {DEFAULT_DAILY_GOAL}ml for {day}")
        return await self._create(user_id, day, DEFAULT_DAILY_GOAL, 0)

    async def list_range(self, user_id: str, start: date, end: date) -> List[Dict[str, Any]]:
        return await self.store.get_daily_records_in_range(user_id, date_key(start), date_key(end))

    @staticmethod
    def resolve_location(
        user: Dict[str, Any],
        location: Optional[Tuple[float, float]] = None,
    ) -> Tuple[float, float]:
        """Live location, else the profile's last stored one, else (0, 0)"""
        if location is not None:
            return location
        if user.get('latitude') is not None and user.get('longitude') is not None:
            return user['latitude'], user['longitude']
        return 0.0, 0.0

    async def _create(self, user_id: str, day: date, base_goal: int, weather_adjustment: int) -> Dict[str, Any]:
        key = date_key(day)
        record = {
            'user_id': user_id,
            'date': key,
            'base_goal': base_goal,
            'weather_adjustment': weather_adjustment,
            'total_amount': base_goal + weather_adjustment,
            'completed_amount': 0,
            'percentage': 0,
            'entries': [],
        }

        # a concurrent creator may have won; the re-read returns whichever row was stored first
        await self.store.insert_daily_record_if_absent(record)
        created = await self.store.get_daily_record(user_id, key)
        if not created:
            raise TransientIOError(f"Daily record {key} missing after create")
        return created
