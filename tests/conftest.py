import copy
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from api.deps import get_store, get_weather_service
from main import app
from services.hydration_store import HydrationStore
from services.weather_service import WeatherReading, WeatherService


class FakeStore(HydrationStore):
    """
    In-memory stand-in for the Supabase tables.

    Rows are deep-copied on the way in and out, like a remote store.
    `before_record_write` / `before_streak_write` hooks run right before a
    conditional write so tests can simulate a concurrent writer.
    """

    def __init__(self):
        self.users: Dict[str, Dict[str, Any]] = {}
        self.records: Dict[tuple, Dict[str, Any]] = {}
        self.calls: List[tuple] = []
        self.before_record_write: Optional[Callable[["FakeStore"], None]] = None
        self.before_streak_write: Optional[Callable[["FakeStore"], None]] = None

    def add_user(self, user_id: str, **fields) -> Dict[str, Any]:
        row = {
            'id': user_id,
            'name': fields.pop('name', user_id.title()),
            'email': fields.pop('email', f"{user_id}@example.com"),
            'daily_goal': 2000,
            'current_streak': 0,
            'last_streak_update': None,
        }
        row.update(fields)
        self.users[user_id] = row
        return row

    def add_record(self, user_id: str, date_key: str, **fields) -> Dict[str, Any]:
        row = {
            'user_id': user_id,
            'date': date_key,
            'base_goal': 2000,
            'weather_adjustment': 0,
            'total_amount': 2000,
            'completed_amount': 0,
            'percentage': 0,
            'entries': [],
        }
        row.update(fields)
        self.records[(user_id, date_key)] = row
        return row

    async def get_user(self, user_id):
        self.calls.append(('get_user', user_id))
        return copy.deepcopy(self.users.get(user_id))

    async def upsert_user(self, user_data):
        self.calls.append(('upsert_user', user_data['id']))
        row = {**self.users.get(user_data['id'], {}), **copy.deepcopy(user_data)}
        row['updated_at'] = datetime.utcnow().isoformat()
        self.users[row['id']] = row
        return copy.deepcopy(row)

    async def update_user(self, user_id, update_data):
        self.calls.append(('update_user', user_id))
        if user_id not in self.users:
            return None
        self.users[user_id].update(copy.deepcopy(update_data))
        return copy.deepcopy(self.users[user_id])

    async def update_streak_if(self, user_id, expected_streak, expected_last_update, streak_data):
        self.calls.append(('update_streak_if', user_id))
        if self.before_streak_write:
            hook, self.before_streak_write = self.before_streak_write, None
            hook(self)
        user = self.users.get(user_id)
        if not user:
            return None
        if user.get('current_streak') != expected_streak or user.get('last_streak_update') != expected_last_update:
            return None
        user.update(streak_data)
        return copy.deepcopy(user)

    async def list_users_by_streak(self):
        self.calls.append(('list_users_by_streak',))
        ordered = sorted(self.users.values(), key=lambda u: (-(u.get('current_streak') or 0), u['id']))
        return copy.deepcopy(ordered)

    async def delete_user(self, user_id):
        self.calls.append(('delete_user', user_id))
        return self.users.pop(user_id, None) is not None

    async def get_daily_record(self, user_id, date_key):
        self.calls.append(('get_daily_record', user_id, date_key))
        return copy.deepcopy(self.records.get((user_id, date_key)))

    async def insert_daily_record_if_absent(self, record):
        self.calls.append(('insert_daily_record_if_absent', record['user_id'], record['date']))
        key = (record['user_id'], record['date'])
        if key not in self.records:
            row = copy.deepcopy(record)
            row['last_updated'] = datetime.utcnow().isoformat()
            self.records[key] = row

    async def update_daily_record_if(self, user_id, date_key, expected_completed_amount, update_data):
        self.calls.append(('update_daily_record_if', user_id, date_key))
        if self.before_record_write:
            hook, self.before_record_write = self.before_record_write, None
            hook(self)
        row = self.records.get((user_id, date_key))
        if not row or row.get('completed_amount') != expected_completed_amount:
            return None
        row.update(copy.deepcopy(update_data))
        row['last_updated'] = datetime.utcnow().isoformat()
        return copy.deepcopy(row)

    async def get_daily_records_in_range(self, user_id, start_key, end_key):
        self.calls.append(('get_daily_records_in_range', user_id, start_key, end_key))
        rows = [
            row for (uid, key), row in self.records.items()
            if uid == user_id and start_key <= key <= end_key
        ]
        return copy.deepcopy(sorted(rows, key=lambda r: r['date']))

    async def delete_daily_records(self, user_id):
        self.calls.append(('delete_daily_records', user_id))
        keys = [key for key in self.records if key[0] == user_id]
        for key in keys:
            del self.records[key]
        return len(keys)

    async def health_check(self):
        return {"status": "healthy", "message": "fake store"}

    def writes(self) -> List[tuple]:
        return [call for call in self.calls if not call[0].startswith(('get', 'list'))]


class FakeWeatherService(WeatherService):
    """Returns a fixed reading instead of calling the weather API"""

    def __init__(self, reading: WeatherReading = WeatherReading(humidity=50, temperature=15)):
        super().__init__(api_key="test-key", base_url="http://weather.invalid")
        self.reading = reading
        self.lookups: List[tuple] = []

    async def get_current_weather(self, latitude, longitude):
        self.lookups.append((latitude, longitude))
        return self.reading


@pytest.fixture
def store():
    return FakeStore()


@pytest.fixture
def weather():
    return FakeWeatherService()


@pytest.fixture
def client(store, weather):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_weather_service] = lambda: weather
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_store, None)
        app.dependency_overrides.pop(get_weather_service, None)
