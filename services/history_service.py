# services/history_service.py
from datetime import date
from typing import Dict, Any

from services.daily_record_repository import DailyRecordRepository
from services.errors import ValidationError
from utils.timezone_utils import date_key, days_between

MAX_RANGE_DAYS = 366

def empty_day(key: str) -> Dict[str, Any]:
    """Zero-valued placeholder for a day without a stored record"""
    return {
        'date': key,
        'base_goal': 0,
        'weather_adjustment': 0,
        'total_amount': 0,
        'completed_amount': 0,
        'percentage': 0,
        'entries': [],
    }

class HistoryService:
    def __init__(self, repository: DailyRecordRepository):
        self.repository = repository

    async def get_range(self, user_id: str, start: date, end: date) -> Dict[str, Dict[str, Any]]:
        """
        One record per calendar day from start to end inclusive, ordered by date.

        Days without a stored record are filled with placeholders. Placeholders
        are never written back.
        """
        if start > end:
            raise ValidationError("start_date must not be after end_date")
        if (end - start).days + 1 > MAX_RANGE_DAYS:
            raise ValidationError(f"Date range cannot exceed {MAX_RANGE_DAYS} days")

        print(f"🔍 Getting history for user {user_id}: {start} to {end}")
        stored = await self.repository.list_range(user_id, start, end)
        by_date = {record['date']: record for record in stored}

        history = {}
        for day in days_between(start, end):
            key = date_key(day)
            history[key] = by_date.get(key) or empty_day(key)

        print(f"✅ History has {len(stored)} stored days out of {len(history)}")
        return history

    @staticmethod
    def summarize(history: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
        days = len(history)
        percentages = [record.get('percentage') or 0 for record in history.values()]

        return {
            'days': days,
            'days_goal_met': sum(1 for p in percentages if p >= 100),
            'total_completed': sum(record.get('completed_amount') or 0 for record in history.values()),
            'average_percentage': round(sum(percentages) / days, 1) if days else 0.0,
        }
