# services/intake_service.py
import math
from datetime import date, datetime, timezone
from typing import Dict, Optional, Any, Tuple

from services.daily_record_repository import DailyRecordRepository
from services.errors import ConflictError, NotFoundError, ValidationError
from services.goal_calculator import round_half_up
from services.hydration_store import HydrationStore
from services.streak_engine import StreakEngine, MAX_WRITE_ATTEMPTS
from utils.timezone_utils import date_key, get_user_today

INVALID_AMOUNT_MESSAGE = "Please enter a valid amount greater than 0"

def parse_amount(amount: Any) -> int:
    """Whole ml from user input ("250", 250, 250.4); anything else is a ValidationError"""
    if isinstance(amount, bool) or amount is None:
        raise ValidationError(INVALID_AMOUNT_MESSAGE)

    if isinstance(amount, str):
        try:
            value = float(amount.strip())
        except ValueError:
            raise ValidationError(INVALID_AMOUNT_MESSAGE)
    elif isinstance(amount, (int, float)):
        value = float(amount)
    else:
        raise ValidationError(INVALID_AMOUNT_MESSAGE)

    if not math.isfinite(value) or value <= 0:
        raise ValidationError(INVALID_AMOUNT_MESSAGE)

    ml = round_half_up(value)
    if ml <= 0:
        raise ValidationError(INVALID_AMOUNT_MESSAGE)
    return ml

def compute_percentage(completed_amount: int, total_amount: int) -> int:
    """Completion of the day's goal, 0..100"""
    if total_amount <= 0:
        return 100 if completed_amount > 0 else 0
    return round_half_up(min(100.0, completed_amount / total_amount * 100))

class IntakeService:
    def __init__(
        self,
        store: HydrationStore,
        repository: DailyRecordRepository,
        streak_engine: StreakEngine,
    ):
        self.store = store
        self.repository = repository
        self.streak_engine = streak_engine

    async def add_intake(
        self,
        user_id: str,
        amount: Any,
        day: Optional[date] = None,
        now: Optional[datetime] = None,
        location: Optional[Tuple[float, float]] = None,
    ) -> Dict[str, Any]:
        """
        Append a drink to the day's record and credit the streak when the
        goal is reached. Returns the new percentage, the stored record and
        the streak state (None unless the goal was met).
        """
        ml = parse_amount(amount)
        day = day or get_user_today()
        now = now or datetime.now(timezone.utc)
        timestamp = now.isoformat()
        key = date_key(day)

        print(f"💧 Adding {ml}ml for user {user_id} on {key}")

        record = await self.repository.get(user_id, day)
        if not record:
            try:
                record = await self.repository.get_or_create(user_id, day, location)
            except NotFoundError:
                record = await self.repository.create_default(user_id, day)

        entry = {'id': timestamp, 'time': timestamp, 'amount': ml}

        for attempt in range(MAX_WRITE_ATTEMPTS):
            completed_amount = record.get('completed_amount') or 0
            new_completed = completed_amount + ml
            percentage = compute_percentage(new_completed, record.get('total_amount') or 0)

            updated = await self.store.update_daily_record_if(
                user_id,
                key,
                completed_amount,
                {
                    'completed_amount': new_completed,
                    'percentage': percentage,
                    'entries': list(record.get('entries') or []) + [entry],
                },
            )
            if updated:
                break

            print(f"⚠️ Daily record {key} for {user_id} changed concurrently, retrying ({attempt + 1}/{MAX_WRITE_ATTEMPTS})")
            record = await self.repository.get(user_id, day)
            if not record:
                raise NotFoundError(f"Daily record {key} disappeared")
        else:
            raise ConflictError("Your drink could not be saved because of a concurrent update, please try again")

        streak = None
        if percentage >= 100:
            streak = await self.streak_engine.record_goal_met(user_id, day)

        print(f"✅ {user_id} is at {percentage}% for {key}")
        return {
            'percentage': percentage,
            'record': updated,
            'streak': streak,
        }

    async def get_today_progress(self, user_id: str, day: Optional[date] = None) -> Dict[str, Any]:
        """Read-only view of a day's progress, zeros when nothing was logged"""
        record = await self.repository.get(user_id, day or get_user_today())
        if not record:
            return {'total_amount': 0, 'percentage': 0, 'entries': []}

        return {
            'total_amount': record.get('total_amount') or 0,
            'percentage': record.get('percentage') or 0,
            'entries': record.get('entries') or [],
        }
