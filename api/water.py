# api/water.py
from fastapi import APIRouter, Depends
from datetime import timedelta
from typing import Optional

from api.deps import (
    get_history_service,
    get_intake_service,
    get_repository,
    to_http_error,
    to_location,
)
from models.water_schemas import (
    DailyRecord,
    GoalPreviewRequest,
    GoalPreviewResponse,
    HistoryResponse,
    IntakeCreate,
    IntakeResponse,
    TodayProgress,
)
from services.daily_record_repository import DailyRecordRepository
from services.errors import ValidationError
from services.goal_calculator import GoalCalculator
from services.history_service import HistoryService
from services.intake_service import IntakeService
from services.weather_service import calculate_weather_adjustment
from utils.timezone_utils import date_key, get_timezone_offset, get_user_date, get_user_today

router = APIRouter()

DEFAULT_HISTORY_DAYS = 7

def _parse_day(value: Optional[str], tz_offset: int):
    try:
        return get_user_date(value, tz_offset)
    except ValueError:
        raise ValidationError(f"Invalid date: {value}")

@router.post("/intake", response_model=IntakeResponse)
async def add_intake(
    intake: IntakeCreate,
    tz_offset: int = Depends(get_timezone_offset),
    intake_service: IntakeService = Depends(get_intake_service),
):
    """Log a drink for the day and update the streak"""
    try:
        day = _parse_day(intake.date, tz_offset)
        if day > get_user_today(tz_offset):
            raise ValidationError("Cannot log water for a future date")

        result = await intake_service.add_intake(
            intake.user_id,
            intake.amount,
            day=day,
            location=to_location(intake.latitude, intake.longitude),
        )
        return IntakeResponse(
            percentage=result['percentage'],
            record=DailyRecord(**result['record']),
            streak=result['streak'],
        )
    except Exception as e:
        raise to_http_error(e, "adding water intake")

@router.get("/{user_id}/today", response_model=DailyRecord)
async def get_today_record(
    user_id: str,
    latitude: Optional[float] = None,
    longitude: Optional[float] = None,
    tz_offset: int = Depends(get_timezone_offset),
    repository: DailyRecordRepository = Depends(get_repository),
):
    """Today's record, created with a weather-adjusted goal on first access"""
    try:
        print(f"💧 Getting today's record for user: {user_id}")
        today = get_user_today(tz_offset)
        record = await repository.get_or_create(user_id, today, to_location(latitude, longitude))
        return DailyRecord(**record)
    except Exception as e:
        raise to_http_error(e, "getting today's record")

@router.get("/{user_id}/progress", response_model=TodayProgress)
async def get_today_progress(
    user_id: str,
    tz_offset: int = Depends(get_timezone_offset),
    intake_service: IntakeService = Depends(get_intake_service),
):
    """Today's progress without creating a record"""
    try:
        progress = await intake_service.get_today_progress(user_id, get_user_today(tz_offset))
        return TodayProgress(**progress)
    except Exception as e:
        raise to_http_error(e, "getting today's progress")

@router.get("/{user_id}/history", response_model=HistoryResponse)
async def get_history(
    user_id: str,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    tz_offset: int = Depends(get_timezone_offset),
    history_service: HistoryService = Depends(get_history_service),
):
    """Daily records for a date range, one per day (defaults to the last 7 days)"""
    try:
        end = _parse_day(end_date, tz_offset)
        start = _parse_day(start_date, tz_offset) if start_date else end - timedelta(days=DEFAULT_HISTORY_DAYS - 1)

        history = await history_service.get_range(user_id, start, end)
        return HistoryResponse(
            start_date=date_key(start),
            end_date=date_key(end),
            records={key: DailyRecord(**record) for key, record in history.items()},
            summary=history_service.summarize(history),
        )
    except Exception as e:
        raise to_http_error(e, "getting water history")

@router.post("/goal/preview", response_model=GoalPreviewResponse)
async def preview_goal(payload: GoalPreviewRequest):
    """Goal for the given biometrics and weather, nothing is stored"""
    base_goal = GoalCalculator.calculate_daily_goal(
        weight=payload.weight,
        age=payload.age,
        height=payload.height,
        activity=payload.activity,
        gender=payload.gender,
        climate=payload.climate,
    )
    weather_adjustment = 0
    if payload.humidity is not None and payload.temperature is not None:
        weather_adjustment = calculate_weather_adjustment(payload.humidity, payload.temperature)

    return GoalPreviewResponse(
        base_goal=base_goal,
        weather_adjustment=weather_adjustment,
        total_amount=base_goal + weather_adjustment,
    )
