# api/deps.py
from typing import Optional, Tuple

from fastapi import Depends, HTTPException, Request

from services.daily_record_repository import DailyRecordRepository
from services.errors import HydrationError
from services.history_service import HistoryService
from services.hydration_store import HydrationStore
from services.intake_service import IntakeService
from services.leaderboard_service import LeaderboardService
from services.profile_service import ProfileService
from services.streak_engine import StreakEngine
from services.weather_service import WeatherService

# Store and weather clients are built once at startup and kept on app.state;
# the services on top are cheap and built per request.

def get_store(request: Request) -> HydrationStore:
    return request.app.state.store

def get_weather_service(request: Request) -> WeatherService:
    return request.app.state.weather_service

def get_repository(
    store: HydrationStore = Depends(get_store),
    weather_service: WeatherService = Depends(get_weather_service),
) -> DailyRecordRepository:
    return DailyRecordRepository(store, weather_service)

def get_streak_engine(store: HydrationStore = Depends(get_store)) -> StreakEngine:
    return StreakEngine(store)

def get_intake_service(
    store: HydrationStore = Depends(get_store),
    repository: DailyRecordRepository = Depends(get_repository),
    streak_engine: StreakEngine = Depends(get_streak_engine),
) -> IntakeService:
    return IntakeService(store, repository, streak_engine)

def get_history_service(repository: DailyRecordRepository = Depends(get_repository)) -> HistoryService:
    return HistoryService(repository)

def get_leaderboard_service(store: HydrationStore = Depends(get_store)) -> LeaderboardService:
    return LeaderboardService(store)

def get_profile_service(store: HydrationStore = Depends(get_store)) -> ProfileService:
    return ProfileService(store)

def to_location(latitude: Optional[float], longitude: Optional[float]) -> Optional[Tuple[float, float]]:
    if latitude is None or longitude is None:
        return None
    return latitude, longitude

def to_http_error(e: Exception, action: str) -> HTTPException:
    """Map service errors onto HTTP status codes, anything unexpected is a 500"""
    print(f"❌ Error {action}: {e}")
    if isinstance(e, HydrationError):
        return HTTPException(status_code=e.status_code, detail=e.message)
    return HTTPException(status_code=500, detail=str(e))
