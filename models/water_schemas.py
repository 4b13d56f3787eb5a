# models/water_schemas.py
from pydantic import BaseModel, Field
from typing import Optional, List, Any, Dict

class WaterEntry(BaseModel):
    id: str
    time: str
    amount: int

class DailyRecord(BaseModel):
    date: str
    base_goal: int = 0
    weather_adjustment: int = 0
    total_amount: int = 0
    completed_amount: int = 0
    percentage: int = 0
    entries: List[WaterEntry] = []
    last_updated: Optional[str] = None

class IntakeCreate(BaseModel):
    user_id: str
    # left raw for the intake service, lax coercion would turn true into 1
    amount: Any
    date: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

class StreakState(BaseModel):
    current_streak: int = 0
    last_streak_update: Optional[str] = None

class IntakeResponse(BaseModel):
    success: bool = True
    percentage: int
    record: DailyRecord
    streak: Optional[StreakState] = None

class TodayProgress(BaseModel):
    total_amount: int = 0
    percentage: int = 0
    entries: List[WaterEntry] = []

class HistorySummary(BaseModel):
    days: int
    days_goal_met: int
    total_completed: int
    average_percentage: float

class HistoryResponse(BaseModel):
    success: bool = True
    start_date: str
    end_date: str
    records: Dict[str, DailyRecord]
    summary: HistorySummary

class GoalPreviewRequest(BaseModel):
    weight: Optional[float] = Field(None, gt=0)
    age: Optional[int] = Field(None, gt=0)
    height: Optional[float] = Field(None, gt=0)
    activity: Optional[str] = None
    gender: Optional[str] = None
    climate: Optional[str] = None
    humidity: Optional[float] = Field(None, ge=0, le=100)
    temperature: Optional[float] = None

class GoalPreviewResponse(BaseModel):
    base_goal: int
    weather_adjustment: int
    total_amount: int
