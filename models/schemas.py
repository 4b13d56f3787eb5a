# models/schemas.py
from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator
from typing import Optional, Literal
from datetime import datetime

ActivityLevel = Literal['sedentary', 'light', 'moderate', 'very', 'extreme']
Gender = Literal['male', 'female', 'other']
Climate = Literal['hot', 'humid', 'dry', 'cold', 'moderate']

class NotificationSettings(BaseModel):
    """Reminder settings, stored on the user row for the notification scheduler"""
    enabled: bool = True
    reminder_frequency: int = Field(4, ge=1, le=24)   # hours between reminders
    start_time: int = Field(8, ge=0, le=23)           # hour of day
    end_time: int = Field(20, ge=1, le=24)
    sound_enabled: bool = True

    @model_validator(mode='after')
    def check_window(self):
        if self.start_time >= self.end_time:
            raise ValueError("start_time must be before end_time")
        return self

class UserCreate(BaseModel):
    """Profile row handed over by the identity provider after sign up"""
    id: str
    name: str
    email: EmailStr
    weight: Optional[float] = Field(None, gt=0)
    height: Optional[float] = Field(None, gt=0)
    age: Optional[int] = Field(None, gt=0)
    activity_level: Optional[ActivityLevel] = None
    gender: Optional[Gender] = None
    climate: Optional[Climate] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

class UserUpdate(BaseModel):
    """For profile edits, None means unchanged"""
    name: Optional[str] = None
    weight: Optional[float] = Field(None, gt=0)
    height: Optional[float] = Field(None, gt=0)
    age: Optional[int] = Field(None, gt=0)
    activity_level: Optional[ActivityLevel] = None
    gender: Optional[Gender] = None
    climate: Optional[Climate] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

class UserResponse(BaseModel):
    """For API responses"""
    id: str
    name: str
    email: str
    weight: Optional[float] = None
    height: Optional[float] = None
    age: Optional[int] = None
    activity_level: Optional[str] = None
    gender: Optional[str] = None
    climate: Optional[str] = None
    daily_goal: Optional[int] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    current_streak: int = 0
    last_streak_update: Optional[str] = None
    updated_at: Optional[datetime] = None

    @field_validator('current_streak', mode='before')
    @classmethod
    def null_streak_is_zero(cls, value):
        return value or 0

class StreakResponse(BaseModel):
    success: bool = True
    current_streak: int
    stored_streak: int
    last_streak_update: Optional[str] = None
