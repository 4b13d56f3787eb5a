# models/leaderboard_schemas.py
from pydantic import BaseModel
from typing import List

class LeaderboardEntry(BaseModel):
    id: str
    name: str
    streak: int

class UserRank(BaseModel):
    position: int
    total_users: int

class LeaderboardResponse(BaseModel):
    success: bool = True
    leaderboard: List[LeaderboardEntry]
    user_rank: UserRank
