# api/leaderboard.py
from fastapi import APIRouter, Depends, Query

from api.deps import get_leaderboard_service, to_http_error
from models.leaderboard_schemas import LeaderboardResponse
from services.leaderboard_service import LeaderboardService, TOP_N

router = APIRouter(prefix="/leaderboard", tags=["leaderboard"])

@router.get("/{user_id}", response_model=LeaderboardResponse)
async def get_leaderboard(
    user_id: str,
    limit: int = Query(TOP_N, ge=1, le=100),
    leaderboard_service: LeaderboardService = Depends(get_leaderboard_service),
):
    """Top streaks and the user's position among all users"""
    try:
        result = await leaderboard_service.get_leaderboard(user_id, limit=limit)
        return LeaderboardResponse(**result)
    except Exception as e:
        raise to_http_error(e, "getting leaderboard")
