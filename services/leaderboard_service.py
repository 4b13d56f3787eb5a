# services/leaderboard_service.py
from typing import Dict, Any

from services.errors import NotFoundError
from services.hydration_store import HydrationStore

TOP_N = 10

class LeaderboardService:
    def __init__(self, store: HydrationStore):
        self.store = store

    async def get_leaderboard(self, user_id: str, limit: int = TOP_N) -> Dict[str, Any]:
        """
        Top users by streak plus the caller's 1-based rank.

        Top slice and rank come from the same ordered listing so they always
        agree. Equal streaks are ordered by user id.
        """
        users = await self.store.list_users_by_streak()

        ranking = [
            {
                'id': user['id'],
                'name': user.get('name') or 'Unknown',
                'streak': user.get('current_streak') or 0,
            }
            for user in users
        ]
        # the store may put null streaks first, rank them as 0
        ranking.sort(key=lambda entry: (-entry['streak'], entry['id']))

        position = next((i + 1 for i, entry in enumerate(ranking) if entry['id'] == user_id), None)
        if position is None:
            raise NotFoundError("User not found")

        print(f"🏆 Leaderboard: {user_id} ranks {position} of {len(ranking)}")
        return {
            'leaderboard': ranking[:limit],
            'user_rank': {
                'position': position,
                'total_users': len(ranking),
            },
        }
