# services/hydration_store.py
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Any


class HydrationStore(ABC):
    """
    Remote document store used by the hydration services.

    Two tables:
    - users: one row per user (profile, daily_goal, settings, streak state)
    - daily_records: one row per (user_id, date), date as 'YYYY-MM-DD'

    Every method raises TransientIOError when the store call itself fails.
    The *_if methods are conditional writes: they apply only when the stored
    row still holds the expected values and return None otherwise.
    """

    # Users
    @abstractmethod
    async def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    async def upsert_user(self, user_data: Dict[str, Any]) -> Dict[str, Any]:
        ...

    @abstractmethod
    async def update_user(self, user_id: str, update_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Merge-write the given fields, returns None when the user does not exist"""

    @abstractmethod
    async def update_streak_if(
        self,
        user_id: str,
        expected_streak: Optional[int],
        expected_last_update: Optional[str],
        streak_data: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    async def list_users_by_streak(self) -> List[Dict[str, Any]]:
        """Every user, ordered by current_streak desc (null as 0), then id asc"""

    @abstractmethod
    async def delete_user(self, user_id: str) -> bool:
        ...

    # Daily records
    @abstractmethod
    async def get_daily_record(self, user_id: str, date_key: str) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    async def insert_daily_record_if_absent(self, record: Dict[str, Any]) -> None:
        """Insert the record unless (user_id, date) already exists"""

    @abstractmethod
    async def update_daily_record_if(
        self,
        user_id: str,
        date_key: str,
        expected_completed_amount: int,
        update_data: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        ...

    @abstractmethod
    async def get_daily_records_in_range(self, user_id: str, start_key: str, end_key: str) -> List[Dict[str, Any]]:
        """Records with start_key <= date <= end_key, ascending by date"""

    @abstractmethod
    async def delete_daily_records(self, user_id: str) -> int:
        ...

    @abstractmethod
    async def health_check(self) -> Dict[str, Any]:
        ...
