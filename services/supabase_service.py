# services/supabase_service.py
from supabase import create_client, Client
import os
from typing import Dict, List, Optional, Any
from datetime import datetime

from services.errors import TransientIOError
from services.hydration_store import HydrationStore


class SupabaseService(HydrationStore):
    def __init__(self, url: Optional[str] = None, key: Optional[str] = None):
        url = url or os.getenv("SUPABASE_URL")
        key = key or os.getenv("SUPABASE_SERVICE_KEY")

        if not url or not key:
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_KEY must be set in environment variables")

        self.client: Client = create_client(url, key)
        print("✅ Supabase client initialized")

    # User operations
    async def get_user(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Get user profile row including streak state"""
        try:
            response = self.client.table('users').select('*').eq('id', user_id).execute()
            if response.data:
                return response.data[0]
            return None
        except Exception as e:
            print(f"❌ Error getting user: {e}")
            raise TransientIOError(f"Failed to get user: {str(e)}")

    async def upsert_user(self, user_data: Dict[str, Any]) -> Dict[str, Any]:
        """Create or replace the profile row handed over by the identity provider"""
        try:
            print(f"🔍 Upserting user in Supabase: {user_data.get('id')}")
            user_data['updated_at'] = datetime.utcnow().isoformat()

            response = self.client.table('users').upsert(user_data).execute()

            if response.data:
                print(f"✅ User saved: {response.data[0]['id']}")
                return response.data[0]
            else:
                raise Exception("No data returned from Supabase")

        except Exception as e:
            print(f"❌ Error upserting user in Supabase: {e}")
            raise TransientIOError(f"Failed to save user: {str(e)}")

    async def update_user(self, user_id: str, update_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Merge-write profile fields"""
        try:
            update_data['updated_at'] = datetime.utcnow().isoformat()

            response = self.client.table('users') \
                .update(update_data) \
                .eq('id', user_id) \
                .execute()

            if response.data and len(response.data) > 0:
                return response.data[0]
            else:
                return None

        except Exception as e:
            print(f"❌ Supabase update error: {str(e)}")
            raise TransientIOError(f"Failed to update user: {str(e)}")

    async def update_streak_if(
        self,
        user_id: str,
        expected_streak: Optional[int],
        expected_last_update: Optional[str],
        streak_data: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        """Write streak state only if the row still holds the streak state we read"""
        try:
            query = self.client.table('users') \
                .update(streak_data) \
                .eq('id', user_id)

            if expected_streak is None:
                query = query.is_('current_streak', 'null')
            else:
                query = query.eq('current_streak', expected_streak)

            if expected_last_update is None:
                query = query.is_('last_streak_update', 'null')
            else:
                query = query.eq('last_streak_update', expected_last_update)

            response = query.execute()
            return response.data[0] if response.data else None

        except Exception as e:
            print(f"❌ Error updating streak: {e}")
            raise TransientIOError(f"Failed to update streak: {str(e)}")

    async def list_users_by_streak(self) -> List[Dict[str, Any]]:
        """Users ordered by streak for the leaderboard, null streaks last"""
        try:
            response = self.client.table('users')\
                .select('id, name, current_streak')\
                .order('current_streak', desc=True, nullsfirst=False)\
                .order('id')\
                .execute()

            return response.data or []
        except Exception as e:
            print(f"❌ Error listing users by streak: {e}")
            raise TransientIOError(f"Failed to list users: {str(e)}")

    async def delete_user(self, user_id: str) -> bool:
        try:
            response = self.client.table('users')\
                .delete()\
                .eq('id', user_id)\
                .execute()

            return bool(response.data)
        except Exception as e:
            print(f"❌ Error deleting user: {e}")
            raise TransientIOError(f"Failed to delete user: {str(e)}")

    # Daily record operations
    async def get_daily_record(self, user_id: str, date_key: str) -> Optional[Dict[str, Any]]:
        """Get the daily record for a specific date"""
        try:
            response = self.client.table('daily_records')\
                .select('*')\
                .eq('user_id', user_id)\
                .eq('date', date_key)\
                .execute()

            if response.data:
                return response.data[0]
            return None
        except Exception as e:
            print(f"❌ Error getting daily record by date: {e}")
            raise TransientIOError(f"Failed to get daily record: {str(e)}")

    async def insert_daily_record_if_absent(self, record: Dict[str, Any]) -> None:
        """Create a daily record; an existing (user_id, date) row wins"""
        try:
            record['last_updated'] = datetime.utcnow().isoformat()
            self.client.table('daily_records')\
                .upsert(record, on_conflict='user_id,date', ignore_duplicates=True)\
                .execute()
        except Exception as e:
            print(f"❌ Error creating daily record: {e}")
            raise TransientIOError(f"Failed to create daily record: {str(e)}")

    async def update_daily_record_if(
        self,
        user_id: str,
        date_key: str,
        expected_completed_amount: int,
        update_data: Dict[str, Any],
    ) -> Optional[Dict[str, Any]]:
        """
        Update a daily record only if completed_amount still matches.

        Entries are append-only with positive amounts, so completed_amount
        strictly grows and works as a version number for the row.
        """
        try:
            update_data['last_updated'] = datetime.utcnow().isoformat()
            response = self.client.table('daily_records')\
                .update(update_data)\
                .eq('user_id', user_id)\
                .eq('date', date_key)\
                .eq('completed_amount', expected_completed_amount)\
                .execute()

            return response.data[0] if response.data else None
        except Exception as e:
            print(f"❌ Error updating daily record: {e}")
            raise TransientIOError(f"Failed to update daily record: {str(e)}")

    async def get_daily_records_in_range(self, user_id: str, start_key: str, end_key: str) -> List[Dict[str, Any]]:
        """Get daily records within a date range"""
        try:
            response = self.client.table('daily_records')\
                .select('*')\
                .eq('user_id', user_id)\
                .gte('date', start_key)\
                .lte('date', end_key)\
                .order('date', desc=False)\
                .execute()

            return response.data or []
        except Exception as e:
            print(f"❌ Error getting daily records in range: {e}")
            raise TransientIOError(f"Failed to get daily records: {str(e)}")

    async def delete_daily_records(self, user_id: str) -> int:
        try:
            response = self.client.table('daily_records')\
                .delete()\
                .eq('user_id', user_id)\
                .execute()

            return len(response.data or [])
        except Exception as e:
            print(f"❌ Error deleting daily records: {e}")
            raise TransientIOError(f"Failed to delete daily records: {str(e)}")

    # Health check method
    async def health_check(self) -> Dict[str, Any]:
        """Check if Supabase connection is working"""
        try:
            self.client.table('users').select('id').limit(1).execute()

            return {
                "status": "healthy",
                "message": "Supabase connection working",
                "timestamp": datetime.utcnow().isoformat()
            }

        except Exception as e:
            return {
                "status": "unhealthy",
                "message": f"Supabase connection failed: {str(e)}",
                "timestamp": datetime.utcnow().isoformat()
            }
