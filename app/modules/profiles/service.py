from supabase import Client
from app.modules.profiles.schemas import ProfileResponse
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_profile(self, user_id: str) -> Optional[ProfileResponse]:
        """Get profile by user ID. None when the row is missing or the query fails."""
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .eq("id", user_id)\
                .limit(1)\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching profile {user_id}: {e}")
            return None

        if not result.data:
            logger.warning(f"No profile row for user {user_id}")
            return None
        return ProfileResponse(**result.data[0])
