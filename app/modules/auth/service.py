from supabase import Client
from fastapi import HTTPException
from app.modules.auth.roles import resolve_role_from_metadata
from app.modules.auth.schemas import Principal
import logging

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_current_user(self, token: str) -> Principal:
        """Resolve a bearer token to the signed-in user and their role"""
        try:
            user_response = self.supabase.auth.get_user(jwt=token)
            if not user_response or not user_response.user:
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            user = user_response.user
            user_metadata = user.user_metadata or {}
            return Principal(
                id=str(user.id),
                email=user.email,
                role=resolve_role_from_metadata(user.email, user_metadata),
                user_metadata=user_metadata,
            )
        except HTTPException:
            raise
        except Exception as e:
            error_msg = str(e)
            logger.warning(f"Token verification failed: {error_msg}")
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")
