"""
Core dependencies for route protection and capability checking
"""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.config.permissions_config import role_has_capability
from app.config.settings import settings
from app.database.supabase_client import get_supabase
from app.modules.auth.schemas import Principal
from app.modules.auth.service import AuthService
from app.modules.auth.session_sync import SessionSynchronizer
from supabase import Client
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_principal(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> Principal:
    """Resolve the bearer token to a Principal; role is resolved here and nowhere else"""
    return auth_service.get_current_user(credentials.credentials)


def require_capability(capability: str):
    """Factory function to create capability check dependency"""
    def check_capability(principal: Principal = Depends(get_current_principal)) -> Principal:
        if not role_has_capability(principal.role, capability):
            logger.info(f"User {principal.id} ({principal.role.value}) denied {capability}")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient permissions. Required: {capability}"
            )
        return principal
    return check_capability


def get_session_synchronizer(request: Request) -> SessionSynchronizer:
    """Process-wide synchronizer created at startup"""
    synchronizer = getattr(request.app.state, "session_sync", None)
    if synchronizer is None:
        if not settings.supabase_configured:
            logger.warning("Session requested but Supabase credentials are not configured")
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Authentication service is not configured"
            )
        synchronizer = SessionSynchronizer(get_supabase())
        synchronizer.start()
        request.app.state.session_sync = synchronizer
    return synchronizer
