from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.core.dependencies import require_capability
from app.modules.auth.schemas import Principal
from app.modules.dashboard.schemas import DashboardView
from app.modules.dashboard.service import DashboardService
from supabase import Client

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def get_dashboard_service(supabase: Client = Depends(get_supabase)) -> DashboardService:
    return DashboardService(supabase)


@router.get("", response_model=DashboardView)
async def get_dashboard(
    principal: Principal = Depends(require_capability("dashboard:view")),
    service: DashboardService = Depends(get_dashboard_service)
):
    """Role-specific dashboard, or the profile-not-found state"""
    return service.get_dashboard(principal)
