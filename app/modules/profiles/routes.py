from fastapi import APIRouter, Depends, HTTPException, status
from app.database.supabase_client import get_supabase
from app.core.dependencies import get_current_principal
from app.modules.auth.schemas import Principal
from app.modules.profiles.schemas import ProfileResponse
from app.modules.profiles.service import ProfileService
from supabase import Client

router = APIRouter(prefix="/profiles", tags=["profiles"])


def get_profile_service(supabase: Client = Depends(get_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    principal: Principal = Depends(get_current_principal),
    service: ProfileService = Depends(get_profile_service)
):
    """Profile of the signed-in user"""
    profile = service.get_profile(principal.id)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found. Please try refreshing the page."
        )
    return profile
