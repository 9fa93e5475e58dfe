from supabase import Client
from app.config.permissions_config import role_has_capability
from app.core import notifications
from app.modules.auth.schemas import Principal
from app.modules.services.schemas import (
    ServiceCategory, CategoryOption, ServiceCreate, ServiceResponse
)
from typing import Callable, List, Optional, Union
from fastapi import HTTPException
import logging
import re

logger = logging.getLogger(__name__)

BROWSE_COLUMNS = "*, profiles(full_name, avatar_url)"

# Characters that would break a PostgREST or=(...) filter
_FILTER_UNSAFE = re.compile(r"[,()%*\\]")


def parse_number(value: Union[int, float, str, None], kind: Callable) -> Optional[Union[int, float]]:
    """Native numeric parse; an unparsable value becomes None and is left to the insert to reject"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return kind(value)
    try:
        return kind(value.strip())
    except (TypeError, ValueError):
        return None


def search_filter(term: Optional[str]) -> Optional[str]:
    cleaned = _FILTER_UNSAFE.sub(" ", term or "").strip()
    if not cleaned:
        return None
    return f"title.ilike.%{cleaned}%,description.ilike.%{cleaned}%"


class ServiceCatalogService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    @staticmethod
    def categories() -> List[CategoryOption]:
        return [CategoryOption(value=c.value, label=c.label) for c in ServiceCategory]

    def browse(self, category: Optional[str] = None, search: Optional[str] = None) -> List[ServiceResponse]:
        """Active services with their creator, newest first. Query failures yield an empty list."""
        try:
            query = self.supabase.table("services")\
                .select(BROWSE_COLUMNS)\
                .eq("is_active", True)
            if category and category != "all":
                query = query.eq("category", category)
            or_filter = search_filter(search)
            if or_filter:
                query = query.or_(or_filter)
            result = query.order("created_at", desc=True).execute()
            return [ServiceResponse(**service) for service in result.data or []]
        except Exception as e:
            logger.error(f"Error fetching services: {e}")
            return []

    def create_service(self, creator_id: str, service_data: ServiceCreate) -> ServiceResponse:
        """Insert a new active listing owned by creator_id"""
        row = {
            "creator_id": creator_id,
            "title": service_data.title,
            "description": service_data.description,
            "category": service_data.category.value,
            "price": parse_number(service_data.price, float),
            "delivery_time": parse_number(service_data.delivery_time, int),
            "image_url": service_data.image_url or None,
            "tags": service_data.tags or None,
            "is_active": True,
        }
        try:
            result = self.supabase.table("services").insert(row).execute()
        except Exception as e:
            logger.error(f"Error creating service: {e}")
            result = None

        if not result or not result.data:
            notification = notifications.Notification(
                title="Error creating service",
                description="Please try again later",
                variant="destructive",
            )
            raise HTTPException(status_code=400, detail=notification.model_dump())

        logger.info(f"Service {result.data[0].get('id')} created by {creator_id}")
        return ServiceResponse(**result.data[0])

    def list_for_principal(self, principal: Principal) -> List[ServiceResponse]:
        """Admin: every listing. Creator: own listings. Client: none."""
        if not role_has_capability(principal.role, "services:toggle"):
            return []
        try:
            query = self.supabase.table("services").select("*")
            if not role_has_capability(principal.role, "services:manage_all"):
                query = query.eq("creator_id", principal.id)
            result = query.order("created_at", desc=True).execute()
            return [ServiceResponse(**service) for service in result.data or []]
        except Exception as e:
            logger.error(f"Error fetching services for {principal.id}: {e}")
            return []

    def toggle_status(self, service_id: str, current_status: bool, principal: Principal) -> ServiceResponse:
        """Flip is_active relative to the status the caller last saw"""
        try:
            query = self.supabase.table("services")\
                .update({"is_active": not current_status})\
                .eq("id", service_id)
            if not role_has_capability(principal.role, "services:manage_all"):
                query = query.eq("creator_id", principal.id)
            result = query.execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Service not found")

            return ServiceResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error updating service {service_id}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
