from fastapi import APIRouter, Depends
from app.database.supabase_client import get_supabase
from app.core.dependencies import require_capability, get_current_principal
from app.modules.auth.schemas import Principal
from app.modules.services.schemas import (
    CategoryOption, ServiceCreate, ServiceResponse, ServiceStatusToggle
)
from app.modules.services.service import ServiceCatalogService
from supabase import Client
from typing import List, Optional

router = APIRouter(prefix="/services", tags=["services"])


def get_catalog_service(supabase: Client = Depends(get_supabase)) -> ServiceCatalogService:
    return ServiceCatalogService(supabase)


@router.get("", response_model=List[ServiceResponse])
async def browse_services(
    category: Optional[str] = "all",
    search: Optional[str] = None,
    service: ServiceCatalogService = Depends(get_catalog_service)
):
    """Browse active services, optionally by category and free-text search"""
    return service.browse(category=category, search=search)


@router.get("/categories", response_model=List[CategoryOption])
async def list_categories():
    """Service categories with display labels"""
    return ServiceCatalogService.categories()


@router.post("", response_model=ServiceResponse, status_code=201)
async def create_service(
    service_data: ServiceCreate,
    principal: Principal = Depends(require_capability("services:create")),
    service: ServiceCatalogService = Depends(get_catalog_service)
):
    """Publish a new service (creators and admin)"""
    return service.create_service(principal.id, service_data)


@router.get("/mine", response_model=List[ServiceResponse])
async def list_my_services(
    principal: Principal = Depends(get_current_principal),
    service: ServiceCatalogService = Depends(get_catalog_service)
):
    """Own services for creators, every service for admin"""
    return service.list_for_principal(principal)


@router.post("/{service_id}/toggle", response_model=ServiceResponse)
async def toggle_service_status(
    service_id: str,
    toggle: ServiceStatusToggle,
    principal: Principal = Depends(require_capability("services:toggle")),
    service: ServiceCatalogService = Depends(get_catalog_service)
):
    """Activate or deactivate a service"""
    return service.toggle_status(service_id, toggle.current_status, principal)
