from pydantic import BaseModel
from typing import Optional, List, Literal
from app.config.permissions_config import Role
from app.modules.profiles.schemas import ProfileResponse
from app.modules.services.schemas import ServiceResponse


class Action(BaseModel):
    label: str
    target: Optional[str] = None  # route path, "reload", or None for not-yet-wired actions
    variant: Literal["default", "outline"] = "default"


class StatCard(BaseModel):
    title: str
    value: str
    caption: str


class DashboardView(BaseModel):
    profile_missing: bool = False
    profile: Optional[ProfileResponse] = None
    role: Optional[Role] = None
    is_admin: bool = False
    is_creator: bool = False
    headline: str
    subtitle: str
    stats: List[StatCard] = []
    services_title: Optional[str] = None
    services_description: Optional[str] = None
    empty_message: Optional[str] = None
    services: List[ServiceResponse] = []
    can_create_service: bool = False
    primary_action: Optional[Action] = None
    quick_actions: List[Action] = []
