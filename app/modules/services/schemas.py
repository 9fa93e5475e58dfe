from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Union
from datetime import datetime
from enum import Enum
from app.modules.services.tags import normalize_tags


class ServiceCategory(str, Enum):
    WEB_DEVELOPMENT = "web_development"
    MOBILE_DEVELOPMENT = "mobile_development"
    DESIGN = "design"
    WRITING = "writing"
    MARKETING = "marketing"
    CONSULTING = "consulting"
    PHOTOGRAPHY = "photography"
    VIDEO_EDITING = "video_editing"
    MUSIC = "music"
    TRANSLATION = "translation"
    OTHER = "other"

    @property
    def label(self) -> str:
        return format_category(self.value)


def format_category(category: str) -> str:
    """web_development -> Web Development"""
    return " ".join(word[:1].upper() + word[1:] for word in category.split("_"))


class CategoryOption(BaseModel):
    value: str
    label: str


class CreatorSummary(BaseModel):
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None


class ServiceResponse(BaseModel):
    id: str
    title: str
    description: str
    category: str
    price: float
    delivery_time: int
    image_url: Optional[str] = None
    tags: Optional[List[str]] = None
    is_active: bool
    creator_id: Optional[str] = None
    created_at: datetime
    creator: Optional[CreatorSummary] = Field(default=None, validation_alias="profiles")

    class Config:
        from_attributes = True
        populate_by_name = True


class ServiceCreate(BaseModel):
    """Create-service form. price and delivery_time arrive as typed in the form."""
    title: str
    description: str
    category: ServiceCategory
    price: Union[float, str]
    delivery_time: Union[int, str]
    image_url: Optional[str] = ""
    tags: List[str] = []

    @field_validator("tags")
    @classmethod
    def cap_tags(cls, v: List[str]) -> List[str]:
        return normalize_tags(v)


class ServiceStatusToggle(BaseModel):
    current_status: bool
