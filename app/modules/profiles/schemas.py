from pydantic import BaseModel
from typing import Optional, Literal
from datetime import datetime


class ProfileResponse(BaseModel):
    id: str
    full_name: str
    user_type: Literal["creator", "client"]
    email: str
    bio: Optional[str] = None
    location: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
