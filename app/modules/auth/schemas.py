from pydantic import BaseModel, EmailStr, Field
from typing import Optional, Dict, Any, List, Literal
from app.config.permissions_config import Role
from app.core.notifications import Notification


class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    full_name: str
    user_type: Literal["client", "creator"] = "client"


class SignInRequest(BaseModel):
    email: EmailStr
    password: str


class SessionUser(BaseModel):
    id: str
    email: Optional[str] = None
    user_metadata: Dict[str, Any] = {}

    class Config:
        frozen = True


class SessionInfo(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None
    user: Optional[SessionUser] = None

    class Config:
        frozen = True


class AuthResult(BaseModel):
    ok: bool
    error: Optional[str] = None
    notification: Optional[Notification] = None
    session: Optional[SessionInfo] = None


class SessionState(BaseModel):
    """Snapshot of the synchronizer; replaced, never mutated"""
    user: Optional[SessionUser] = None
    session: Optional[SessionInfo] = None
    resolving: bool = True
    role: Optional[Role] = None

    class Config:
        frozen = True


class SessionStatus(BaseModel):
    """Public view of the synchronizer state. Carries no tokens."""
    resolving: bool
    role: Optional[Role] = None
    user_id: Optional[str] = None
    email: Optional[str] = None

    @classmethod
    def from_state(cls, state: SessionState) -> "SessionStatus":
        return cls(
            resolving=state.resolving,
            role=state.role,
            user_id=state.user.id if state.user else None,
            email=state.user.email if state.user else None,
        )


class Principal(BaseModel):
    id: str
    email: Optional[str] = None
    role: Role
    user_metadata: Dict[str, Any] = {}


class PrincipalResponse(Principal):
    capabilities: List[str]
