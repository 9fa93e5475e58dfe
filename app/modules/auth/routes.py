from fastapi import APIRouter, Depends, Response, status
from app.config.permissions_config import ROLE_CAPABILITIES
from app.core.dependencies import get_current_principal, get_session_synchronizer
from app.modules.auth.schemas import (
    SignUpRequest, SignInRequest, AuthResult, SessionStatus,
    Principal, PrincipalResponse
)
from app.modules.auth.session_sync import SessionSynchronizer

router = APIRouter(prefix="/auth", tags=["auth"])


def _with_status(result: AuthResult, response: Response) -> AuthResult:
    if not result.ok:
        response.status_code = status.HTTP_400_BAD_REQUEST
    return result


@router.post("/signup", response_model=AuthResult)
async def sign_up(
    sign_up_data: SignUpRequest,
    response: Response,
    synchronizer: SessionSynchronizer = Depends(get_session_synchronizer)
):
    """Register a client or creator account"""
    result = synchronizer.sign_up(
        sign_up_data.email,
        sign_up_data.password,
        sign_up_data.full_name,
        sign_up_data.user_type,
    )
    return _with_status(result, response)


@router.post("/signin", response_model=AuthResult)
async def sign_in(
    sign_in_data: SignInRequest,
    response: Response,
    synchronizer: SessionSynchronizer = Depends(get_session_synchronizer)
):
    """Sign in with email and password"""
    result = synchronizer.sign_in(sign_in_data.email, sign_in_data.password)
    return _with_status(result, response)


@router.post("/signout", response_model=AuthResult)
async def sign_out(
    response: Response,
    synchronizer: SessionSynchronizer = Depends(get_session_synchronizer)
):
    """End the current session"""
    return _with_status(synchronizer.sign_out(), response)


@router.get("/session", response_model=SessionStatus)
async def get_session_state(
    synchronizer: SessionSynchronizer = Depends(get_session_synchronizer)
):
    """Who is signed in and whether the session is still resolving; tokens are never exposed"""
    return SessionStatus.from_state(synchronizer.state)


@router.get("/me", response_model=PrincipalResponse)
async def get_current_user(principal: Principal = Depends(get_current_principal)):
    """Current authenticated user, resolved role and capabilities (for frontend UI)."""
    return PrincipalResponse(
        **principal.model_dump(),
        capabilities=sorted(ROLE_CAPABILITIES[principal.role]),
    )
