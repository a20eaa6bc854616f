"""
Authentication API routes
"""
from fastapi import APIRouter, Depends, Request, Response

from ..utils.logger import setup_logger
from ..models.auth import AnonymousSignInResponse, AuthStatus
from .session import SessionManager, get_session_manager

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["authentication"])


@router.post("/anonymous", response_model=AnonymousSignInResponse)
async def sign_in_anonymously(
    request: Request,
    response: Response,
    session_manager: SessionManager = Depends(get_session_manager)
):
    """
    Anonymous sign-in

    A caller that already holds a valid session keeps its user id and gets
    a renewed token, so boards survive across sign-ins on the same device.
    """
    existing = session_manager.get_identity_from_request(request)
    token, identity = session_manager.issue_token(existing.user_id if existing else None)
    session_manager.set_session_cookie(response, token)

    return AnonymousSignInResponse(
        user_id=identity.user_id,
        token=token,
        expires_at=identity.expires_at
    )


@router.get("/status", response_model=AuthStatus)
async def auth_status(
    request: Request,
    session_manager: SessionManager = Depends(get_session_manager)
):
    return session_manager.get_auth_status(request)


@router.post("/logout")
async def logout(
    response: Response,
    session_manager: SessionManager = Depends(get_session_manager)
):
    """Drop the session cookie; the anonymous id is not recoverable afterwards"""
    session_manager.clear_session_cookie(response)
    return {"success": True}
