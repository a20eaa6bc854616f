"""
Authentication module for Aramiyot

This module provides:
- Anonymous sign-in with signed session tokens
- Cookie and Bearer token resolution
- FastAPI dependencies for the current user
"""

from .session import SessionManager, get_session_manager, require_user_id
from .routes import router as auth_router

__all__ = [
    'SessionManager',
    'get_session_manager',
    'require_user_id',
    'auth_router'
]
