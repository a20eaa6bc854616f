"""
Authentication related data models
"""
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class AnonymousIdentity(BaseModel):
    """Identity carried by a signed anonymous session token"""
    user_id: str = Field(..., alias="sub", description="Stable anonymous user id")
    issued_at: datetime = Field(..., description="Token issue time")
    expires_at: datetime = Field(..., description="Token expiration time")
    is_anonymous: bool = Field(default=True, description="Anonymous sign-in")

    class Config:
        populate_by_name = True


class AuthStatus(BaseModel):
    """Authentication status response"""
    is_authenticated: bool = Field(..., description="Authentication status")
    user_id: Optional[str] = Field(None, description="User ID if authenticated")
    is_anonymous: Optional[bool] = Field(None, description="Whether the identity is anonymous")
    session_expires_at: Optional[datetime] = Field(None, description="Session expiration time")


class AnonymousSignInResponse(BaseModel):
    """Anonymous sign-in result"""
    success: bool = Field(default=True, description="Sign-in success status")
    user_id: str = Field(..., description="Stable anonymous user id")
    token: str = Field(..., description="Signed session token, usable as a Bearer token")
    token_type: str = Field(default="Bearer", description="Token type")
    expires_at: datetime = Field(..., description="Token expiration time")
