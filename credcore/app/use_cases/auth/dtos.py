"""
Authentication Use Case DTOs (Data Transfer Objects)

All Response classes for the auth domain.
Provides type safety and clear contracts between layers.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel


# ============================================================================
# Nested Models
# ============================================================================


class AccountInfo(BaseModel):
    """Account fields safe to return to the client"""

    id: str
    email: str
    first_name: str
    last_name: str
    role: str


class AuthContext(BaseModel):
    """Identity asserted to the rest of the application after verification"""

    account_id: UUID
    role: str
    session_id: UUID


# ============================================================================
# Response DTOs
# ============================================================================


class AuthTokensResponse(BaseModel):
    """Response for register and login use cases"""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int
    session_id: str
    account: AccountInfo


class RefreshTokenResponse(BaseModel):
    """Response for refresh token use case"""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    session_id: str


class ProfileResponse(AccountInfo):
    """Response for the current-account profile"""

    created_at: datetime
    last_login_at: Optional[datetime] = None


class LogoutResponse(BaseModel):
    """Response for logout use case"""

    status: str
    message: str


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case"""

    status: str
    message: str


class ConfirmPasswordResetResponse(BaseModel):
    """Response for confirm password reset use case"""

    status: str
    message: str


class ChangePasswordResponse(BaseModel):
    """Response for change password use case"""

    status: str
    message: str
    sessions_revoked: int


def account_info(account) -> AccountInfo:
    return AccountInfo(
        id=str(account.id),
        email=account.email,
        first_name=account.first_name,
        last_name=account.last_name,
        role=account.role.value if hasattr(account.role, "value") else account.role,
    )
