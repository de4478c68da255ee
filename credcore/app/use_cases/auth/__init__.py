"""
Authentication Use Cases

All authentication-related business logic.
"""

from .register_use_case import RegisterUseCase
from .register_dto import RegisterCommand
from .login_use_case import LoginUseCase
from .refresh_token_use_case import RefreshTokenUseCase
from .validate_session_use_case import ValidateSessionUseCase
from .logout_use_case import LogoutUseCase
from .get_profile_use_case import GetProfileUseCase
from .change_password_use_case import ChangePasswordUseCase
from .request_password_reset_use_case import GENERIC_RESPONSE, RequestPasswordResetUseCase
from .confirm_password_reset_use_case import ConfirmPasswordResetUseCase
from .dtos import (
    AccountInfo,
    AuthContext,
    AuthTokensResponse,
    RefreshTokenResponse,
    ProfileResponse,
    LogoutResponse,
    ChangePasswordResponse,
    RequestPasswordResetResponse,
    ConfirmPasswordResetResponse,
)

__all__ = [
    # Use Cases
    "RegisterUseCase",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "ValidateSessionUseCase",
    "LogoutUseCase",
    "GetProfileUseCase",
    "ChangePasswordUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    # DTOs - Commands
    "RegisterCommand",
    # DTOs - Responses
    "AuthTokensResponse",
    "RefreshTokenResponse",
    "ProfileResponse",
    "LogoutResponse",
    "ChangePasswordResponse",
    "RequestPasswordResetResponse",
    "ConfirmPasswordResetResponse",
    "GENERIC_RESPONSE",
    # DTOs - Nested Models
    "AccountInfo",
    "AuthContext",
]
