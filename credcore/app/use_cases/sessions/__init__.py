"""
Session Management Use Cases
"""

from .list_sessions_use_case import ListSessionsUseCase
from .revoke_sessions_use_case import RevokeSessionsUseCase
from .sweep_expired_sessions_use_case import SweepExpiredSessionsUseCase
from .dtos import SessionInfo, SessionListResponse, RevokeSessionsResponse, SweepResult

__all__ = [
    "ListSessionsUseCase",
    "RevokeSessionsUseCase",
    "SweepExpiredSessionsUseCase",
    "SessionInfo",
    "SessionListResponse",
    "RevokeSessionsResponse",
    "SweepResult",
]
