"""
Session Use Case DTOs
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class SessionInfo(BaseModel):
    """Active session as shown to its owner (no token material)"""

    id: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    issued_at: datetime
    last_used_at: datetime
    expires_at: datetime
    current: bool = False


class SessionListResponse(BaseModel):
    sessions: List[SessionInfo]


class RevokeSessionsResponse(BaseModel):
    status: str
    sessions_revoked: int


class SweepResult(BaseModel):
    sessions_deleted: int
    reset_tokens_deleted: int
