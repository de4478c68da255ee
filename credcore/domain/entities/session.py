"""
Session Entity

Durable record linking an account to its currently valid token pair.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from credcore.domain.base import utcnow


class Session(SQLModel, table=True):
    """
    Session entity - one row per login/registration.

    Business Rules:
    - Token handles are SHA-256 digests, raw tokens are never stored
    - Both handles are globally unique (enforced by the database)
    - A session is valid iff now < expires_at
    - Refresh rotates the access handle in place, the row id never changes
    - Logout, password reset and the expiry sweep delete rows
    """

    __tablename__ = "sessions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    account_id: UUID = Field(foreign_key="accounts.id", nullable=False, index=True)

    access_token_handle: str = Field(unique=True, max_length=64)
    refresh_token_handle: str = Field(unique=True, max_length=64)

    ip_address: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)

    # Timestamps
    issued_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    last_used_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_session_expires_at", "expires_at"),
        Index("idx_session_account_last_used", "account_id", "last_used_at"),
    )

    def is_valid(self, now: Optional[datetime] = None) -> bool:
        return (now or utcnow()) < self.expires_at
