"""
PasswordResetToken Entity

Single-use, time-boxed credential-reset tokens.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from credcore.domain.base import utcnow


class PasswordResetToken(SQLModel, table=True):
    """
    PasswordResetToken entity - persisted half of a signed reset token.

    Business Rules:
    - Token is a signed JWT (type=reset); only its SHA-256 hash is stored
    - Expires after PASSWORD_RESET_TTL_MINUTES (default 1 hour)
    - used flips false -> true exactly once and never reverts
    - Expired and used tokens are rejected with the same error
    """

    __tablename__ = "password_reset_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    account_id: UUID = Field(foreign_key="accounts.id", index=True)
    token_hash: str = Field(unique=True, max_length=64)  # SHA-256 output

    used: bool = Field(default=False)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_password_reset_expires_at", "expires_at"),
        Index("idx_password_reset_used", "used"),
    )
