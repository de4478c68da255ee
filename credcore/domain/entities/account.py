"""
Account Entity

Identity record owned by the identity subsystem.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from credcore.domain.base import utcnow
from .enums import AccountRole


class Account(SQLModel, table=True):
    """
    Account entity - identity record with a salted adaptive password hash.

    Business Rules:
    - Email is unique and stored lower-cased
    - Password stored as bcrypt hash (cost factor 12)
    - Inactive accounts cannot log in or reset their password
    - Only credential fields and last_login_at are written by this core
    """

    __tablename__ = "accounts"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    first_name: str = Field(default="", max_length=100)
    last_name: str = Field(default="", max_length=100)

    role: AccountRole = Field(default=AccountRole.free)
    is_active: bool = Field(default=True)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    last_login_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_account_role", "role"),)
