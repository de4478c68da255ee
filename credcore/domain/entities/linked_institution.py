"""
LinkedInstitution Entity

Third-party institution link holding an encrypted access credential.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel, UniqueConstraint

from credcore.domain.base import utcnow


class LinkedInstitution(SQLModel, table=True):
    """
    LinkedInstitution entity - at-rest storage of a third-party credential.

    Business Rules:
    - encrypted_access_token is "<nonce>:<ciphertext>" from SecretCipher
    - Relinking the same item replaces the encrypted value, never merges
    - The encrypted value never leaves the adapter layer except for decryption
    """

    __tablename__ = "linked_institutions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    account_id: UUID = Field(foreign_key="accounts.id", index=True)
    item_id: str = Field(max_length=255)
    institution_name: str = Field(default="", max_length=255)

    encrypted_access_token: str

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        UniqueConstraint("account_id", "item_id", name="uq_linked_institution_item"),
    )
