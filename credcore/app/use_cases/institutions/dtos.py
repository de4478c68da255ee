"""
Institution Use Case DTOs
"""

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field


class LinkInstitutionCommand(BaseModel):
    """Credential handed over after a successful third-party link"""

    item_id: str = Field(min_length=1, max_length=255)
    institution_name: str = Field(default="", max_length=255)
    access_token: str = Field(min_length=1)


class InstitutionInfo(BaseModel):
    """Linked institution without its credential"""

    id: str
    item_id: str
    institution_name: str
    created_at: datetime
    updated_at: datetime


class InstitutionListResponse(BaseModel):
    institutions: List[InstitutionInfo]


def institution_info(link) -> InstitutionInfo:
    return InstitutionInfo(
        id=str(link.id),
        item_id=link.item_id,
        institution_name=link.institution_name,
        created_at=link.created_at,
        updated_at=link.updated_at,
    )
