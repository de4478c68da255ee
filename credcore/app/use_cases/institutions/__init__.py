"""
Linked Institution Use Cases
"""

from .link_institution_use_case import LinkInstitutionUseCase
from .list_institutions_use_case import ListInstitutionsUseCase
from .unlink_institution_use_case import UnlinkInstitutionUseCase
from .load_institution_credential_use_case import LoadInstitutionCredentialUseCase
from .dtos import InstitutionInfo, InstitutionListResponse, LinkInstitutionCommand

__all__ = [
    "LinkInstitutionUseCase",
    "ListInstitutionsUseCase",
    "UnlinkInstitutionUseCase",
    "LoadInstitutionCredentialUseCase",
    "LinkInstitutionCommand",
    "InstitutionInfo",
    "InstitutionListResponse",
]
