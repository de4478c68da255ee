from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from credcore.domain.entities import LinkedInstitution


class ILinkedInstitutionRepository(ABC):
    """LinkedInstitution repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, account_id: UUID, link_id: UUID) -> Optional[LinkedInstitution]:
        """Get a link owned by the account"""
        pass

    @abstractmethod
    async def get_by_item_id(self, account_id: UUID, item_id: str) -> Optional[LinkedInstitution]:
        """Get a link by the institution's item identifier"""
        pass

    @abstractmethod
    async def list_by_account(self, account_id: UUID) -> List[LinkedInstitution]:
        """All links of an account"""
        pass

    @abstractmethod
    async def save(self, link: LinkedInstitution) -> LinkedInstitution:
        """Create or update a link"""
        pass

    @abstractmethod
    async def delete(self, account_id: UUID, link_id: UUID) -> bool:
        """Delete a link owned by the account"""
        pass
