from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from credcore.app.repositories.linked_institution_repository import (
    ILinkedInstitutionRepository,
)
from credcore.domain.entities import LinkedInstitution


class LinkedInstitutionRepository(ILinkedInstitutionRepository):
    """LinkedInstitution repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, account_id: UUID, link_id: UUID) -> Optional[LinkedInstitution]:
        stmt = select(LinkedInstitution).where(
            LinkedInstitution.id == link_id, LinkedInstitution.account_id == account_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_item_id(self, account_id: UUID, item_id: str) -> Optional[LinkedInstitution]:
        stmt = select(LinkedInstitution).where(
            LinkedInstitution.account_id == account_id,
            LinkedInstitution.item_id == item_id,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_account(self, account_id: UUID) -> List[LinkedInstitution]:
        stmt = (
            select(LinkedInstitution)
            .where(LinkedInstitution.account_id == account_id)
            .order_by(LinkedInstitution.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def save(self, link: LinkedInstitution) -> LinkedInstitution:
        self.session.add(link)
        await self.session.flush()
        await self.session.refresh(link)
        return link

    async def delete(self, account_id: UUID, link_id: UUID) -> bool:
        stmt = delete(LinkedInstitution).where(
            LinkedInstitution.id == link_id, LinkedInstitution.account_id == account_id
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0
