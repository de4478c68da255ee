"""
Unlink Institution Use Case
"""

import logging
from uuid import UUID

from credcore.app.services.unit_of_work import UnitOfWork
from credcore.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class UnlinkInstitutionUseCase:
    """Delete a linked institution and its stored credential"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID, link_id: UUID) -> Result[dict]:
        async with self.uow:
            deleted = await self.uow.linked_institutions.delete(account_id, link_id)
            if not deleted:
                return Return.err(Error("INSTITUTION_NOT_FOUND", "Institution not found"))
            await self.uow.commit()

        logger.info(f"Unlinked institution {link_id} for account {account_id}")
        return Return.ok({"status": "unlinked", "id": str(link_id)})
