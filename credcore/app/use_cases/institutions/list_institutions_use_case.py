"""
List Institutions Use Case
"""

from uuid import UUID

from credcore.app.services.unit_of_work import UnitOfWork
from credcore.libs.result import Result, Return
from .dtos import InstitutionListResponse, institution_info


class ListInstitutionsUseCase:
    """List the institutions linked to an account (credentials excluded)"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID) -> Result[InstitutionListResponse]:
        async with self.uow:
            links = await self.uow.linked_institutions.list_by_account(account_id)

        return Return.ok(
            InstitutionListResponse(institutions=[institution_info(link) for link in links])
        )
