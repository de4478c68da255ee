"""
Link Institution Use Case

Encrypts a third-party access credential and stores it against the account.
"""

import logging
from uuid import UUID

from credcore.app.services.secret_cipher import SecretCipher
from credcore.app.services.unit_of_work import UnitOfWork
from credcore.domain.base import utcnow
from credcore.domain.entities import LinkedInstitution
from credcore.libs.result import Result, Return
from .dtos import InstitutionInfo, LinkInstitutionCommand, institution_info

logger = logging.getLogger(__name__)


class LinkInstitutionUseCase:
    """
    Use case for linking an institution.

    Business Rules:
    - The credential is encrypted before it reaches the repository
    - Linking an item that is already linked replaces the stored credential
    - The response never contains the credential
    """

    def __init__(self, uow: UnitOfWork, cipher: SecretCipher):
        self.uow = uow
        self.cipher = cipher

    async def execute(self, account_id: UUID, command: LinkInstitutionCommand) -> Result[InstitutionInfo]:
        encrypted = self.cipher.encrypt(command.access_token)

        async with self.uow:
            link = await self.uow.linked_institutions.get_by_item_id(account_id, command.item_id)
            if link is None:
                link = LinkedInstitution(
                    account_id=account_id,
                    item_id=command.item_id,
                    institution_name=command.institution_name,
                    encrypted_access_token=encrypted,
                )
            else:
                link.encrypted_access_token = encrypted
                if command.institution_name:
                    link.institution_name = command.institution_name
                link.updated_at = utcnow()

            link = await self.uow.linked_institutions.save(link)
            await self.uow.commit()

        logger.info(f"Linked institution item {link.item_id} for account {account_id}")
        return Return.ok(institution_info(link))
