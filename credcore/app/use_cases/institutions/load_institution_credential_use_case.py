"""
Load Institution Credential Use Case

The single place where a stored credential is decrypted.
"""

import logging
from uuid import UUID

from credcore.app.errors import DecryptionError
from credcore.app.services.secret_cipher import SecretCipher
from credcore.app.services.unit_of_work import UnitOfWork
from credcore.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class LoadInstitutionCredentialUseCase:
    """
    Decrypt the credential of one linked institution for a downstream call.

    Business Rules:
    - Only the owning account can load the credential
    - A credential that fails authentication is unavailable, never partially
      returned; the failure is logged without the ciphertext or plaintext
    """

    def __init__(self, uow: UnitOfWork, cipher: SecretCipher):
        self.uow = uow
        self.cipher = cipher

    async def execute(self, account_id: UUID, link_id: UUID) -> Result[str]:
        async with self.uow:
            link = await self.uow.linked_institutions.get_by_id(account_id, link_id)

        if link is None:
            return Return.err(Error("INSTITUTION_NOT_FOUND", "Institution not found"))

        try:
            return Return.ok(self.cipher.decrypt(link.encrypted_access_token))
        except DecryptionError as exc:
            logger.error(f"Stored credential for institution {link.id} is unreadable: {exc}")
            return Return.err(
                Error("CREDENTIAL_UNAVAILABLE", "Institution credential is unavailable")
            )
