"""
Change Password Use Case

Replaces the password of an authenticated account.
"""

from uuid import UUID

import bcrypt

from credcore.app.services.timeouts import DEFAULT_STORE_TIMEOUT, with_store_timeout
from credcore.app.services.unit_of_work import UnitOfWork
from credcore.libs.result import Error, Result, Return
from .dtos import ChangePasswordResponse
from .register_use_case import MIN_PASSWORD_LENGTH


class ChangePasswordUseCase:
    """
    Use case for changing a password while logged in.

    Business Rules:
    - Current password must match
    - New password must be at least 8 characters
    - Every other session of the account is revoked; the current one stays
    - Store calls run under the store timeout; StoreTimeout propagates
    """

    def __init__(self, uow: UnitOfWork, store_timeout: float = DEFAULT_STORE_TIMEOUT):
        self.uow = uow
        self.store_timeout = store_timeout

    async def execute(
        self,
        account_id: UUID,
        session_id: UUID,
        current_password: str,
        new_password: str,
    ) -> Result[ChangePasswordResponse]:
        if len(new_password) < MIN_PASSWORD_LENGTH:
            return Return.err(
                Error(
                    "INVALID_PASSWORD",
                    f"New password must be at least {MIN_PASSWORD_LENGTH} characters long",
                )
            )

        async with self.uow:
            account = await with_store_timeout(
                self.uow.accounts.get_by_id(account_id), self.store_timeout
            )
            if account is None:
                return Return.err(Error("ACCOUNT_NOT_FOUND", "Account not found"))

            if not bcrypt.checkpw(current_password.encode(), account.password_hash.encode()):
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Current password is incorrect")
                )

            password_hash = bcrypt.hashpw(new_password.encode(), bcrypt.gensalt(12))
            account.password_hash = password_hash.decode()
            await self.uow.accounts.update(account)

            revoked_count = await with_store_timeout(
                self.uow.sessions.revoke_all_except(account_id, session_id), self.store_timeout
            )

            await self.uow.commit()

            return Return.ok(
                ChangePasswordResponse(
                    status="success",
                    message="Password changed successfully",
                    sessions_revoked=revoked_count,
                )
            )
