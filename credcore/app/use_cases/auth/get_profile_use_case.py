from uuid import UUID

from credcore.app.services.unit_of_work import UnitOfWork
from credcore.libs.result import Error, Result, Return
from .dtos import ProfileResponse, account_info


class GetProfileUseCase:
    """Returns the current account without any credential material."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID) -> Result[ProfileResponse]:
        async with self.uow:
            account = await self.uow.accounts.get_by_id(account_id)
            if account is None:
                return Return.err(Error("ACCOUNT_NOT_FOUND", "Account not found"))

            return Return.ok(
                ProfileResponse(
                    **account_info(account).model_dump(),
                    created_at=account.created_at,
                    last_login_at=account.last_login_at,
                )
            )
