from credcore.app.services.timeouts import DEFAULT_STORE_TIMEOUT, with_store_timeout
from credcore.app.services.unit_of_work import UnitOfWork
from credcore.libs.result import Result, Return
from .dtos import LogoutResponse


class LogoutUseCase:
    """Deletes the session holding the presented access token."""

    def __init__(self, uow: UnitOfWork, store_timeout: float = DEFAULT_STORE_TIMEOUT):
        self.uow = uow
        self.store_timeout = store_timeout

    async def execute(self, access_token: str) -> Result[LogoutResponse]:
        async with self.uow:
            await with_store_timeout(
                self.uow.sessions.revoke(access_token), self.store_timeout
            )
            await self.uow.commit()

        return Return.ok(LogoutResponse(status="success", message="Logout successful"))
