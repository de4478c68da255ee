"""
Sweep Expired Sessions Use Case

Periodic maintenance run by the background sweeper.
"""

import logging

from credcore.app.services.unit_of_work import UnitOfWork
from credcore.libs.result import Result, Return
from .dtos import SweepResult

logger = logging.getLogger(__name__)


class SweepExpiredSessionsUseCase:
    """
    Delete sessions and password reset tokens past their expiry.

    Idempotent: running it twice in a row deletes nothing the second time.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[SweepResult]:
        async with self.uow:
            sessions_deleted = await self.uow.sessions.sweep_expired()
            reset_tokens_deleted = await self.uow.password_reset_tokens.sweep_expired()
            await self.uow.commit()

        if sessions_deleted or reset_tokens_deleted:
            logger.info(
                f"Swept {sessions_deleted} expired session(s) and "
                f"{reset_tokens_deleted} reset token(s)"
            )
        return Return.ok(
            SweepResult(
                sessions_deleted=sessions_deleted,
                reset_tokens_deleted=reset_tokens_deleted,
            )
        )
