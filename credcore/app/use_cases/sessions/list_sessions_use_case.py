"""
List Sessions Use Case
"""

from uuid import UUID

from credcore.app.services.unit_of_work import UnitOfWork
from credcore.libs.result import Result, Return
from .dtos import SessionInfo, SessionListResponse


class ListSessionsUseCase:
    """
    List the unexpired sessions of an account, most recently used first.
    The caller's own session is flagged as current.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, account_id: UUID, current_session_id: UUID) -> Result[SessionListResponse]:
        async with self.uow:
            sessions = await self.uow.sessions.list_active(account_id)

        return Return.ok(
            SessionListResponse(
                sessions=[
                    SessionInfo(
                        id=str(s.id),
                        ip_address=s.ip_address,
                        user_agent=s.user_agent,
                        issued_at=s.issued_at,
                        last_used_at=s.last_used_at,
                        expires_at=s.expires_at,
                        current=s.id == current_session_id,
                    )
                    for s in sessions
                ]
            )
        )
