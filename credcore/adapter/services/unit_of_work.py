from sqlmodel.ext.asyncio.session import AsyncSession

from credcore.adapter.repositories.account_repository import AccountRepository
from credcore.adapter.repositories.linked_institution_repository import (
    LinkedInstitutionRepository,
)
from credcore.adapter.repositories.password_reset_token_repository import PasswordResetTokenRepository
from credcore.adapter.repositories.session_repository import SessionRepository
from credcore.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.accounts = AccountRepository(self.session)
        self.sessions = SessionRepository(self.session)
        self.password_reset_tokens = PasswordResetTokenRepository(self.session)
        self.linked_institutions = LinkedInstitutionRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
