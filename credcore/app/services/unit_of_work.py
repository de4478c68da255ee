from abc import ABC, abstractmethod

from credcore.app.repositories.account_repository import IAccountRepository
from credcore.app.repositories.linked_institution_repository import (
    ILinkedInstitutionRepository,
)
from credcore.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from credcore.app.repositories.session_repository import ISessionRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    accounts: IAccountRepository
    sessions: ISessionRepository
    password_reset_tokens: IPasswordResetTokenRepository
    linked_institutions: ILinkedInstitutionRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
