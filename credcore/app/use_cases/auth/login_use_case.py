"""
Login Use Case

Handles account authentication and returns a bearer token pair.
"""

import logging

import bcrypt

from credcore.app.errors import DuplicateToken
from credcore.app.repositories.session_repository import ClientMeta
from credcore.app.services.token_service import TokenService
from credcore.app.services.unit_of_work import UnitOfWork
from credcore.domain.base import utcnow
from credcore.libs.result import Error, Result, Return
from .dtos import AuthTokensResponse
from .issue_session import issue_session

logger = logging.getLogger(__name__)

# Compared against when the email is unknown so both paths cost one bcrypt check
_DUMMY_HASH = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(12))


class LoginUseCase:
    """
    Use case for account login and token issuance.

    Business Rules:
    - Rate limiting is evaluated by the caller before this runs
    - Constant-time password comparison, also for unknown emails
    - Account must be active
    - Creates a new session holding both token handles
    - Updates account.last_login_at
    """

    def __init__(self, uow: UnitOfWork, token_service: TokenService):
        self.uow = uow
        self.token_service = token_service

    async def execute(
        self, email: str, password: str, client_meta: ClientMeta
    ) -> Result[AuthTokensResponse]:
        """
        Execute login use case.

        Args:
            email: Account email
            password: Plain text password
            client_meta: IP address and user agent of the request

        Returns:
            Result with AuthTokensResponse, or Error
        """
        async with self.uow:
            account = await self.uow.accounts.get_by_email(email)

            if account is None:
                bcrypt.checkpw(password.encode(), _DUMMY_HASH)
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            password_valid = bcrypt.checkpw(
                password.encode(), account.password_hash.encode()
            )
            if not password_valid:
                logger.info(f"Failed login for account {account.id}")
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            if not account.is_active:
                return Return.err(Error("ACCOUNT_DISABLED", "Account is disabled"))

            try:
                response = await issue_session(
                    self.uow, self.token_service, account, client_meta
                )
            except DuplicateToken:
                logger.error(f"Token handle collision during login for account {account.id}")
                return Return.err(Error("SESSION_CONFLICT", "Could not create session"))

            account.last_login_at = utcnow()
            await self.uow.accounts.update(account)

            await self.uow.commit()

            return Return.ok(response)
