import logging

import bcrypt

from credcore.app.errors import DuplicateToken
from credcore.app.repositories.session_repository import ClientMeta
from credcore.app.services.token_service import TokenService
from credcore.app.services.unit_of_work import UnitOfWork
from credcore.domain.entities import Account, AccountRole
from credcore.libs.result import Error, Result, Return
from .dtos import AuthTokensResponse
from .issue_session import issue_session
from .register_dto import RegisterCommand

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


class RegisterUseCase:
    """
    Register Use Case

    Command/Response Pattern:
    - Input: RegisterCommand (validated business intent)
    - Output: Result[AuthTokensResponse]

    Business Logic:
    1. Rate limiting already happened in front of this use case
    2. Reject duplicate email
    3. Hash password with bcrypt cost factor 12
    4. Create Account with role=free
    5. Issue access + refresh token pair and persist the session
    6. Commit transaction atomically
    """

    def __init__(self, uow: UnitOfWork, token_service: TokenService):
        self.uow = uow
        self.token_service = token_service

    async def execute(
        self, command: RegisterCommand, client_meta: ClientMeta
    ) -> Result[AuthTokensResponse]:
        if len(command.password) < MIN_PASSWORD_LENGTH:
            return Return.err(
                Error(
                    "INVALID_PASSWORD",
                    f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
                )
            )

        async with self.uow:
            existing = await self.uow.accounts.get_by_email(command.email)
            if existing:
                return Return.err(
                    Error("EMAIL_ALREADY_EXISTS", "An account with this email already exists")
                )

            password_hash = bcrypt.hashpw(
                command.password.encode("utf-8"), bcrypt.gensalt(12)
            )

            account = Account(
                email=command.email,
                password_hash=password_hash.decode("utf-8"),
                first_name=command.first_name,
                last_name=command.last_name,
                role=AccountRole.free,
            )
            account = await self.uow.accounts.create(account)

            try:
                response = await issue_session(
                    self.uow, self.token_service, account, client_meta
                )
            except DuplicateToken:
                logger.error(f"Token handle collision while registering account {account.id}")
                return Return.err(Error("SESSION_CONFLICT", "Could not create session"))

            await self.uow.commit()

            logger.info(f"Account registered: {account.id}")
            return Return.ok(response)
