"""
Confirm Password Reset Use Case

Consumes a reset token and replaces the account password.
"""

import logging

import bcrypt

from credcore.app.errors import AuthenticationError
from credcore.app.services.timeouts import DEFAULT_STORE_TIMEOUT, with_store_timeout
from credcore.app.services.token_service import TokenService
from credcore.app.services.unit_of_work import UnitOfWork
from credcore.domain.base import token_handle
from credcore.domain.entities import TokenType
from credcore.libs.result import Error, Result, Return
from .dtos import ConfirmPasswordResetResponse
from .register_use_case import MIN_PASSWORD_LENGTH

logger = logging.getLogger(__name__)

INVALID_TOKEN = Error("INVALID_TOKEN", "Invalid or expired token")


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - New password must be at least 8 characters
    - Signature, expiry, existence and prior use of the token all fail with
      the same INVALID_TOKEN error
    - The token is consumed by one conditional update, so it succeeds once
    - Password is hashed with bcrypt (cost factor 12)
    - All sessions of the account are revoked in the same transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_service: TokenService,
        store_timeout: float = DEFAULT_STORE_TIMEOUT,
    ):
        self.uow = uow
        self.token_service = token_service
        self.store_timeout = store_timeout

    async def execute(self, token: str, new_password: str) -> Result[ConfirmPasswordResetResponse]:
        """
        Execute confirm password reset use case.

        Args:
            token: Password reset token as delivered to the user
            new_password: New password to set

        Returns:
            Result with confirmation status, or Error

        Errors:
            - INVALID_PASSWORD: Password does not meet complexity requirements
            - INVALID_TOKEN: Token invalid, expired or already used
        """
        if len(new_password) < MIN_PASSWORD_LENGTH:
            return Return.err(
                Error(
                    "INVALID_PASSWORD",
                    f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
                )
            )

        try:
            claims = self.token_service.verify(token, TokenType.reset)
        except AuthenticationError as exc:
            logger.warning(f"Password reset rejected: {exc.reason}")
            return Return.err(INVALID_TOKEN)

        async with self.uow:
            reset_token = await with_store_timeout(
                self.uow.password_reset_tokens.consume(token_handle(token)),
                self.store_timeout,
            )
            if reset_token is None or reset_token.account_id != claims.account_id:
                logger.warning(f"Password reset rejected for {claims.account_id}: not consumable")
                return Return.err(INVALID_TOKEN)

            account = await self.uow.accounts.get_by_id(reset_token.account_id)
            if account is None or not account.is_active:
                return Return.err(INVALID_TOKEN)

            password_hash = bcrypt.hashpw(new_password.encode(), bcrypt.gensalt(12))
            account.password_hash = password_hash.decode()
            await self.uow.accounts.update(account)

            revoked_count = await with_store_timeout(
                self.uow.sessions.revoke_all(account.id), self.store_timeout
            )

            await self.uow.commit()

        logger.info(
            f"Password reset for account {account.id}, {revoked_count} session(s) revoked"
        )
        return Return.ok(
            ConfirmPasswordResetResponse(
                status="success",
                message="Password has been reset successfully",
            )
        )
