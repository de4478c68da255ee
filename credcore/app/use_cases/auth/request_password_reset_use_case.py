"""
Request Password Reset Use Case

Issues a single-use, time-boxed reset token without revealing whether the
account exists.
"""

import logging
from datetime import timedelta

from credcore.app.services.reset_token_sender import IResetTokenSender
from credcore.app.services.token_service import TokenService
from credcore.app.services.unit_of_work import UnitOfWork
from credcore.domain.base import token_handle, utcnow
from credcore.domain.entities import PasswordResetToken, TokenType
from credcore.libs.result import Result, Return
from .dtos import RequestPasswordResetResponse

logger = logging.getLogger(__name__)

GENERIC_RESPONSE = RequestPasswordResetResponse(
    status="sent",
    message="If an account with that email exists, a password reset link has been sent.",
)


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Reset token is a signed JWT with type=reset
    - Only the SHA-256 hash of the token is stored
    - Token expires after the configured TTL (1 hour by default)
    - No email enumeration (same response for valid/invalid/inactive emails)
    - Rate limiting is handled in front of this use case
    - The raw token goes only to the reset token sender
    """

    def __init__(
        self,
        uow: UnitOfWork,
        token_service: TokenService,
        sender: IResetTokenSender,
        ttl: timedelta = timedelta(hours=1),
    ):
        self.uow = uow
        self.token_service = token_service
        self.sender = sender
        self.ttl = ttl

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        async with self.uow:
            account = await self.uow.accounts.get_by_email(email)

            if account is None or not account.is_active:
                return Return.ok(GENERIC_RESPONSE)

            reset_token = self.token_service.issue(
                account.id, account.role, TokenType.reset, self.ttl
            )

            await self.uow.password_reset_tokens.create(
                PasswordResetToken(
                    account_id=account.id,
                    token_hash=token_handle(reset_token),
                    used=False,
                    expires_at=utcnow() + self.ttl,
                )
            )

            await self.uow.commit()

        try:
            await self.sender.send(account, reset_token)
        except Exception:
            # Same response as the unknown-email case
            logger.exception(f"Failed to deliver password reset for account {account.id}")

        return Return.ok(GENERIC_RESPONSE)
