import logging

from credcore.app.services.reset_token_sender import IResetTokenSender
from credcore.domain.entities import Account

logger = logging.getLogger(__name__)


class LoggingResetTokenSender(IResetTokenSender):
    """
    Placeholder delivery until the mail integration is wired in.

    Logs that a reset was issued; the token itself is never logged.
    """

    async def send(self, account: Account, reset_token: str) -> None:
        logger.info(f"Password reset token issued for account {account.id}")
