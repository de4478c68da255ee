from abc import ABC, abstractmethod

from credcore.domain.entities import Account


class IResetTokenSender(ABC):
    """Delivers a raw password reset token to the account owner"""

    @abstractmethod
    async def send(self, account: Account, reset_token: str) -> None:
        pass
