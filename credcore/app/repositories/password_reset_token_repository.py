from abc import ABC, abstractmethod
from typing import Optional

from credcore.domain.entities import PasswordResetToken


class IPasswordResetTokenRepository(ABC):
    """PasswordResetToken repository interface - application layer"""

    @abstractmethod
    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        pass

    @abstractmethod
    async def consume(self, token_hash: str) -> Optional[PasswordResetToken]:
        """
        Flip used to True if the token exists, is unused and unexpired.

        Single conditional update; returns None when nothing matched.
        """
        pass

    @abstractmethod
    async def sweep_expired(self) -> int:
        """Delete tokens past expiry. Returns count deleted."""
        pass
