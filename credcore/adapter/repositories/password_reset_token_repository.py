from typing import Optional

from sqlalchemy import delete, update
from sqlmodel.ext.asyncio.session import AsyncSession

from credcore.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from credcore.domain.base import utcnow
from credcore.domain.entities import PasswordResetToken


class PasswordResetTokenRepository(IPasswordResetTokenRepository):
    """PasswordResetToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def consume(self, token_hash: str) -> Optional[PasswordResetToken]:
        """Mark an unused, unexpired token as used in a single statement"""
        stmt = (
            update(PasswordResetToken)
            .where(
                PasswordResetToken.token_hash == token_hash,
                PasswordResetToken.used == False,  # noqa: E712
                PasswordResetToken.expires_at > utcnow(),
            )
            .values(used=True)
            .returning(PasswordResetToken)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def sweep_expired(self) -> int:
        stmt = delete(PasswordResetToken).where(PasswordResetToken.expires_at <= utcnow())
        result = await self.session.execute(stmt)
        return result.rowcount
