import logging
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, update
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from credcore.app.errors import (
    DuplicateToken,
    SessionAlreadyRotated,
    SessionExpired,
    SessionNotFound,
)
from credcore.app.repositories.session_repository import ClientMeta, ISessionRepository
from credcore.domain.base import token_handle, utcnow
from credcore.domain.entities import Session

logger = logging.getLogger(__name__)


class SessionRepository(ISessionRepository):
    """Session store implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _get_by_handle(self, column, handle: str) -> Optional[Session]:
        stmt = (
            select(Session)
            .where(column == handle)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create_session(
        self,
        account_id: UUID,
        access_token: str,
        refresh_token: str,
        client_meta: ClientMeta,
        expires_at: datetime,
    ) -> Session:
        """Insert a session row; uniqueness of both handles is enforced by the database"""
        now = utcnow()
        if expires_at <= now:
            raise ValueError("Session expiry must be in the future")

        session_obj = Session(
            account_id=account_id,
            access_token_handle=token_handle(access_token),
            refresh_token_handle=token_handle(refresh_token),
            ip_address=client_meta.ip_address,
            user_agent=client_meta.user_agent,
            issued_at=now,
            last_used_at=now,
            expires_at=expires_at,
        )
        self.session.add(session_obj)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise DuplicateToken("Token handle already belongs to a session") from exc
        await self.session.refresh(session_obj)
        return session_obj

    async def validate_and_touch(self, access_token: str) -> Session:
        """Conditional update returning the touched row"""
        handle = token_handle(access_token)
        now = utcnow()

        stmt = (
            update(Session)
            .where(Session.access_token_handle == handle, Session.expires_at > now)
            .values(last_used_at=now)
            .returning(Session)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        session_obj = result.scalar_one_or_none()
        if session_obj is not None:
            return session_obj

        # Read-only classification of the failure
        existing = await self._get_by_handle(Session.access_token_handle, handle)
        if existing is None:
            raise SessionNotFound("No session for access token")
        raise SessionExpired("Session has expired")

    async def rotate(
        self, refresh_token: str, new_access_token: str, new_expires_at: datetime
    ) -> Session:
        """Compare-and-swap the access handle of the session owning refresh_token"""
        now = utcnow()
        current = await self._get_by_handle(
            Session.refresh_token_handle, token_handle(refresh_token)
        )
        if current is None:
            raise SessionNotFound("No session for refresh token")
        if not current.is_valid(now):
            raise SessionExpired("Session has expired")

        stmt = (
            update(Session)
            .where(
                Session.id == current.id,
                Session.access_token_handle == current.access_token_handle,
                Session.expires_at > now,
            )
            .values(
                access_token_handle=token_handle(new_access_token),
                expires_at=new_expires_at,
                last_used_at=now,
            )
            .returning(Session)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise DuplicateToken("Token handle already belongs to a session") from exc

        rotated = result.scalar_one_or_none()
        if rotated is None:
            logger.warning(f"Concurrent rotation detected for session {current.id}")
            raise SessionAlreadyRotated("Session was already rotated")
        return rotated

    async def revoke(self, access_token: str) -> bool:
        stmt = delete(Session).where(
            Session.access_token_handle == token_handle(access_token)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def revoke_all(self, account_id: UUID) -> int:
        stmt = delete(Session).where(Session.account_id == account_id)
        result = await self.session.execute(stmt)
        return result.rowcount

    async def revoke_all_except(self, account_id: UUID, session_id: UUID) -> int:
        stmt = delete(Session).where(
            Session.account_id == account_id, Session.id != session_id
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def revoke_by_id(self, account_id: UUID, session_id: UUID) -> bool:
        stmt = delete(Session).where(
            Session.id == session_id, Session.account_id == account_id
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def list_active(self, account_id: UUID) -> List[Session]:
        stmt = (
            select(Session)
            .where(Session.account_id == account_id, Session.expires_at > utcnow())
            .order_by(Session.last_used_at.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def sweep_expired(self) -> int:
        stmt = delete(Session).where(Session.expires_at <= utcnow())
        result = await self.session.execute(stmt)
        return result.rowcount
