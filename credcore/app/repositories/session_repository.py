from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from credcore.domain.entities import Session


@dataclass(frozen=True)
class ClientMeta:
    """Network origin of the request that created a session"""

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


class ISessionRepository(ABC):
    """
    Session store interface - application layer.

    Raw tokens go in, SHA-256 handles are what gets stored. Validation and
    rotation are single conditional statements, never read-then-write.
    """

    @abstractmethod
    async def create_session(
        self,
        account_id: UUID,
        access_token: str,
        refresh_token: str,
        client_meta: ClientMeta,
        expires_at: datetime,
    ) -> Session:
        """Insert a session. Raises DuplicateToken if either handle already exists."""
        pass

    @abstractmethod
    async def validate_and_touch(self, access_token: str) -> Session:
        """
        Check expiry and bump last_used_at in one statement.

        Raises SessionNotFound or SessionExpired without mutating anything.
        """
        pass

    @abstractmethod
    async def rotate(
        self, refresh_token: str, new_access_token: str, new_expires_at: datetime
    ) -> Session:
        """
        Replace the access handle of the session owning refresh_token in place.

        Compare-and-swap on the previous access handle; raises
        SessionAlreadyRotated if another rotation won the race.
        """
        pass

    @abstractmethod
    async def revoke(self, access_token: str) -> bool:
        """Delete the session holding this access token (logout)"""
        pass

    @abstractmethod
    async def revoke_all(self, account_id: UUID) -> int:
        """Delete every session of an account. Returns count deleted."""
        pass

    @abstractmethod
    async def revoke_all_except(self, account_id: UUID, session_id: UUID) -> int:
        """Delete every session of an account except one. Returns count deleted."""
        pass

    @abstractmethod
    async def revoke_by_id(self, account_id: UUID, session_id: UUID) -> bool:
        """Delete one session owned by the account"""
        pass

    @abstractmethod
    async def list_active(self, account_id: UUID) -> List[Session]:
        """Unexpired sessions of an account, most recently used first"""
        pass

    @abstractmethod
    async def sweep_expired(self) -> int:
        """Delete all sessions past expiry. Idempotent. Returns count deleted."""
        pass
