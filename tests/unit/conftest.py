from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest

from credcore.app.services.token_service import TokenService

ACCESS_SECRET = "unit-access-secret-0123456789abcdefghij"
REFRESH_SECRET = "unit-refresh-secret-0123456789abcdefghij"


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.accounts = MagicMock()
    uow.accounts.get_by_email = AsyncMock()
    uow.accounts.get_by_id = AsyncMock()
    uow.accounts.create = AsyncMock(side_effect=lambda account: account)
    uow.accounts.update = AsyncMock(side_effect=lambda account: account)

    uow.sessions = MagicMock()
    uow.sessions.create_session = AsyncMock()
    uow.sessions.validate_and_touch = AsyncMock()
    uow.sessions.rotate = AsyncMock()
    uow.sessions.revoke = AsyncMock(return_value=True)
    uow.sessions.revoke_all = AsyncMock(return_value=0)
    uow.sessions.revoke_all_except = AsyncMock(return_value=0)
    uow.sessions.revoke_by_id = AsyncMock(return_value=True)
    uow.sessions.list_active = AsyncMock(return_value=[])
    uow.sessions.sweep_expired = AsyncMock(return_value=0)

    uow.password_reset_tokens = MagicMock()
    uow.password_reset_tokens.create = AsyncMock(side_effect=lambda token: token)
    uow.password_reset_tokens.consume = AsyncMock()
    uow.password_reset_tokens.sweep_expired = AsyncMock(return_value=0)

    uow.linked_institutions = MagicMock()
    uow.linked_institutions.get_by_id = AsyncMock()
    uow.linked_institutions.get_by_item_id = AsyncMock(return_value=None)
    uow.linked_institutions.list_by_account = AsyncMock(return_value=[])
    uow.linked_institutions.save = AsyncMock(side_effect=lambda link: link)
    uow.linked_institutions.delete = AsyncMock(return_value=True)
    return uow


@pytest.fixture
def token_service():
    return TokenService(
        access_secret=ACCESS_SECRET,
        refresh_secret=REFRESH_SECRET,
        issuer="iFi",
        audience="iFi-users",
        version=2,
        access_ttl=timedelta(minutes=15),
        refresh_ttl=timedelta(days=7),
    )
