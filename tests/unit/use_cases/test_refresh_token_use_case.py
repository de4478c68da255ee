import asyncio
from datetime import timedelta
from uuid import uuid4

import pytest

from credcore.app.errors import SessionAlreadyRotated, SessionExpired, SessionNotFound
from credcore.app.use_cases.auth import RefreshTokenUseCase
from credcore.domain.entities import Account, Session, TokenType


@pytest.fixture
def account():
    return Account(id=uuid4(), email="user@example.com", password_hash="x")


def _session(account_id):
    return Session(
        id=uuid4(),
        account_id=account_id,
        access_token_handle="a",
        refresh_token_handle="r",
        expires_at=None,
    )


@pytest.mark.asyncio
async def test_refresh_rotates_session(mock_uow, token_service, account):
    session = _session(account.id)
    mock_uow.accounts.get_by_id.return_value = account
    mock_uow.sessions.rotate.return_value = session
    pair = token_service.issue_pair(account.id, "free")

    result = await RefreshTokenUseCase(mock_uow, token_service).execute(pair.refresh_token)

    assert result.is_ok()
    assert result.value.session_id == str(session.id)
    new_access = result.value.access_token
    assert token_service.verify(new_access, TokenType.access).account_id == account.id

    refresh_token, rotated_access, expires_at = mock_uow.sessions.rotate.call_args.args
    assert refresh_token == pair.refresh_token
    assert rotated_access == new_access
    refresh_claims = token_service.verify(pair.refresh_token, TokenType.refresh)
    assert expires_at == refresh_claims.expires_at
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_access_token_cannot_refresh(mock_uow, token_service, account):
    pair = token_service.issue_pair(account.id, "free")

    result = await RefreshTokenUseCase(mock_uow, token_service).execute(pair.access_token)

    assert result.is_err()
    assert result.error.code == "INVALID_SESSION"
    mock_uow.sessions.rotate.assert_not_awaited()


@pytest.mark.asyncio
async def test_expired_refresh_token(mock_uow, token_service, account):
    token = token_service.issue(account.id, "free", TokenType.refresh, timedelta(seconds=-1))

    result = await RefreshTokenUseCase(mock_uow, token_service).execute(token)

    assert result.is_err()
    assert result.error.code == "INVALID_SESSION"


@pytest.mark.parametrize(
    "failure",
    [
        SessionNotFound("gone"),
        SessionExpired("expired"),
        SessionAlreadyRotated("lost the race"),
    ],
)
@pytest.mark.asyncio
async def test_store_failures_collapse_to_invalid_session(mock_uow, token_service, account, failure):
    mock_uow.accounts.get_by_id.return_value = account
    mock_uow.sessions.rotate.side_effect = failure
    pair = token_service.issue_pair(account.id, "free")

    result = await RefreshTokenUseCase(mock_uow, token_service).execute(pair.refresh_token)

    assert result.is_err()
    assert result.error.code == "INVALID_SESSION"
    assert result.error.message == "Invalid or expired session"
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_inactive_account_cannot_refresh(mock_uow, token_service, account):
    account.is_active = False
    mock_uow.accounts.get_by_id.return_value = account
    pair = token_service.issue_pair(account.id, "free")

    result = await RefreshTokenUseCase(mock_uow, token_service).execute(pair.refresh_token)

    assert result.is_err()
    assert result.error.code == "INVALID_SESSION"


@pytest.mark.asyncio
async def test_slow_store_fails_closed(mock_uow, token_service, account):
    async def hang(*args, **kwargs):
        await asyncio.sleep(1)

    mock_uow.accounts.get_by_id.return_value = account
    mock_uow.sessions.rotate.side_effect = hang
    pair = token_service.issue_pair(account.id, "free")

    result = await RefreshTokenUseCase(mock_uow, token_service, store_timeout=0.01).execute(
        pair.refresh_token
    )

    assert result.is_err()
    assert result.error.code == "INVALID_SESSION"
