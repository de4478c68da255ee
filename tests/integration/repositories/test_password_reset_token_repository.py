from datetime import timedelta

import pytest
import pytest_asyncio
from sqlmodel import select

from credcore.adapter.repositories.account_repository import AccountRepository
from credcore.adapter.repositories.password_reset_token_repository import (
    PasswordResetTokenRepository,
)
from credcore.domain.base import token_handle, utcnow
from credcore.domain.entities import Account, PasswordResetToken


@pytest_asyncio.fixture
async def account(db_session):
    account = await AccountRepository(db_session).create(
        Account(email="reset@example.com", password_hash="x")
    )
    await db_session.commit()
    return account


@pytest.fixture
def repo(db_session):
    return PasswordResetTokenRepository(db_session)


async def _store(repo, db_session, account, raw, ttl=timedelta(hours=1)):
    token = await repo.create(
        PasswordResetToken(
            account_id=account.id,
            token_hash=token_handle(raw),
            used=False,
            expires_at=utcnow() + ttl,
        )
    )
    await db_session.commit()
    return token


@pytest.mark.asyncio
async def test_consume_succeeds_once(repo, db_session, account):
    await _store(repo, db_session, account, "reset-1")

    first = await repo.consume(token_handle("reset-1"))
    await db_session.commit()
    second = await repo.consume(token_handle("reset-1"))

    assert first is not None
    assert first.used is True
    assert first.account_id == account.id
    assert second is None


@pytest.mark.asyncio
async def test_consume_expired_token(repo, db_session, account):
    await _store(repo, db_session, account, "reset-1", ttl=timedelta(seconds=-1))

    assert await repo.consume(token_handle("reset-1")) is None


@pytest.mark.asyncio
async def test_consume_unknown_token(repo, account):
    assert await repo.consume(token_handle("never-issued")) is None


@pytest.mark.asyncio
async def test_sweep_expired_tokens(repo, db_session, account):
    await _store(repo, db_session, account, "reset-old", ttl=timedelta(seconds=-1))
    await _store(repo, db_session, account, "reset-new")

    assert await repo.sweep_expired() == 1
    remaining = (await db_session.exec(select(PasswordResetToken.token_hash))).all()
    assert remaining == [token_handle("reset-new")]
