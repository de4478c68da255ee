from uuid import uuid4

import bcrypt
import pytest

from credcore.app.repositories.session_repository import ClientMeta
from credcore.app.use_cases.auth.login_use_case import LoginUseCase
from credcore.domain.entities import Account, AccountRole, Session

CLIENT = ClientMeta(ip_address="203.0.113.5", user_agent="pytest")
PASSWORD = "SecurePass123!"


@pytest.fixture
def account():
    return Account(
        id=uuid4(),
        email="user@example.com",
        password_hash=bcrypt.hashpw(PASSWORD.encode(), bcrypt.gensalt(4)).decode(),
        role=AccountRole.premium,
    )


@pytest.mark.asyncio
async def test_successful_login(mock_uow, token_service, account):
    mock_uow.accounts.get_by_email.return_value = account
    mock_uow.sessions.create_session.return_value = Session(
        id=uuid4(),
        account_id=account.id,
        access_token_handle="a",
        refresh_token_handle="r",
        expires_at=None,
    )

    result = await LoginUseCase(mock_uow, token_service).execute(account.email, PASSWORD, CLIENT)

    assert result.is_ok()
    assert result.value.account.role == "premium"
    assert result.value.refresh_token
    assert account.last_login_at is not None
    mock_uow.accounts.update.assert_awaited_once_with(account)
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_login_wrong_password(mock_uow, token_service, account):
    mock_uow.accounts.get_by_email.return_value = account

    result = await LoginUseCase(mock_uow, token_service).execute(
        account.email, "WrongPassword!", CLIENT
    )

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    mock_uow.sessions.create_session.assert_not_awaited()


@pytest.mark.asyncio
async def test_login_unknown_email_same_error(mock_uow, token_service):
    mock_uow.accounts.get_by_email.return_value = None

    result = await LoginUseCase(mock_uow, token_service).execute(
        "nobody@example.com", PASSWORD, CLIENT
    )

    assert result.is_err()
    assert result.error.code == "INVALID_CREDENTIALS"
    assert result.error.message == "Invalid email or password"


@pytest.mark.asyncio
async def test_login_disabled_account(mock_uow, token_service, account):
    account.is_active = False
    mock_uow.accounts.get_by_email.return_value = account

    result = await LoginUseCase(mock_uow, token_service).execute(account.email, PASSWORD, CLIENT)

    assert result.is_err()
    assert result.error.code == "ACCOUNT_DISABLED"
    mock_uow.commit.assert_not_awaited()
