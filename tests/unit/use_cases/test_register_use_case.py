from unittest.mock import ANY
from uuid import uuid4

import bcrypt
import pytest

from credcore.app.errors import DuplicateToken
from credcore.app.repositories.session_repository import ClientMeta
from credcore.app.use_cases.auth import RegisterCommand, RegisterUseCase
from credcore.domain.entities import Account, AccountRole, Session, TokenType

CLIENT = ClientMeta(ip_address="203.0.113.5", user_agent="pytest")


def _command(**overrides):
    params = dict(
        email="New.User@Example.com",
        password="SecurePass123!",
        first_name="Ada",
        last_name="Lovelace",
    )
    params.update(overrides)
    return RegisterCommand(**params)


@pytest.mark.asyncio
async def test_register_creates_account_and_session(mock_uow, token_service):
    mock_uow.accounts.get_by_email.return_value = None
    session_id = uuid4()
    mock_uow.sessions.create_session.return_value = Session(
        id=session_id,
        account_id=uuid4(),
        access_token_handle="a",
        refresh_token_handle="r",
        expires_at=None,
    )

    result = await RegisterUseCase(mock_uow, token_service).execute(_command(), CLIENT)

    assert result.is_ok()
    response = result.value
    assert response.session_id == str(session_id)
    assert response.account.email == "new.user@example.com"
    assert response.account.role == "free"
    assert response.expires_in == 900

    created: Account = mock_uow.accounts.create.call_args.args[0]
    assert created.role == AccountRole.free
    assert bcrypt.checkpw(b"SecurePass123!", created.password_hash.encode())

    mock_uow.sessions.create_session.assert_awaited_once_with(
        account_id=created.id,
        access_token=response.access_token,
        refresh_token=response.refresh_token,
        client_meta=CLIENT,
        expires_at=ANY,
    )
    claims = token_service.verify(response.access_token, TokenType.access)
    assert claims.account_id == created.id
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_register_duplicate_email(mock_uow, token_service):
    mock_uow.accounts.get_by_email.return_value = Account(
        email="new.user@example.com", password_hash="x"
    )

    result = await RegisterUseCase(mock_uow, token_service).execute(_command(), CLIENT)

    assert result.is_err()
    assert result.error.code == "EMAIL_ALREADY_EXISTS"
    mock_uow.accounts.create.assert_not_awaited()
    mock_uow.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_register_short_password(mock_uow, token_service):
    result = await RegisterUseCase(mock_uow, token_service).execute(
        _command(password="short"), CLIENT
    )

    assert result.is_err()
    assert result.error.code == "INVALID_PASSWORD"
    mock_uow.accounts.get_by_email.assert_not_awaited()


@pytest.mark.asyncio
async def test_register_token_collision_is_not_committed(mock_uow, token_service):
    mock_uow.accounts.get_by_email.return_value = None
    mock_uow.sessions.create_session.side_effect = DuplicateToken("collision")

    result = await RegisterUseCase(mock_uow, token_service).execute(_command(), CLIENT)

    assert result.is_err()
    assert result.error.code == "SESSION_CONFLICT"
    mock_uow.commit.assert_not_awaited()
