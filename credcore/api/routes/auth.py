import logging

from fastapi import APIRouter, BackgroundTasks, Depends, status
from pydantic import BaseModel, EmailStr, Field, field_validator

from credcore.api.bootstrap import FORGOT_PASSWORD_POLICY, LOGIN_POLICY, REGISTER_POLICY, Services
from credcore.api.error import ClientError, ServerError
from credcore.app.repositories.session_repository import ClientMeta
from credcore.app.services.unit_of_work import UnitOfWork
from credcore.app.use_cases.auth import (
    GENERIC_RESPONSE,
    AuthContext,
    AuthTokensResponse,
    ChangePasswordResponse,
    ChangePasswordUseCase,
    ConfirmPasswordResetResponse,
    ConfirmPasswordResetUseCase,
    GetProfileUseCase,
    LoginUseCase,
    LogoutResponse,
    LogoutUseCase,
    ProfileResponse,
    RefreshTokenResponse,
    RefreshTokenUseCase,
    RegisterCommand,
    RegisterUseCase,
    RequestPasswordResetResponse,
    RequestPasswordResetUseCase,
)
from credcore.depends import (
    get_access_token,
    get_client_meta,
    get_current_account,
    get_services,
    get_unit_of_work,
    get_unit_of_work_factory,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


class EmailRequest(BaseModel):
    email: EmailStr = Field(..., description="Account email address")

    @field_validator("email")
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.lower()


class RegisterRequest(EmailRequest):
    """
    Register HTTP request payload

    Validates incoming HTTP request before converting to RegisterCommand.
    Password length is a business rule and is checked by the use case.
    """

    password: str = Field(..., description="Account password (min 8 chars)")
    first_name: str = Field(default="", max_length=100)
    last_name: str = Field(default="", max_length=100)


@router.post("/register", status_code=status.HTTP_201_CREATED, response_model=AuthTokensResponse)
async def register(
    request: RegisterRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: Services = Depends(get_services),
    client_meta: ClientMeta = Depends(get_client_meta),
):
    """
    Register a new account and open its first session.

    Rate limited to 5 attempts per hour per email and client address.

    Raises:
        - 400 Bad Request: Password too short
        - 409 Conflict: Email already exists
        - 429 Too Many Requests: Rate limit exceeded
    """
    await services.rate_limiter.enforce(
        f"register:{request.email}:{client_meta.ip_address}", REGISTER_POLICY
    )

    command = RegisterCommand(
        email=request.email,
        password=request.password,
        first_name=request.first_name,
        last_name=request.last_name,
    )

    use_case = RegisterUseCase(uow, services.token_service)
    result = await use_case.execute(command, client_meta)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_PASSWORD":
            raise ClientError(error)
        if error.code == "EMAIL_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


class LoginRequest(EmailRequest):
    password: str = Field(..., description="Account password")


@router.post("/login", status_code=status.HTTP_200_OK, response_model=AuthTokensResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: Services = Depends(get_services),
    client_meta: ClientMeta = Depends(get_client_meta),
):
    """
    Authenticate with email and password.

    Rate limited to 5 attempts per 15 minutes per email and client address;
    the counter is cleared on success.

    Raises:
        - 401 Unauthorized: Invalid credentials
        - 403 Forbidden: Account disabled
        - 429 Too Many Requests: Rate limit exceeded
    """
    limiter_key = f"login:{request.email}:{client_meta.ip_address}"
    await services.rate_limiter.enforce(limiter_key, LOGIN_POLICY)

    use_case = LoginUseCase(uow, services.token_service)
    result = await use_case.execute(request.email, request.password, client_meta)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "ACCOUNT_DISABLED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    await services.rate_limiter.clear(limiter_key)
    return result.value


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., description="Refresh token")


@router.post("/refresh", status_code=status.HTTP_200_OK, response_model=RefreshTokenResponse)
async def refresh(
    request: RefreshRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: Services = Depends(get_services),
):
    """
    Exchange a refresh token for a new access token.

    The session is rotated in place, so session_id does not change and the
    previous access token stops working.

    Raises:
        - 401 Unauthorized: Invalid, expired or already rotated session
    """
    use_case = RefreshTokenUseCase(uow, services.token_service, services.store_timeout)
    result = await use_case.execute(request.refresh_token)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_SESSION":
            raise ClientError(
                error,
                status_code=status.HTTP_401_UNAUTHORIZED,
                headers={"WWW-Authenticate": "Bearer"},
            )
        raise ServerError(error)

    return result.value


@router.post("/logout", status_code=status.HTTP_200_OK, response_model=LogoutResponse)
async def logout(
    current_account: AuthContext = Depends(get_current_account),
    access_token: str = Depends(get_access_token),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: Services = Depends(get_services),
):
    """Revoke the session of the presented access token."""
    use_case = LogoutUseCase(uow, services.store_timeout)
    result = await use_case.execute(access_token)

    if result.is_err():
        raise ServerError(result.error)

    return result.value


@router.get("/me", status_code=status.HTTP_200_OK, response_model=ProfileResponse)
async def me(
    current_account: AuthContext = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Profile of the authenticated account (no password hash or tokens)."""
    use_case = GetProfileUseCase(uow)
    result = await use_case.execute(current_account.account_id)

    if result.is_err():
        error = result.error
        if error.code == "ACCOUNT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


async def issue_password_reset(open_uow, services: Services, email: str) -> None:
    """Account lookup, token issue and delivery, run after the response is sent"""
    try:
        async with open_uow() as uow:
            use_case = RequestPasswordResetUseCase(
                uow, services.token_service, services.reset_sender, services.password_reset_ttl
            )
            result = await use_case.execute(email)
    except Exception:
        logger.exception("Password reset request failed")
        return

    if result.is_err():
        logger.error(f"Password reset request failed: {result.error.code}")


@router.post(
    "/forgot-password",
    status_code=status.HTTP_200_OK,
    response_model=RequestPasswordResetResponse,
)
async def forgot_password(
    request: EmailRequest,
    background_tasks: BackgroundTasks,
    open_uow=Depends(get_unit_of_work_factory),
    services: Services = Depends(get_services),
):
    """
    Request a password reset.

    Always returns the same response whether or not the email is registered.
    Rate limited to 3 requests per hour per email. Everything that depends on
    the account runs in a background task.
    """
    await services.rate_limiter.enforce(f"forgot:{request.email}", FORGOT_PASSWORD_POLICY)

    background_tasks.add_task(issue_password_reset, open_uow, services, request.email)

    return GENERIC_RESPONSE


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., description="Password reset token")
    new_password: str = Field(..., description="New password (min 8 chars)")


@router.post(
    "/reset-password",
    status_code=status.HTTP_200_OK,
    response_model=ConfirmPasswordResetResponse,
)
async def reset_password(
    request: ResetPasswordRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: Services = Depends(get_services),
):
    """
    Confirm a password reset.

    Consumes the reset token and revokes every session of the account.

    Raises:
        - 400 Bad Request: Password too short, or token invalid, expired or used
    """
    use_case = ConfirmPasswordResetUseCase(uow, services.token_service, services.store_timeout)
    result = await use_case.execute(request.token, request.new_password)

    if result.is_err():
        error = result.error
        if error.code in ("INVALID_PASSWORD", "INVALID_TOKEN"):
            raise ClientError(error)
        raise ServerError(error)

    return result.value


class ChangePasswordRequest(BaseModel):
    current_password: str
    new_password: str


@router.post(
    "/change-password",
    status_code=status.HTTP_200_OK,
    response_model=ChangePasswordResponse,
)
async def change_password(
    request: ChangePasswordRequest,
    current_account: AuthContext = Depends(get_current_account),
    uow: UnitOfWork = Depends(get_unit_of_work),
    services: Services = Depends(get_services),
):
    """
    Change the password of the authenticated account.

    Every other session of the account is revoked; the current one stays.

    Raises:
        - 400 Bad Request: New password too short
        - 401 Unauthorized: Current password is wrong
    """
    use_case = ChangePasswordUseCase(uow, services.store_timeout)
    result = await use_case.execute(
        current_account.account_id,
        current_account.session_id,
        request.current_password,
        request.new_password,
    )

    if result.is_err():
        error = result.error
        if error.code == "INVALID_PASSWORD":
            raise ClientError(error)
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        if error.code == "ACCOUNT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
