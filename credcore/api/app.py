import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from sqlmodel import SQLModel

from credcore.app.errors import AuthenticationError, RateLimitExceeded
from .bootstrap import build_services
from .error import ClientError, ServerError
from .middleware.security_headers import SecurityHeadersMiddleware
from .sweeper import run_sweeper

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(
        status_code=exc.status_code, content={"error": error_dict}, headers=exc.headers
    )


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_authentication_error(request: Request, exc: AuthenticationError):
    logger.warning(f"Authentication failed on {request.url.path}: {exc.reason}")
    error_dict = {"code": "INVALID_SESSION", "message": "Invalid or expired session"}
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"error": error_dict},
        headers={"WWW-Authenticate": "Bearer"},
    )


async def handle_rate_limit_exceeded(request: Request, exc: RateLimitExceeded):
    error_dict = {
        "code": "RATE_LIMITED",
        "message": "Too many attempts, please try again later",
        "reset_at": exc.reset_at.isoformat(),
    }
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"error": error_dict},
        headers={"Retry-After": str(exc.retry_after_seconds)},
    )


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(ApplicationConfig) -> FastAPI:
    configure_logging(ApplicationConfig.LOG_LEVEL)

    # Raises ConfigurationError on a missing or malformed secret
    services = build_services(ApplicationConfig)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        from credcore.depends import AsyncSessionLocal, engine

        async with engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)

        sweeper = asyncio.create_task(
            run_sweeper(
                AsyncSessionLocal,
                services.rate_limiter,
                ApplicationConfig.SESSION_SWEEP_INTERVAL_SECONDS,
            )
        )
        yield
        sweeper.cancel()
        try:
            await sweeper
        except asyncio.CancelledError:
            pass
        close = getattr(services.rate_limiter.store, "close", None)
        if close is not None:
            await close()

    app = FastAPI(title="Credential Core API", version="0.1.0", lifespan=lifespan)
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(
        SecurityHeadersMiddleware, hsts_max_age=ApplicationConfig.HSTS_MAX_AGE_SECONDS
    )

    from credcore.api.routes import auth, health_check, institutions, sessions, webhooks

    app.include_router(health_check.router, tags=["Health"])
    app.include_router(auth.router, tags=["Authentication"])
    app.include_router(sessions.router, tags=["Sessions"])
    app.include_router(institutions.router, tags=["Institutions"])
    app.include_router(webhooks.router, tags=["Webhooks"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(AuthenticationError, handle_authentication_error)
    app.add_exception_handler(RateLimitExceeded, handle_rate_limit_exceeded)

    return app
