"""
Service wiring.

Builds the stateless security services from configuration. Every secret is
validated here, so a missing or malformed secret stops the application
before it serves a request.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta

from credcore.adapter.services.logging_reset_token_sender import LoggingResetTokenSender
from credcore.adapter.services.memory_rate_limit_store import InMemoryRateLimitStore
from credcore.adapter.services.redis_rate_limit_store import RedisRateLimitStore
from credcore.app.errors import ConfigurationError
from credcore.app.repositories.rate_limit_store import IRateLimitStore
from credcore.app.services.rate_limiter import RateLimiter, RateLimitPolicy
from credcore.app.services.reset_token_sender import IResetTokenSender
from credcore.app.services.secret_cipher import SecretCipher
from credcore.app.services.token_service import TokenService
from credcore.app.services.webhook_verifier import WebhookVerifier

logger = logging.getLogger(__name__)

MINUTE_MS = 60 * 1000
HOUR_MS = 60 * MINUTE_MS

REGISTER_POLICY = RateLimitPolicy(max_attempts=5, window_ms=HOUR_MS)
LOGIN_POLICY = RateLimitPolicy(max_attempts=5, window_ms=15 * MINUTE_MS)
FORGOT_PASSWORD_POLICY = RateLimitPolicy(max_attempts=3, window_ms=HOUR_MS)


@dataclass
class Services:
    token_service: TokenService
    cipher: SecretCipher
    webhook_verifier: WebhookVerifier
    rate_limiter: RateLimiter
    reset_sender: IResetTokenSender
    store_timeout: float
    password_reset_ttl: timedelta


def build_rate_limit_store(config) -> IRateLimitStore:
    backend = (getattr(config, "RATE_LIMIT_BACKEND", "memory") or "memory").lower()
    if backend == "memory":
        return InMemoryRateLimitStore()
    if backend == "redis":
        return RedisRateLimitStore(
            config.REDIS_URL, socket_timeout=config.STORE_TIMEOUT_SECONDS
        )
    raise ConfigurationError(f"Unknown RATE_LIMIT_BACKEND: {backend}")


def build_services(config) -> Services:
    """
    Build all services from an ApplicationConfig-like object.

    Raises:
        ConfigurationError: a secret is missing or malformed
    """
    token_service = TokenService(
        access_secret=config.JWT_ACCESS_SECRET,
        refresh_secret=config.JWT_REFRESH_SECRET,
        issuer=config.JWT_ISSUER,
        audience=config.JWT_AUDIENCE,
        version=config.TOKEN_VERSION,
        access_ttl=timedelta(minutes=config.ACCESS_TOKEN_TTL_MINUTES),
        refresh_ttl=timedelta(days=config.REFRESH_TOKEN_TTL_DAYS),
    )
    cipher = SecretCipher(config.ENCRYPTION_KEY)
    webhook_verifier = WebhookVerifier(config.WEBHOOK_SECRET)
    rate_limiter = RateLimiter(build_rate_limit_store(config))

    logger.info(
        f"Security services ready (rate limit backend: {config.RATE_LIMIT_BACKEND})"
    )
    return Services(
        token_service=token_service,
        cipher=cipher,
        webhook_verifier=webhook_verifier,
        rate_limiter=rate_limiter,
        reset_sender=LoggingResetTokenSender(),
        store_timeout=config.STORE_TIMEOUT_SECONDS,
        password_reset_ttl=timedelta(minutes=config.PASSWORD_RESET_TTL_MINUTES),
    )
