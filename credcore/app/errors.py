"""
Credential core exceptions.

Every token and session failure derives from AuthenticationError so callers
can answer all of them with the same generic "invalid or expired session"
response while the concrete class is still available for logging.
"""

import math
from datetime import UTC, datetime


class AuthenticationError(Exception):
    """Token or session could not be authenticated."""

    reason = "invalid_session"


class MalformedToken(AuthenticationError):
    reason = "malformed"


class BadSignature(AuthenticationError):
    reason = "bad_signature"


class TokenExpired(AuthenticationError):
    reason = "expired"


class TokenTypeMismatch(AuthenticationError):
    reason = "type_mismatch"


class SessionNotFound(AuthenticationError):
    reason = "session_not_found"


class SessionExpired(AuthenticationError):
    reason = "session_expired"


class SessionAlreadyRotated(AuthenticationError):
    """A concurrent refresh already replaced the access token."""

    reason = "already_rotated"


class StoreTimeout(AuthenticationError):
    """The persistent store did not answer in time; fail closed."""

    reason = "store_timeout"


class DuplicateToken(Exception):
    """A token handle collided with one already stored."""


class RateLimitExceeded(Exception):
    def __init__(self, identifier: str, reset_at: datetime):
        self.identifier = identifier
        self.reset_at = reset_at
        super().__init__(f"Rate limit exceeded, resets at {reset_at.isoformat()}")

    @property
    def retry_after_seconds(self) -> int:
        delta = (self.reset_at - datetime.now(UTC)).total_seconds()
        return max(1, math.ceil(delta))


class DecryptionError(Exception):
    """Encrypted secret could not be recovered. Never carries plaintext."""


class ConfigurationError(Exception):
    """A required secret is missing or malformed; the service must not start."""
