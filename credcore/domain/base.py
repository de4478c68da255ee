import hashlib
from datetime import UTC, datetime


def utcnow() -> datetime:
    """Naive UTC timestamp, matching how DateTime columns are stored."""
    return datetime.now(UTC).replace(tzinfo=None)


def token_handle(raw_token: str) -> str:
    """SHA-256 hex digest used as the stored key for a raw token."""
    return hashlib.sha256(raw_token.encode()).hexdigest()
