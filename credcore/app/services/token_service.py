"""
Token Service

Issues and verifies signed bearer tokens carrying identity claims.
"""

import logging
import secrets
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Dict, Optional
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt
from jose.exceptions import JWTClaimsError

from credcore.app.errors import (
    BadSignature,
    ConfigurationError,
    MalformedToken,
    TokenExpired,
    TokenTypeMismatch,
)
from credcore.domain.entities import AccountRole, TokenType

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
MIN_SECRET_LENGTH = 32
REQUIRED_CLAIMS = ("account_id", "role", "type", "ver", "exp", "iat", "jti")


@dataclass(frozen=True)
class TokenClaims:
    account_id: UUID
    role: str
    token_type: TokenType
    version: int
    issued_at: datetime
    expires_at: datetime
    token_id: str


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str
    access_expires_at: datetime
    refresh_expires_at: datetime


class TokenService:
    """
    Signs and verifies HS256 JWTs.

    Business Rules:
    - Access and refresh tokens are signed with separate secrets
    - Reset tokens share the access secret but carry type=reset
    - Every token embeds iss/aud, a schema version and a random jti
    - verify() checks the embedded type against the expected one, so a
      refresh token is never accepted where an access token is required
    - Tokens older than the current schema version are rejected
    """

    def __init__(
        self,
        access_secret: Optional[str],
        refresh_secret: Optional[str],
        issuer: str,
        audience: str,
        version: int = 2,
        access_ttl: timedelta = timedelta(minutes=15),
        refresh_ttl: timedelta = timedelta(days=7),
    ):
        for name, value in (("access", access_secret), ("refresh", refresh_secret)):
            if not value or len(value) < MIN_SECRET_LENGTH:
                raise ConfigurationError(
                    f"JWT {name} secret must be at least {MIN_SECRET_LENGTH} characters"
                )
        if access_secret == refresh_secret:
            raise ConfigurationError("JWT access and refresh secrets must differ")

        self._secrets: Dict[TokenType, str] = {
            TokenType.access: access_secret,
            TokenType.refresh: refresh_secret,
            TokenType.reset: access_secret,
        }
        self.issuer = issuer
        self.audience = audience
        self.version = version
        self.access_ttl = access_ttl
        self.refresh_ttl = refresh_ttl

    def issue(
        self, account_id: UUID, role: str, token_type: TokenType, ttl: timedelta
    ) -> str:
        """
        Issue a signed token.

        Args:
            account_id: Account UUID
            role: Account role (free, premium, admin)
            token_type: access, refresh or reset
            ttl: Validity duration (may be negative in tests)

        Returns:
            JWT token string (HS256)
        """
        now = datetime.now(UTC)
        payload = {
            "account_id": str(account_id),
            "role": role.value if isinstance(role, AccountRole) else role,
            "type": token_type.value,
            "ver": self.version,
            "iss": self.issuer,
            "aud": self.audience,
            "iat": now,
            "exp": now + ttl,
            "jti": secrets.token_urlsafe(16),
        }
        return jwt.encode(payload, self._secrets[token_type], algorithm=ALGORITHM)

    def issue_pair(self, account_id: UUID, role: str) -> TokenPair:
        now = datetime.now(UTC).replace(tzinfo=None)
        return TokenPair(
            access_token=self.issue(account_id, role, TokenType.access, self.access_ttl),
            refresh_token=self.issue(account_id, role, TokenType.refresh, self.refresh_ttl),
            access_expires_at=now + self.access_ttl,
            refresh_expires_at=now + self.refresh_ttl,
        )

    def issue_access(self, account_id: UUID, role: str) -> str:
        return self.issue(account_id, role, TokenType.access, self.access_ttl)

    def verify(self, token: str, expected_type: TokenType) -> TokenClaims:
        """
        Verify a token and return its claims.

        Raises:
            MalformedToken: undecodable, missing claims, unknown type or legacy version
            BadSignature: signature, issuer or audience mismatch
            TokenExpired: exp is in the past
            TokenTypeMismatch: valid token of a different type
        """
        try:
            unverified = jwt.get_unverified_claims(token)
        except JWTError as exc:
            raise MalformedToken("Token could not be decoded") from exc

        missing = [claim for claim in REQUIRED_CLAIMS if claim not in unverified]
        if missing:
            raise MalformedToken(f"Token is missing claims: {', '.join(missing)}")

        try:
            embedded_type = TokenType(unverified["type"])
        except ValueError as exc:
            raise MalformedToken("Unknown token type") from exc

        try:
            claims = jwt.decode(
                token,
                self._secrets[embedded_type],
                algorithms=[ALGORITHM],
                audience=self.audience,
                issuer=self.issuer,
            )
        except ExpiredSignatureError as exc:
            raise TokenExpired("Token has expired") from exc
        except JWTClaimsError as exc:
            raise BadSignature("Token issuer or audience mismatch") from exc
        except JWTError as exc:
            raise BadSignature("Token signature verification failed") from exc

        if not isinstance(claims["ver"], int) or claims["ver"] < self.version:
            raise MalformedToken("Token schema version is no longer accepted")

        if embedded_type != expected_type:
            raise TokenTypeMismatch(
                f"Expected {expected_type.value} token, got {embedded_type.value}"
            )

        try:
            account_id = UUID(claims["account_id"])
        except (TypeError, ValueError) as exc:
            raise MalformedToken("Token account_id is not a UUID") from exc

        return TokenClaims(
            account_id=account_id,
            role=claims["role"],
            token_type=embedded_type,
            version=claims["ver"],
            issued_at=datetime.fromtimestamp(claims["iat"], UTC).replace(tzinfo=None),
            expires_at=datetime.fromtimestamp(claims["exp"], UTC).replace(tzinfo=None),
            token_id=claims["jti"],
        )
