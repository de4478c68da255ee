"""
Webhook Verifier

Validates inbound notification authenticity via HMAC-SHA256.
"""

import hashlib
import hmac
from typing import Optional

from credcore.app.errors import ConfigurationError

SIGNATURE_PREFIX = "sha256="


class WebhookVerifier:
    """
    Verifies ``hex(HMAC-SHA256(secret, raw_body))`` signatures.

    The secret is a startup precondition: there is no bypass when it is
    missing. Comparison goes through hmac.compare_digest, whose running time
    does not depend on where the values first differ.
    """

    def __init__(self, secret: Optional[str]):
        if not secret:
            raise ConfigurationError("WEBHOOK_SECRET is not set")
        self._secret = secret.encode("utf-8")

    def sign(self, raw_body: bytes) -> str:
        return hmac.new(self._secret, raw_body, hashlib.sha256).hexdigest()

    def verify(self, signature_header: Optional[str], raw_body: bytes) -> bool:
        if not signature_header:
            return False

        provided = signature_header.strip()
        if provided.lower().startswith(SIGNATURE_PREFIX):
            provided = provided[len(SIGNATURE_PREFIX):]

        expected = self.sign(raw_body)
        # Bytes on both sides: compare_digest rejects non-ASCII str input.
        return hmac.compare_digest(
            expected.encode("ascii"), provided.lower().encode("utf-8", "replace")
        )
