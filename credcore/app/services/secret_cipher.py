"""
Secret Cipher

Symmetric encryption of third-party credentials held at rest.
"""

import binascii
import logging
import os
from typing import Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from credcore.app.errors import ConfigurationError, DecryptionError

logger = logging.getLogger(__name__)

KEY_LENGTH = 32  # AES-256
NONCE_LENGTH = 12  # GCM standard nonce size
SEPARATOR = ":"


class SecretCipher:
    """
    Encrypts opaque secrets with AES-256-GCM.

    Encrypted values are serialized as ``<nonce hex>:<ciphertext hex>``; the
    ciphertext includes the GCM authentication tag, so any tampering fails
    decryption instead of yielding altered plaintext.
    """

    def __init__(self, key_hex: Optional[str]):
        if not key_hex:
            raise ConfigurationError("ENCRYPTION_KEY is not set")
        try:
            key = bytes.fromhex(key_hex)
        except ValueError as exc:
            raise ConfigurationError("ENCRYPTION_KEY must be hexadecimal") from exc
        if len(key) != KEY_LENGTH:
            raise ConfigurationError(
                f"ENCRYPTION_KEY must be exactly {KEY_LENGTH * 2} hexadecimal characters "
                f"({KEY_LENGTH} bytes)"
            )
        self._aead = AESGCM(key)

    @staticmethod
    def generate_key() -> str:
        """Generate a random key suitable for ENCRYPTION_KEY (64 hex chars)."""
        return os.urandom(KEY_LENGTH).hex()

    def encrypt(self, plaintext: str) -> str:
        if not plaintext or not isinstance(plaintext, str):
            raise ValueError("Plaintext must be a non-empty string")

        nonce = os.urandom(NONCE_LENGTH)
        ciphertext = self._aead.encrypt(nonce, plaintext.encode("utf-8"), None)
        return nonce.hex() + SEPARATOR + ciphertext.hex()

    def decrypt(self, combined: str) -> str:
        if not combined or not isinstance(combined, str):
            raise DecryptionError("Encrypted value is empty")

        parts = combined.split(SEPARATOR)
        if len(parts) != 2:
            raise DecryptionError("Encrypted value has an invalid format")

        try:
            nonce = binascii.unhexlify(parts[0])
            ciphertext = binascii.unhexlify(parts[1])
        except (binascii.Error, ValueError) as exc:
            raise DecryptionError("Encrypted value is not valid hex") from exc

        if len(nonce) != NONCE_LENGTH:
            raise DecryptionError("Encrypted value has an invalid nonce")

        try:
            plaintext = self._aead.decrypt(nonce, ciphertext, None)
        except InvalidTag as exc:
            logger.warning("Secret decryption failed: authentication tag mismatch")
            raise DecryptionError("Failed to decrypt data") from exc

        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecryptionError("Decrypted value is not valid UTF-8") from exc
