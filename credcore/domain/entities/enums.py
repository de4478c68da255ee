"""
Credential Core Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class AccountRole(str, Enum):
    """Account tier"""

    free = "free"
    premium = "premium"
    admin = "admin"


class TokenType(str, Enum):
    """Discriminator embedded in every signed token"""

    access = "access"
    refresh = "refresh"
    reset = "reset"
