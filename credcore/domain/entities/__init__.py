"""
Credential Core Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import AccountRole, TokenType

# Export all entities
from .account import Account
from .session import Session
from .password_reset_token import PasswordResetToken
from .linked_institution import LinkedInstitution

__all__ = [
    # Enums
    "AccountRole",
    "TokenType",
    # Entities
    "Account",
    "Session",
    "PasswordResetToken",
    "LinkedInstitution",
]
