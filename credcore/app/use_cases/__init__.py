"""
Use Cases

Use cases are organized into domain folders:
- auth/: Authentication flows and password reset
- sessions/: Session listing, revocation and sweeping
- institutions/: Linked-institution credentials
- webhooks/: Inbound notifications

Import from subdirectories for better organization.
"""

from .auth import (
    RegisterUseCase,
    RegisterCommand,
    LoginUseCase,
    RefreshTokenUseCase,
    ValidateSessionUseCase,
    LogoutUseCase,
    RequestPasswordResetUseCase,
    ConfirmPasswordResetUseCase,
)
from .sessions import (
    ListSessionsUseCase,
    RevokeSessionsUseCase,
    SweepExpiredSessionsUseCase,
)
from .institutions import (
    LinkInstitutionUseCase,
    LoadInstitutionCredentialUseCase,
)
from .webhooks import HandleInstitutionWebhookUseCase

__all__ = [
    # Auth
    "RegisterUseCase",
    "RegisterCommand",
    "LoginUseCase",
    "RefreshTokenUseCase",
    "ValidateSessionUseCase",
    "LogoutUseCase",
    "RequestPasswordResetUseCase",
    "ConfirmPasswordResetUseCase",
    # Sessions
    "ListSessionsUseCase",
    "RevokeSessionsUseCase",
    "SweepExpiredSessionsUseCase",
    # Institutions
    "LinkInstitutionUseCase",
    "LoadInstitutionCredentialUseCase",
    # Webhooks
    "HandleInstitutionWebhookUseCase",
]
