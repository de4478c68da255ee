"""
Webhook Use Cases
"""

from .handle_institution_webhook_use_case import HandleInstitutionWebhookUseCase, WebhookAck

__all__ = ["HandleInstitutionWebhookUseCase", "WebhookAck"]
