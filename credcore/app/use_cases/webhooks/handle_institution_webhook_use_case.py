"""
Handle Institution Webhook Use Case

Processes a notification whose signature has already been verified.
"""

import logging
from typing import Any, Dict

from pydantic import BaseModel

from credcore.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


class WebhookAck(BaseModel):
    received: bool = True
    webhook_type: str
    webhook_code: str = ""


class HandleInstitutionWebhookUseCase:
    """
    Acknowledge an institution notification.

    Business Rules:
    - Only called after signature verification succeeded
    - The payload must name its webhook_type
    - Type, code and item are logged; the rest of the payload is not
    """

    async def execute(self, payload: Dict[str, Any]) -> Result[WebhookAck]:
        if not isinstance(payload, dict):
            return Return.err(Error("INVALID_PAYLOAD", "Webhook payload must be an object"))

        webhook_type = payload.get("webhook_type")
        if not webhook_type or not isinstance(webhook_type, str):
            return Return.err(Error("INVALID_PAYLOAD", "Missing webhook_type"))

        webhook_code = str(payload.get("webhook_code") or "")
        item_id = payload.get("item_id")

        logger.info(
            f"Institution webhook received: type={webhook_type} code={webhook_code} item={item_id}"
        )
        return Return.ok(WebhookAck(webhook_type=webhook_type, webhook_code=webhook_code))
