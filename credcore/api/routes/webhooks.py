import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request, status

from credcore.api.bootstrap import Services
from credcore.api.error import ClientError, ServerError
from credcore.app.use_cases.webhooks import HandleInstitutionWebhookUseCase, WebhookAck
from credcore.depends import get_services
from credcore.libs.result import Error

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhooks", tags=["Webhooks"])

SIGNATURE_HEADER = "X-Webhook-Signature"


@router.post("/institutions", status_code=status.HTTP_200_OK, response_model=WebhookAck)
async def institution_webhook(
    request: Request,
    x_webhook_signature: Optional[str] = Header(None, alias=SIGNATURE_HEADER),
    services: Services = Depends(get_services),
):
    """
    Receive an institution notification.

    The signature is checked against the exact raw body before the body is
    parsed.

    Raises:
        - 401 Unauthorized: Missing or invalid signature
        - 400 Bad Request: Body is not a valid notification
    """
    raw_body = await request.body()

    if not services.webhook_verifier.verify(x_webhook_signature, raw_body):
        logger.warning(
            f"Rejected webhook with invalid signature from "
            f"{request.client.host if request.client else 'unknown'}"
        )
        raise ClientError(
            Error("INVALID_SIGNATURE", "Invalid webhook signature"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    try:
        payload = json.loads(raw_body)
    except (UnicodeDecodeError, json.JSONDecodeError):
        raise ClientError(Error("INVALID_PAYLOAD", "Webhook body is not valid JSON"))

    use_case = HandleInstitutionWebhookUseCase()
    result = await use_case.execute(payload)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_PAYLOAD":
            raise ClientError(error)
        raise ServerError(error)

    return result.value
