import pytest

from credcore.app.use_cases.webhooks import HandleInstitutionWebhookUseCase


@pytest.mark.asyncio
async def test_acknowledges_notification():
    result = await HandleInstitutionWebhookUseCase().execute(
        {"webhook_type": "TRANSACTIONS", "webhook_code": "DEFAULT_UPDATE", "item_id": "item-1"}
    )

    assert result.is_ok()
    assert result.value.received is True
    assert result.value.webhook_type == "TRANSACTIONS"
    assert result.value.webhook_code == "DEFAULT_UPDATE"


@pytest.mark.parametrize("payload", [{}, {"webhook_code": "X"}, {"webhook_type": 7}, ["not", "a", "dict"]])
@pytest.mark.asyncio
async def test_rejects_payload_without_type(payload):
    result = await HandleInstitutionWebhookUseCase().execute(payload)

    assert result.is_err()
    assert result.error.code == "INVALID_PAYLOAD"
