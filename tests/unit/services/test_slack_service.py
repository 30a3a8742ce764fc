"""
Unit tests for SlackWebhookClient - outbound webhook delivery.
"""

import json

import httpx
import pytest

from slack_relay.services.slack_service import SlackWebhookClient, create_http_client
from tests.utils import TEST_WEBHOOK_URL, WebhookRecorder


@pytest.mark.unit
class TestSend:
    """Webhook POST and response normalization."""

    @pytest.mark.asyncio
    async def test_posts_json_payload(self) -> None:
        webhook = WebhookRecorder()
        client = SlackWebhookClient(webhook.client())

        result = await client.send(TEST_WEBHOOK_URL, {"text": "hello", "thread_ts": "123.456"})

        assert result.ok is True
        assert result.status == 200
        assert result.body == "ok"
        assert webhook.call_count == 1
        request = webhook.requests[0]
        assert request.method == "POST"
        assert str(request.url) == TEST_WEBHOOK_URL
        assert request.headers["content-type"] == "application/json"
        assert json.loads(request.content) == {"text": "hello", "thread_ts": "123.456"}
        await client.close()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [400, 403, 404, 500, 503])
    async def test_non_success_status_is_not_ok(self, status_code: int) -> None:
        webhook = WebhookRecorder(status_code=status_code, body="invalid_payload")
        client = SlackWebhookClient(webhook.client())

        result = await client.send(TEST_WEBHOOK_URL, {"text": "hello"})

        assert result.ok is False
        assert result.status == status_code
        assert result.body == "invalid_payload"

    @pytest.mark.asyncio
    async def test_full_body_returned_untruncated(self) -> None:
        webhook = WebhookRecorder(status_code=500, body="x" * 5000)
        client = SlackWebhookClient(webhook.client())

        result = await client.send(TEST_WEBHOOK_URL, {"text": "hello"})

        assert len(result.body) == 5000

    @pytest.mark.asyncio
    async def test_connection_error_propagates(self) -> None:
        webhook = WebhookRecorder()
        webhook.error = lambda request: httpx.ConnectError("Name or service not known", request=request)
        client = SlackWebhookClient(webhook.client())

        with pytest.raises(httpx.ConnectError, match="Name or service not known"):
            await client.send(TEST_WEBHOOK_URL, {"text": "hello"})

    @pytest.mark.asyncio
    async def test_does_not_retry(self) -> None:
        webhook = WebhookRecorder(status_code=503)
        client = SlackWebhookClient(webhook.client())

        await client.send(TEST_WEBHOOK_URL, {"text": "hello"})

        assert webhook.call_count == 1


@pytest.mark.unit
class TestCreateHttpClient:
    """Shared HTTP client configuration."""

    @pytest.mark.asyncio
    async def test_timeout_and_headers(self) -> None:
        http_client = create_http_client(7.5)

        assert http_client.timeout.read == 7.5
        assert http_client.timeout.connect == 7.5
        assert http_client.headers["content-type"] == "application/json"
        await http_client.aclose()
