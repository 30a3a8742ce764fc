"""
Slack Webhook Client

Posts relay payloads to a Slack incoming webhook and normalizes the reply.
"""

from typing import Any, Dict

import httpx

from slack_relay.models.notification import DeliveryResult
from slack_relay.utils.logger import get_module_logger

logger = get_module_logger(__name__)


def create_http_client(timeout_seconds: float) -> httpx.AsyncClient:
    """
    Create the shared HTTP client used for webhook calls.

    Args:
        timeout_seconds: Upper bound for a single webhook call

    Returns:
        Configured httpx.AsyncClient (caller owns closing it)
    """
    return httpx.AsyncClient(
        timeout=timeout_seconds,
        headers={'Content-Type': 'application/json'}
    )


class SlackWebhookClient:
    """
    Single-shot delivery to a Slack incoming webhook.

    No retries. Connection and DNS failures propagate as httpx.RequestError;
    truncating the response body is left to the caller.
    """

    def __init__(self, http_client: httpx.AsyncClient):
        """
        Initialize the client.

        Args:
            http_client: Shared async HTTP client
        """
        self.http_client = http_client

    async def send(self, webhook_url: str, payload: Dict[str, Any]) -> DeliveryResult:
        """
        POST a JSON payload to the webhook.

        Args:
            webhook_url: Slack incoming webhook URL
            payload: JSON-serializable message body

        Returns:
            DeliveryResult with the upstream status and response text

        Raises:
            httpx.RequestError: If the webhook cannot be reached
        """
        response = await self.http_client.post(webhook_url, json=payload)

        try:
            body = response.text
        except (UnicodeDecodeError, LookupError):
            body = ""

        if not response.is_success:
            logger.error(f"Slack webhook returned status {response.status_code}: {body[:200]}")

        return DeliveryResult(ok=response.is_success, status=response.status_code, body=body)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.http_client.aclose()
