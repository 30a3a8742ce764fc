"""
Relay Service

Runs a parsed notification through the relay pipeline: configuration gate,
validation, duplicate suppression and webhook delivery.
"""

from typing import Any, Dict

import httpx
from pydantic import ValidationError

from slack_relay.config.relay_config import RelayConfigLoader
from slack_relay.models.notification import (
    NotificationRequest,
    RelayOutcome,
    SlackPayload,
)
from slack_relay.models.relay_config import RelayConfig
from slack_relay.services.deduplicator import Deduplicator
from slack_relay.services.exceptions import (
    NotificationValidationError,
    UpstreamDeliveryError,
)
from slack_relay.services.slack_service import SlackWebhookClient
from slack_relay.utils.logger import get_module_logger

logger = get_module_logger(__name__)

# Upstream response bodies are cut to this many characters before being echoed
RESPONSE_EXCERPT_LENGTH = 200


class RelayService:
    """
    Orchestrates one notification from parsed body to delivery.

    Stateless across requests apart from the shared Deduplicator.
    """

    def __init__(
        self,
        config_loader: RelayConfigLoader,
        deduplicator: Deduplicator,
        webhook_client: SlackWebhookClient
    ):
        self.config_loader = config_loader
        self.deduplicator = deduplicator
        self.webhook_client = webhook_client

    async def relay(self, data: Dict[str, Any]) -> RelayOutcome:
        """
        Relay a notification.

        Args:
            data: Decoded JSON object from the request body

        Returns:
            RelayOutcome describing whether the message was delivered or skipped

        Raises:
            ConfigurationError: Relay enabled without webhook URL or config unusable
            NotificationValidationError: Missing text or an unparseable notification
            UpstreamDeliveryError: Webhook answered non-2xx or timed out
            httpx.RequestError: Webhook unreachable
        """
        config = self.config_loader.load()
        if not config.enabled:
            logger.info("Relay disabled - skipping notification")
            return RelayOutcome.SKIPPED_DISABLED

        notification = self._parse_notification(data)
        text = notification.clean_text
        if not text:
            raise NotificationValidationError("Missing text")

        signature = notification.dedupe_signature()
        if signature and self.deduplicator.is_duplicate(signature):
            logger.info(f"Duplicate notification suppressed: {signature}")
            return RelayOutcome.SKIPPED_DUPLICATE

        payload = self.build_payload(notification, config)
        await self._deliver(config.webhook_url, payload)

        logger.info(f"Notification delivered (signature: '{signature or '-'}')")
        return RelayOutcome.DELIVERED

    @staticmethod
    def build_payload(notification: NotificationRequest, config: RelayConfig) -> SlackPayload:
        """
        Build the webhook body.

        The thread is the request's threadTs, else the configured default;
        a blank result leaves the message unthreaded.
        """
        thread_ts = (notification.thread_ts or config.thread_ts or "").strip()
        return SlackPayload(text=notification.clean_text, thread_ts=thread_ts or None)

    def _parse_notification(self, data: Dict[str, Any]) -> NotificationRequest:
        try:
            return NotificationRequest.model_validate(data)
        except ValidationError as e:
            fields = ", ".join(
                " -> ".join(str(loc) for loc in error["loc"]) for error in e.errors()
            )
            raise NotificationValidationError(f"Invalid notification fields: {fields}") from e

    async def _deliver(self, webhook_url: str, payload: SlackPayload) -> None:
        try:
            result = await self.webhook_client.send(webhook_url, payload.to_json())
        except httpx.TimeoutException as e:
            logger.error(f"Slack webhook timed out: {e!r}")
            raise UpstreamDeliveryError(f"Slack webhook timed out: {type(e).__name__}") from e

        if not result.ok:
            excerpt = result.body[:RESPONSE_EXCERPT_LENGTH]
            raise UpstreamDeliveryError(
                f"Slack webhook HTTP {result.status}",
                upstream_status=result.status,
                response_excerpt=excerpt
            )
