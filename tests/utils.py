"""
Test utilities for reducing redundancy and improving test maintainability.

- NotificationFactory - /notify request bodies
- RelayConfigFactory - relay configuration files on disk
- WebhookRecorder - fake Slack webhook built on httpx.MockTransport
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import httpx

TEST_WEBHOOK_URL = "https://hooks.slack.test/services/T000/B000/XXXX"


class NotificationFactory:
    """Factory for /notify request bodies."""

    @staticmethod
    def create_transition_notification(**overrides) -> Dict[str, Any]:
        """Notification identifying a task transition (deduplicable)."""
        body = {
            "text": "Task 1 moved from a to b",
            "task": {"id": "1"},
            "transition": {"from": "a", "to": "b"},
            "actor": "x",
        }
        body.update(overrides)
        return body

    @staticmethod
    def create_plain_notification(text: str = "hello", **overrides) -> Dict[str, Any]:
        """Notification with no identifying fields (never deduplicated)."""
        body = {"text": text}
        body.update(overrides)
        return body


class RelayConfigFactory:
    """Writes relay configuration files."""

    @staticmethod
    def write(path: Path, **config) -> Path:
        path.write_text(json.dumps(config), encoding="utf-8")
        return path

    @staticmethod
    def write_enabled(
        path: Path,
        webhook_url: str = TEST_WEBHOOK_URL,
        thread_ts: Optional[str] = None
    ) -> Path:
        config: Dict[str, Any] = {"enabled": True, "webhookUrl": webhook_url}
        if thread_ts is not None:
            config["threadTs"] = thread_ts
        return RelayConfigFactory.write(path, **config)

    @staticmethod
    def write_disabled(path: Path) -> Path:
        return RelayConfigFactory.write(path, enabled=False)


class WebhookRecorder:
    """
    Fake Slack webhook.

    Records every request it receives and answers with a configurable status
    and body, or raises a configurable exception.
    """

    def __init__(self, status_code: int = 200, body: str = "ok"):
        self.status_code = status_code
        self.body = body
        self.error: Optional[Callable[[httpx.Request], Exception]] = None
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error(request)
        return httpx.Response(self.status_code, text=self.body)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    @property
    def payloads(self) -> List[Dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]

    def client(self) -> httpx.AsyncClient:
        """Async HTTP client routed to this recorder."""
        return httpx.AsyncClient(
            transport=httpx.MockTransport(self),
            headers={'Content-Type': 'application/json'}
        )
