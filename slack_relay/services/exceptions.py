"""
Exceptions raised while relaying a notification.

Each exception carries the HTTP status the /notify endpoint answers with.
"""

from typing import Optional


class RelayError(Exception):
    """Base class for relay failures that map to a specific HTTP status."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotificationValidationError(RelayError):
    """The caller sent an unusable notification (missing text or bad JSON)."""

    status_code = 400


class UpstreamDeliveryError(RelayError):
    """The webhook answered with a non-2xx status or did not answer in time."""

    status_code = 502

    def __init__(
        self,
        message: str,
        upstream_status: Optional[int] = None,
        response_excerpt: Optional[str] = None
    ):
        super().__init__(message)
        self.upstream_status = upstream_status
        self.response_excerpt = response_excerpt
