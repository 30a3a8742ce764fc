# Models package
from .notification import (
    DeliveryResult,
    NotificationRequest,
    RelayOutcome,
    RelayResponse,
    SlackPayload,
    TaskRef,
    Transition,
)
from .relay_config import RelayConfig

__all__ = [
    "DeliveryResult",
    "NotificationRequest",
    "RelayConfig",
    "RelayOutcome",
    "RelayResponse",
    "SlackPayload",
    "TaskRef",
    "Transition",
]
