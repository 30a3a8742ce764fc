"""
Notification data models for slack-relay.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _coerce_optional_str(value: Any) -> Optional[str]:
    """Treat falsy values as absent and stringify everything else."""
    if not value:
        return None
    if isinstance(value, str):
        return value
    return str(value)


class TaskRef(BaseModel):
    """Reference to the task the notification is about."""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = Field(None, description="Task identifier")

    coerce_strings = field_validator('id', mode='before')(_coerce_optional_str)


class Transition(BaseModel):
    """State transition that triggered the notification."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    from_state: Optional[str] = Field(None, alias="from", description="Source state")
    to_state: Optional[str] = Field(None, alias="to", description="Destination state")

    coerce_strings = field_validator('from_state', 'to_state', mode='before')(_coerce_optional_str)


class NotificationRequest(BaseModel):
    """
    API input model - what event producers POST to /notify.

    Only `text` is required for delivery. `task`, `transition` and `actor`
    identify the logical event and feed the dedupe signature.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    text: Optional[str] = Field(None, description="Message text (required, non-blank)")
    thread_ts: Optional[str] = Field(None, alias="threadTs", description="Slack thread to reply in")
    task: Optional[TaskRef] = Field(None, description="Task the event belongs to")
    transition: Optional[Transition] = Field(None, description="State transition of the task")
    actor: Optional[str] = Field(None, description="Who caused the transition")

    coerce_strings = field_validator('text', 'thread_ts', 'actor', mode='before')(_coerce_optional_str)

    @field_validator('task', 'transition', mode='before')
    @classmethod
    def drop_non_objects(cls, value: Any) -> Any:
        """Treat anything but a non-empty object as absent; it only weakens the signature."""
        if isinstance(value, dict) and value:
            return value
        return None

    @property
    def clean_text(self) -> str:
        """Message text with surrounding whitespace removed."""
        return (self.text or "").strip()

    def dedupe_signature(self) -> str:
        """
        Build the deterministic key identifying this logical event.

        Returns:
            Lower-cased ``task|from|to|actor`` string, or an empty string when
            none of the identifying fields are present.
        """
        parts = [
            (self.task.id if self.task else None) or "",
            (self.transition.from_state if self.transition else None) or "",
            (self.transition.to_state if self.transition else None) or "",
            self.actor or "",
        ]
        if not any(parts):
            return ""
        return "|".join(parts).lower()


class SlackPayload(BaseModel):
    """Outbound body POSTed to the Slack incoming webhook."""

    text: str
    thread_ts: Optional[str] = None

    def to_json(self) -> Dict[str, Any]:
        """Serialize for the webhook, omitting an unset thread."""
        return self.model_dump(exclude_none=True)


class DeliveryResult(BaseModel):
    """Normalized webhook response."""

    ok: bool
    status: int
    body: str = ""


class RelayOutcome(str, Enum):
    """Non-error results of relaying a notification."""

    DELIVERED = "delivered"
    SKIPPED_DISABLED = "disabled"
    SKIPPED_DUPLICATE = "duplicate"

    @property
    def is_skip(self) -> bool:
        return self is not RelayOutcome.DELIVERED


class RelayResponse(BaseModel):
    """JSON body returned by every relay endpoint."""

    ok: bool
    service: Optional[str] = None
    skipped: Optional[str] = None
    error: Optional[str] = None
    response: Optional[str] = Field(None, description="Excerpt of the upstream response body")
