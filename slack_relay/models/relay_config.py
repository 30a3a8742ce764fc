"""
Relay configuration snapshot model.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RelayConfig(BaseModel):
    """
    Point-in-time view of the relay configuration file.

    Mirrors the file schema ``{enabled, webhookUrl?, threadTs?}``. Instances
    are frozen; a fresh one is loaded for every request.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    enabled: bool = Field(False, description="Master switch for outbound delivery")
    webhook_url: Optional[str] = Field(
        None,
        alias="webhookUrl",
        description="Slack incoming webhook URL (required when enabled)"
    )
    thread_ts: Optional[str] = Field(
        None,
        alias="threadTs",
        description="Default thread for notifications that do not name one"
    )

    @field_validator('webhook_url', 'thread_ts', mode='before')
    @classmethod
    def blank_to_none(cls, v):
        """Treat null and whitespace-only values as unset."""
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @classmethod
    def disabled(cls) -> "RelayConfig":
        """Trivial snapshot used whenever the relay is switched off."""
        return cls(enabled=False)
