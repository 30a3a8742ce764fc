"""
Timestamp utilities for slack-relay.
"""

from datetime import datetime, timezone


def now_ms() -> int:
    """Get current timestamp as milliseconds since epoch (UTC)."""
    return int(datetime.now(timezone.utc).timestamp() * 1000)
