"""
Time-windowed duplicate suppression for outbound notifications.

Upstream producers retry, so the same logical event (same task, transition
and actor) can reach the relay several times in quick succession. The
Deduplicator remembers when each event signature was last admitted and
reports repeats inside the window as duplicates.
"""

import math
import threading
from typing import Dict, Optional

from slack_relay.utils.logger import get_module_logger
from slack_relay.utils.timestamp import now_ms

logger = get_module_logger(__name__)


class Deduplicator:
    """
    Self-expiring signature cache.

    Every check first prunes stale entries, so no entry outlives the window
    by more than the gap between two requests. Prune, lookup and insert run
    under one lock: two concurrent identical events can never both be
    admitted as first occurrences.
    """

    _instance: Optional["Deduplicator"] = None
    _instance_lock = threading.Lock()

    def __init__(self, window_ms: int):
        """
        Initialize the cache.

        Args:
            window_ms: Suppression window in milliseconds. Zero or negative
                disables suppression entirely.
        """
        self.window_ms = window_ms
        self._entries: Dict[str, float] = {}
        self._lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> "Deduplicator":
        """Get the process-wide instance, sized from settings on first use."""
        with cls._instance_lock:
            if cls._instance is None:
                from slack_relay.config.settings import get_settings
                cls._instance = cls(get_settings().dedupe_window_ms)
            return cls._instance

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    @property
    def enabled(self) -> bool:
        return self.window_ms > 0

    def is_duplicate(self, signature: str, now: Optional[int] = None) -> bool:
        """
        Check a signature and record it if it is admitted.

        A fresh hit leaves the stored timestamp alone, so the window stays
        anchored to the last admitted occurrence. A miss (absent or stale)
        stores ``now``.

        Args:
            signature: Event signature; empty means "not deduplicable"
            now: Current time in ms since epoch (defaults to the wall clock)

        Returns:
            True if the signature was admitted less than ``window_ms`` ago
        """
        if not signature or not self.enabled:
            return False

        if now is None:
            now = now_ms()

        with self._lock:
            self._prune_locked(now)

            last_seen = self._entries.get(signature)
            if last_seen is not None and now - last_seen < self.window_ms:
                logger.debug(f"Duplicate signature '{signature}' (seen {now - last_seen}ms ago)")
                return True

            self._entries[signature] = now
            return False

    def prune(self, now: Optional[int] = None) -> int:
        """
        Evict entries older than the window.

        Args:
            now: Current time in ms since epoch (defaults to the wall clock)

        Returns:
            Number of evicted entries
        """
        if now is None:
            now = now_ms()
        with self._lock:
            return self._prune_locked(now)

    def clear(self) -> None:
        """Forget every signature."""
        with self._lock:
            self._entries.clear()

    def _prune_locked(self, now: float) -> int:
        # Corrupt timestamps are evicted too, never retained forever
        stale = [
            signature
            for signature, last_seen in self._entries.items()
            if not _is_valid_timestamp(last_seen) or now - last_seen > self.window_ms
        ]
        for signature in stale:
            del self._entries[signature]

        if stale:
            logger.debug(f"Pruned {len(stale)} expired dedupe entries, {len(self._entries)} remaining")
        return len(stale)


def _is_valid_timestamp(value) -> bool:
    return (
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def get_deduplicator() -> Deduplicator:
    """Get the process-wide Deduplicator instance."""
    return Deduplicator.get_instance()
