"""
Configuration-related exceptions for slack-relay.
"""

from slack_relay.services.exceptions import RelayError


class ConfigurationError(RelayError):
    """
    Raised when the relay configuration cannot be used.

    Covers:
    - Configuration file missing or unreadable
    - YAML/JSON syntax errors
    - Pydantic validation failures
    - Relay enabled without a webhook URL
    """

    status_code = 500
