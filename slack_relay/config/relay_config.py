"""
Relay configuration loading.

The relay configuration file is re-read on every call so that enabling,
disabling or re-pointing the relay takes effect without a restart.
"""

from pathlib import Path
from typing import Union

import yaml
from pydantic import ValidationError

from slack_relay.config.exceptions import ConfigurationError
from slack_relay.models.relay_config import RelayConfig
from slack_relay.utils.logger import get_module_logger

logger = get_module_logger(__name__)


class RelayConfigLoader:
    """Loads fresh RelayConfig snapshots from a JSON (or YAML) file."""

    def __init__(self, config_path: Union[str, Path]):
        """
        Initialize the loader.

        Args:
            config_path: Location of the relay configuration file
        """
        self.config_path = Path(config_path)

    def load(self) -> RelayConfig:
        """
        Read and validate the configuration file.

        A disabled configuration short-circuits to a trivial snapshot without
        validating the remaining fields.

        Returns:
            RelayConfig snapshot

        Raises:
            ConfigurationError: If the file is missing, unreadable, malformed,
                or enables the relay without a webhook URL
        """
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                raw_config = yaml.safe_load(f)
        except FileNotFoundError:
            raise ConfigurationError(f"Relay config file not found: {self.config_path}") from None
        except OSError as e:
            raise ConfigurationError(f"Failed to read relay config {self.config_path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid syntax in relay config {self.config_path}: {e}") from e

        if raw_config is None:
            raw_config = {}
        if not isinstance(raw_config, dict):
            raise ConfigurationError(
                f"Relay config {self.config_path} must contain an object, got {type(raw_config).__name__}"
            )

        if not raw_config.get('enabled'):
            logger.debug(f"Relay disabled by {self.config_path}")
            return RelayConfig.disabled()

        try:
            config = RelayConfig.model_validate(raw_config)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid relay config {self.config_path}: {e}") from e

        # enabled may be a string such as "false" that only pydantic resolves
        if not config.enabled:
            return RelayConfig.disabled()

        if not config.webhook_url:
            raise ConfigurationError(f"Missing webhookUrl in {self.config_path}")

        return config
