"""
Configuration management system for the Nostr Offer Watch.
"""

import json
import os
from typing import Any, Dict, Optional

import yaml

from ..models.config import (
    Configuration,
    NotificationConfig,
    OfferCriteria,
    RelayConfig,
    SystemConfig,
)

DEFAULT_CONFIG_PATHS = [
    "config/config.yaml",
    "config/config.yml",
    "config/config.json",
    "config.yaml",
    "config.yml",
    "config.json",
]


class ConfigurationManager:
    """Loads and validates system configuration."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the configuration manager.

        Args:
            config_path: Path to the configuration file. If None, standard
                locations are searched and built-in defaults are used when
                none exists.
        """
        self.config_path = config_path or self._find_config_file()
        self._config: Optional[Configuration] = None

    def _find_config_file(self) -> Optional[str]:
        """Find the configuration file in standard locations."""
        for path in DEFAULT_CONFIG_PATHS:
            if os.path.exists(path):
                return path
        return None

    def load_config(self) -> Configuration:
        """
        Load configuration from file, or defaults when there is none.

        Returns:
            Configuration object with validated settings.

        Raises:
            ValueError: If configuration is invalid or file cannot be read.
            FileNotFoundError: If an explicit configuration file doesn't exist.
        """
        if self.config_path is None:
            config = Configuration()
            config.validate()
            self._config = config
            return config

        if not os.path.exists(self.config_path):
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                if self.config_path.endswith(".json"):
                    raw_config = json.load(f)
                else:
                    raw_config = yaml.safe_load(f)

            raw_config = self._expand_env_vars(raw_config or {})

            config = self._parse_config(raw_config)
            config.validate()

        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}")
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in configuration file: {e}")
        except (TypeError, AttributeError) as e:
            raise ValueError(f"Error loading configuration: {e}")

        self._config = config
        return config

    def _expand_env_vars(self, obj: Any) -> Any:
        """Recursively expand environment variables in configuration."""
        if isinstance(obj, dict):
            return {key: self._expand_env_vars(value) for key, value in obj.items()}
        elif isinstance(obj, list):
            return [self._expand_env_vars(item) for item in obj]
        elif isinstance(obj, str):
            # Expand ${VAR_NAME} patterns
            if obj.startswith("${") and obj.endswith("}"):
                var_name = obj[2:-1]
                env_value = os.getenv(var_name)
                if env_value is None:
                    raise ValueError(f"Environment variable '{var_name}' not found")
                return env_value
            return obj
        else:
            return obj

    def _parse_config(self, raw_config: Dict[str, Any]) -> Configuration:
        """Parse raw configuration dictionary into Configuration object."""
        if not isinstance(raw_config, dict):
            raise ValueError("Configuration root must be a mapping")

        relays_data = raw_config.get("relays", {})
        # A bare list is shorthand for just the URLs
        if isinstance(relays_data, list):
            relays_data = {"urls": relays_data}
        relay_defaults = RelayConfig()
        relays = RelayConfig(
            urls=relays_data.get("urls", relay_defaults.urls),
            connect_timeout=float(relays_data.get("connect_timeout", relay_defaults.connect_timeout)),
            query_max_wait=float(relays_data.get("query_max_wait", relay_defaults.query_max_wait)),
            verify_events=bool(relays_data.get("verify_events", relay_defaults.verify_events)),
        )

        criteria_data = raw_config.get("criteria", {})
        criteria_defaults = OfferCriteria()
        criteria = OfferCriteria(
            event_kind=criteria_data.get("event_kind", criteria_defaults.event_kind),
            currency=criteria_data.get("currency", criteria_defaults.currency),
            status=criteria_data.get("status", criteria_defaults.status),
            source=criteria_data.get("source", criteria_defaults.source),
            max_premium=float(criteria_data.get("max_premium", criteria_defaults.max_premium)),
            lookback_days=criteria_data.get("lookback_days", criteria_defaults.lookback_days),
        )

        notification_data = raw_config.get("notification", {})
        notification_defaults = NotificationConfig()
        notification = NotificationConfig(
            url=notification_data.get("url", notification_defaults.url),
            title=notification_data.get("title", notification_defaults.title),
            tags=notification_data.get("tags", notification_defaults.tags),
            request_timeout=float(
                notification_data.get("request_timeout", notification_defaults.request_timeout)
            ),
            max_retries=notification_data.get("max_retries", notification_defaults.max_retries),
        )

        system_data = raw_config.get("system", {})
        system_defaults = SystemConfig()
        system = SystemConfig(
            dedup_file=system_data.get("dedup_file", system_defaults.dedup_file),
            log_level=system_data.get("log_level", system_defaults.log_level),
            log_dir=system_data.get("log_dir", system_defaults.log_dir),
        )

        return Configuration(
            relays=relays,
            criteria=criteria,
            notification=notification,
            system=system,
        )

    def get_config(self) -> Configuration:
        """
        Get current configuration, loading if necessary.

        Returns:
            Current configuration object.
        """
        if self._config is None:
            return self.load_config()
        return self._config
