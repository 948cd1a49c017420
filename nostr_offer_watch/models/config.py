"""
Configuration models for the system.
"""

from dataclasses import dataclass, field
from typing import List
from urllib.parse import urlparse

DEFAULT_RELAYS = [
    "wss://nostr.satstralia.com",
    "wss://relay.0xchat.com",
    "wss://relay.damus.io",
    "wss://wot.nostr.party",
    "wss://nostr.wine",
    "wss://relay.snort.social",
    "wss://nos.lol",
    "wss://relay.primal.net",
]


@dataclass
class RelayConfig:
    """Relays to query and transport limits."""

    urls: List[str] = field(default_factory=lambda: list(DEFAULT_RELAYS))
    connect_timeout: float = 10.0
    query_max_wait: float = 15.0
    verify_events: bool = True

    def validate(self) -> bool:
        """Validate relay configuration."""
        if not isinstance(self.urls, list):
            raise ValueError("Relay URLs must be a list")

        if not self.urls:
            raise ValueError("At least one relay must be configured")

        for url in self.urls:
            if not isinstance(url, str) or not url.strip():
                raise ValueError("All relay URLs must be non-empty strings")

            parsed_url = urlparse(url)
            if parsed_url.scheme not in ["ws", "wss"] or not parsed_url.netloc:
                raise ValueError(f"Relay URL must use ws or wss: {url}")

        if self.connect_timeout <= 0:
            raise ValueError("Relay connect timeout must be positive")

        if self.query_max_wait <= 0:
            raise ValueError("Relay query max wait must be positive")

        return True


@dataclass
class OfferCriteria:
    """Which offers are worth a notification."""

    event_kind: int = 38383
    currency: str = "BRL"
    status: str = "pending"
    source: str = "robosats"
    max_premium: float = 2.0
    lookback_days: int = 15

    def validate(self) -> bool:
        """Validate offer criteria."""
        if not isinstance(self.event_kind, int) or self.event_kind < 0:
            raise ValueError("Event kind must be a non-negative integer")

        for name in ("currency", "status", "source"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"{name} must be a non-empty string")

        if not isinstance(self.max_premium, (int, float)):
            raise ValueError("Maximum premium must be a number")

        if not isinstance(self.lookback_days, int) or self.lookback_days <= 0:
            raise ValueError("Lookback days must be a positive integer")

        return True


@dataclass
class NotificationConfig:
    """ntfy endpoint settings."""

    url: str = "https://ntfy.sh/offers"
    title: str = "Oferta encontrada!"
    tags: List[str] = field(default_factory=lambda: ["rotating_light"])
    request_timeout: float = 30.0
    max_retries: int = 0

    def validate(self) -> bool:
        """Validate notification configuration."""
        if not self.url or not self.url.strip():
            raise ValueError("Notification URL cannot be empty")

        parsed_url = urlparse(self.url)
        if parsed_url.scheme not in ["http", "https"] or not parsed_url.netloc:
            raise ValueError(f"Notification URL must use HTTP or HTTPS: {self.url}")

        if not self.title or not self.title.strip():
            raise ValueError("Notification title cannot be empty")

        if not isinstance(self.tags, list):
            raise ValueError("Notification tags must be a list")

        if self.request_timeout <= 0:
            raise ValueError("Request timeout must be positive")

        if not isinstance(self.max_retries, int) or self.max_retries < 0:
            raise ValueError("Max retries must be a non-negative integer")

        return True


@dataclass
class SystemConfig:
    """Process-level settings."""

    dedup_file: str = "./processed_events.json"
    log_level: str = "INFO"
    log_dir: str = "logs"

    def validate(self) -> bool:
        """Validate system settings."""
        if not self.dedup_file or not self.dedup_file.strip():
            raise ValueError("Dedup file path cannot be empty")

        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.log_level.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")

        return True


@dataclass
class Configuration:
    """System configuration."""

    relays: RelayConfig = field(default_factory=RelayConfig)
    criteria: OfferCriteria = field(default_factory=OfferCriteria)
    notification: NotificationConfig = field(default_factory=NotificationConfig)
    system: SystemConfig = field(default_factory=SystemConfig)

    def validate(self) -> bool:
        """Validate system configuration."""
        self.relays.validate()
        self.criteria.validate()
        self.notification.validate()
        self.system.validate()
        return True
