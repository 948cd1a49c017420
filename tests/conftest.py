"""
Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Nostr Offer Watch test suite.
"""

from datetime import datetime, timezone
from unittest.mock import Mock

import pytest
from relay_fixtures import build_event_dict, offer_tags

from nostr_offer_watch.models.config import (
    Configuration,
    NotificationConfig,
    RelayConfig,
    SystemConfig,
)
from nostr_offer_watch.models.delivery import DeliveryResult
from nostr_offer_watch.models.event import RawEvent
from nostr_offer_watch.models.offer import Offer, OfferSide
from nostr_offer_watch.utils.error_handling import get_error_tracker


@pytest.fixture(autouse=True)
def reset_error_tracker():
    """Start every test with an empty error tracker."""
    get_error_tracker().reset()
    yield
    get_error_tracker().reset()


@pytest.fixture
def sample_event_dict():
    """Create a valid sell offer event dict."""
    return build_event_dict(offer_tags())


@pytest.fixture
def sample_event(sample_event_dict):
    """Create a sample RawEvent for testing."""
    return RawEvent.from_dict(sample_event_dict)


@pytest.fixture
def sample_offer():
    """Create a sample Offer for testing."""
    return Offer(
        id="event_123",
        side=OfferSide.SELL,
        premium_percent=1.5,
        fiat_amounts=(100.5,),
        payment_methods=("pix",),
    )


@pytest.fixture
def successful_dispatcher():
    """Create a dispatcher mock that always succeeds."""
    dispatcher = Mock()
    dispatcher.send_alert.return_value = DeliveryResult(
        success=True,
        delivery_time=datetime.now(timezone.utc),
        error_message=None,
        status_code=200,
    )
    return dispatcher


@pytest.fixture
def failing_dispatcher():
    """Create a dispatcher mock that always fails."""
    dispatcher = Mock()
    dispatcher.send_alert.return_value = DeliveryResult(
        success=False,
        delivery_time=datetime.now(timezone.utc),
        error_message="Failed to send notification: 500 Internal Server Error",
        status_code=500,
    )
    return dispatcher


@pytest.fixture
def sample_configuration(tmp_path):
    """Create a sample Configuration for testing."""
    return Configuration(
        relays=RelayConfig(
            urls=["wss://relay.one", "wss://relay.two", "wss://relay.three"],
            connect_timeout=1.0,
            query_max_wait=1.0,
        ),
        notification=NotificationConfig(url="https://ntfy.example/offers"),
        system=SystemConfig(
            dedup_file=str(tmp_path / "processed_events.json"),
            log_dir=str(tmp_path / "logs"),
        ),
    )


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")


def pytest_collection_modifyitems(config, items):
    """Add the unit marker to every test not marked integration."""
    for item in items:
        if not any(marker.name == "integration" for marker in item.iter_markers()):
            item.add_marker(pytest.mark.unit)
