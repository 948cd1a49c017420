"""
Data models for the Nostr Offer Watch system.

This module contains all data classes and type definitions used throughout
the application for representing relay events, offers, configuration, and
run results.
"""

from .alert import FormattedAlert
from .config import (
    Configuration,
    NotificationConfig,
    OfferCriteria,
    RelayConfig,
    SystemConfig,
)
from .delivery import DeliveryResult, NotificationOutcome
from .event import RawEvent
from .offer import ExtractionFailure, FailureReason, Offer, OfferSide
from .query import QueryWindow, RelayFilter
from .report import RunReport

__all__ = [
    "RawEvent",
    "Offer",
    "OfferSide",
    "ExtractionFailure",
    "FailureReason",
    "QueryWindow",
    "RelayFilter",
    "FormattedAlert",
    "DeliveryResult",
    "NotificationOutcome",
    "RunReport",
    "Configuration",
    "RelayConfig",
    "OfferCriteria",
    "NotificationConfig",
    "SystemConfig",
]
