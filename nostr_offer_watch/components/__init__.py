"""
Core components for the Nostr Offer Watch system.

This module contains the components that handle relay access, offer
extraction, filtering, alert formatting, and message dispatching.
"""

from .alert_formatter import AlertFormatter
from .filter_policy import FilterPolicy
from .message_dispatcher import BaseMessageDispatcher, DeliveryError, NtfyDispatcher
from .offer_extractor import (
    OfferExtractor,
    format_fiat_amount,
    format_payment_methods,
    format_premium,
)
from .relay_aggregator import RelayAggregator

__all__ = [
    "AlertFormatter",
    "FilterPolicy",
    "BaseMessageDispatcher",
    "DeliveryError",
    "NtfyDispatcher",
    "OfferExtractor",
    "format_fiat_amount",
    "format_payment_methods",
    "format_premium",
    "RelayAggregator",
]
