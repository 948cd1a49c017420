"""
Service layer for the Nostr Offer Watch system.

This module contains the stateful services: configuration loading, the
persisted dedup store and the idempotent notifier.
"""

from .config_manager import ConfigurationManager
from .dedup_store import DedupStore
from .notifier import Notifier

__all__ = [
    "ConfigurationManager",
    "DedupStore",
    "Notifier",
]
