"""
Protocol interfaces for the Nostr Offer Watch system.

These protocols mark the seams between the run orchestrator and its
collaborators so tests can substitute any of them.
"""

from typing import List, Protocol, Tuple, Union

from .models.alert import FormattedAlert
from .models.delivery import DeliveryResult, NotificationOutcome
from .models.event import RawEvent
from .models.offer import ExtractionFailure, Offer
from .models.query import RelayFilter


class IRelayAggregator(Protocol):
    """Protocol for multi-relay querying."""

    async def connect_all(self) -> Tuple[List[str], List[str]]:
        """Connect to all relays, returning (connected, failed) URLs."""
        ...

    async def fetch(self, relay_filter: RelayFilter) -> List[RawEvent]:
        """Return distinct events matching the filter."""
        ...

    async def close_all(self) -> None:
        """Close every relay connection."""
        ...


class IOfferExtractor(Protocol):
    """Protocol for turning events into offers."""

    def extract(self, event: RawEvent) -> Union[Offer, ExtractionFailure]:
        """Extract an offer or report why it cannot be."""
        ...


class IFilterPolicy(Protocol):
    """Protocol for offer acceptance rules."""

    def accept(self, offer: Offer) -> bool:
        """Decide whether an offer should be notified."""
        ...


class IMessageDispatcher(Protocol):
    """Protocol for message dispatching components."""

    def send_alert(self, alert: FormattedAlert) -> DeliveryResult:
        """Send alert message to configured platform."""
        ...


class INotifier(Protocol):
    """Protocol for idempotent offer notification."""

    def notify(self, offer: Offer) -> NotificationOutcome:
        """Notify about an offer at most once."""
        ...
