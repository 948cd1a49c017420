"""
Run orchestrator for the Nostr Offer Watch system.

This module wires the components together for one pass:
connect, query, then extract, filter and notify every event, and always
tear the relay connections down. The process is expected to be started
again by an external scheduler, so nothing but the dedup file survives
between passes.
"""

from datetime import datetime
from typing import Optional

from .components.alert_formatter import AlertFormatter
from .components.filter_policy import FilterPolicy
from .components.message_dispatcher import NtfyDispatcher
from .components.offer_extractor import OfferExtractor
from .components.relay_aggregator import RelayAggregator
from .interfaces import IFilterPolicy, INotifier, IOfferExtractor, IRelayAggregator
from .models.config import Configuration
from .models.delivery import NotificationOutcome
from .models.event import RawEvent
from .models.offer import ExtractionFailure
from .models.query import QueryWindow, RelayFilter
from .models.report import RunReport
from .services.dedup_store import DedupStore
from .services.notifier import Notifier
from .utils.error_handling import ErrorCategory, ErrorSeverity, get_error_tracker
from .utils.logging import get_logger


class RunOrchestrator:
    """
    Single-pass pipeline over the configured relays.

    Collaborators default to the production implementations built from
    the configuration; any of them can be injected instead.
    """

    def __init__(
        self,
        config: Configuration,
        aggregator: Optional[IRelayAggregator] = None,
        extractor: Optional[IOfferExtractor] = None,
        policy: Optional[IFilterPolicy] = None,
        dedup_store: Optional[DedupStore] = None,
        notifier: Optional[INotifier] = None,
    ):
        """
        Initialize the run orchestrator.

        Args:
            config: Validated system configuration
            aggregator: Relay aggregator to query
            extractor: Offer extractor
            policy: Filter policy
            dedup_store: Dedup store; owned by this orchestrator
            notifier: Notifier; must share ``dedup_store`` when injected
        """
        self.config = config
        self.logger = get_logger("orchestrator")

        if aggregator is None:
            aggregator = RelayAggregator(
                config.relays.urls,
                connect_timeout=config.relays.connect_timeout,
                query_timeout=config.relays.query_max_wait,
                verify_events=config.relays.verify_events,
            )
        if extractor is None:
            extractor = OfferExtractor()
        if policy is None:
            policy = FilterPolicy(config.criteria.max_premium)
        if dedup_store is None:
            dedup_store = DedupStore(config.system.dedup_file)
        if notifier is None:
            notifier = Notifier(
                dispatcher=NtfyDispatcher(
                    config.notification.url,
                    max_retries=config.notification.max_retries,
                    timeout=config.notification.request_timeout,
                ),
                dedup_store=dedup_store,
                formatter=AlertFormatter(config.notification.title, config.notification.tags),
            )

        self.aggregator = aggregator
        self.extractor = extractor
        self.policy = policy
        self.dedup_store = dedup_store
        self.notifier = notifier

    def build_filter(self, window: QueryWindow) -> RelayFilter:
        """Build the relay filter for the configured offer criteria."""
        criteria = self.config.criteria
        return RelayFilter(
            kinds=[criteria.event_kind],
            window=window,
            tag_matches={
                "f": [criteria.currency],
                "s": [criteria.status],
                "y": [criteria.source],
            },
        )

    async def run(self, now: Optional[datetime] = None) -> RunReport:
        """
        Execute one pass.

        Args:
            now: Reference time for the query window; defaults to the
                current time

        Returns:
            RunReport describing the pass
        """
        error_tracker = get_error_tracker()
        error_tracker.reset()

        report = RunReport()
        self.dedup_store.load()

        window = QueryWindow.trailing(self.config.criteria.lookback_days, now)
        window.validate()
        report.window = window
        relay_filter = self.build_filter(window)

        self.logger.info(
            f"Filtering events from: {window.start.isoformat()} (Unix: {window.since}) "
            f"to: {window.end.isoformat()} (Unix: {window.until})",
            extra={"filter": relay_filter.to_dict()},
        )

        try:
            self.logger.info("Connecting to Nostr relays...")
            connected, failed = await self.aggregator.connect_all()
            report.relays_connected = connected
            report.relays_failed = failed

            try:
                events = await self.aggregator.fetch(relay_filter)
            except Exception as e:
                report.query_failed = True
                error_tracker.record_error(
                    component="orchestrator",
                    category=ErrorCategory.RELAY_QUERY,
                    severity=ErrorSeverity.HIGH,
                    message=f"Error querying Nostr events: {e}",
                    exception=e,
                )
                return report

            report.events_received = len(events)
            if not events:
                self.logger.info(
                    f"No events found for kind {self.config.criteria.event_kind}, "
                    f"last {self.config.criteria.lookback_days} days, "
                    f"and \"{self.config.criteria.status}\" status"
                )
            else:
                self.logger.info(f"Found {len(events)} events of kind {self.config.criteria.event_kind}")

            for event in events:
                self._process_event(event, report)

        finally:
            await self._teardown()
            report.error_counts = error_tracker.get_error_stats()["error_counts"]
            self.logger.info("Run completed", extra=report.to_dict())

        return report

    def _process_event(self, event: RawEvent, report: RunReport) -> None:
        """Extract, filter and notify a single event."""
        result = self.extractor.extract(event)
        if isinstance(result, ExtractionFailure):
            report.extraction_failures += 1
            return

        report.offers_extracted += 1

        if not self.policy.accept(result):
            report.offers_rejected += 1
            return

        try:
            outcome = self.notifier.notify(result)
        except ValueError as e:
            report.extraction_failures += 1
            get_error_tracker().record_error(
                component="orchestrator",
                category=ErrorCategory.EXTRACTION,
                severity=ErrorSeverity.LOW,
                message=f"Event {event.id} could not be rendered: {e}",
                context={"event_id": event.id},
            )
            return

        if outcome is NotificationOutcome.SENT:
            report.notifications_sent += 1
        elif outcome is NotificationOutcome.DUPLICATE:
            report.duplicates_skipped += 1
        else:
            report.delivery_failures += 1

    async def _teardown(self) -> None:
        self.logger.info("Closing Nostr relay connections")
        try:
            await self.aggregator.close_all()
        except Exception as e:
            self.logger.warning(f"Error closing relay connections: {e}")
