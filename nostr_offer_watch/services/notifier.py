"""
Idempotent offer notification.

The notifier renders an offer, checks the dedup store, delivers the alert
and records it. An offer is only recorded after the endpoint accepted it,
so a failed delivery is retried on the next run.
"""

from ..components.alert_formatter import AlertFormatter
from ..interfaces import IMessageDispatcher
from ..models.delivery import NotificationOutcome
from ..models.offer import Offer
from ..utils.error_handling import ErrorCategory, ErrorSeverity, get_error_tracker
from ..utils.logging import get_logger
from .dedup_store import DedupStore

logger = get_logger("notifier")


class Notifier:
    """Delivers one notification per logical offer."""

    def __init__(
        self,
        dispatcher: IMessageDispatcher,
        dedup_store: DedupStore,
        formatter: AlertFormatter,
    ):
        """
        Initialize notifier.

        Args:
            dispatcher: Delivery channel
            dedup_store: Store of already notified offers, owned by the caller
            formatter: Renders offers into alerts
        """
        self.dispatcher = dispatcher
        self.dedup_store = dedup_store
        self.formatter = formatter

    def notify(self, offer: Offer) -> NotificationOutcome:
        """
        Notify about an offer unless it was already notified.

        Args:
            offer: Offer that passed the filter policy

        Returns:
            NotificationOutcome of this call
        """
        alert = self.formatter.format_alert(offer)
        message_hash = alert.content_hash

        if self.dedup_store.contains(offer.id, message_hash):
            logger.info(
                f"Event {offer.id} or message hash {message_hash} already processed, "
                "skipping notification"
            )
            return NotificationOutcome.DUPLICATE

        logger.info("Sending notification", extra={"event_id": offer.id, "alert": alert.message})
        result = self.dispatcher.send_alert(alert)

        if not result.success:
            get_error_tracker().record_error(
                component="notifier",
                category=ErrorCategory.MESSAGE_DELIVERY,
                severity=ErrorSeverity.MEDIUM,
                message=f"Notification error for event {offer.id}: {result.error_message}",
                context={"event_id": offer.id, "status_code": result.status_code},
            )
            return NotificationOutcome.FAILED

        self.dedup_store.mark(offer.id, message_hash)
        self.dedup_store.save()

        logger.info(f"Notification sent for event {offer.id}, message hash {message_hash}")
        return NotificationOutcome.SENT
