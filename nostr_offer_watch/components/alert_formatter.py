"""
Alert formatting component for the Nostr Offer Watch system.

Renders an offer into the fixed three-line notification body.
"""

from typing import List, Optional

from ..models.alert import FormattedAlert
from ..models.offer import Offer
from .offer_extractor import format_fiat_amount, format_payment_methods, format_premium

DEFAULT_TITLE = "Oferta encontrada!"
DEFAULT_TAGS = ["rotating_light"]


class AlertFormatter:
    """Formats offers into notification messages."""

    def __init__(self, title: str = DEFAULT_TITLE, tags: Optional[List[str]] = None):
        """
        Initialize the alert formatter.

        Args:
            title: Notification title
            tags: Tag/icon hints passed along with the notification
        """
        self.title = title
        self.tags = list(DEFAULT_TAGS if tags is None else tags)

    def render_message(self, offer: Offer) -> str:
        """
        Render the message body for an offer.

        Raises:
            ValueError: If the offer's fiat amount cannot be formatted
        """
        amount = format_fiat_amount(offer.fiat_amounts)
        if amount is None:
            raise ValueError(f"Offer {offer.id} has an invalid fiat amount")

        return (
            f"Valor: R$ {amount}\n"
            f"Pagamento via: {format_payment_methods(offer.payment_methods)}\n"
            f"Spread: {format_premium(offer.premium_percent)}%"
        )

    def format_alert(self, offer: Offer) -> FormattedAlert:
        """Build the alert for an offer."""
        alert = FormattedAlert(
            title=self.title,
            message=self.render_message(offer),
            tags=list(self.tags),
        )
        alert.validate()
        return alert
