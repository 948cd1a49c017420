"""Filter policy deciding which offers deserve a notification."""

import math

from ..models.offer import Offer, OfferSide


class FilterPolicy:
    """Pure predicate over extracted offers.

    Currency, status and source are matched by the relay query itself and
    are not checked again here.
    """

    def __init__(self, max_premium: float = 2.0):
        """Initialize filter policy with the maximum accepted premium."""
        self.max_premium = max_premium

    def accept(self, offer: Offer) -> bool:
        """Return True if the offer is a sell offer within the premium limit."""
        if offer.side is not OfferSide.SELL:
            return False

        if not math.isfinite(offer.premium_percent):
            return False

        return offer.premium_percent <= self.max_premium
