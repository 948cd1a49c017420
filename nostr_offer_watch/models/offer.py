"""
Offer data models for the Nostr Offer Watch system.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class OfferSide(Enum):
    """Side of the order book an offer sits on."""

    BUY = "buy"
    SELL = "sell"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str) -> "OfferSide":
        """Map a raw ``k`` tag value to a side."""
        for side in (cls.BUY, cls.SELL):
            if value == side.value:
                return side
        return cls.OTHER


class FailureReason(Enum):
    """Reasons an event cannot be turned into an offer."""

    MISSING_SIDE = "missing_side"
    MISSING_FIAT_AMOUNT = "missing_fiat_amount"
    MISSING_PAYMENT_METHODS = "missing_payment_methods"
    INVALID_PREMIUM = "invalid_premium"
    INVALID_FIAT_AMOUNT = "invalid_fiat_amount"


@dataclass(frozen=True)
class Offer:
    """Structured offer extracted from an event's tags."""

    id: str
    side: OfferSide
    premium_percent: float
    fiat_amounts: Tuple[float, ...]
    payment_methods: Tuple[str, ...]

    def validate(self) -> bool:
        """Validate the offer data."""
        if not self.id or not self.id.strip():
            raise ValueError("Offer ID cannot be empty")

        if not isinstance(self.side, OfferSide):
            raise ValueError("side must be an OfferSide enum")

        if not isinstance(self.premium_percent, (int, float)):
            raise ValueError("premium_percent must be a number")

        if len(self.fiat_amounts) not in (1, 2):
            raise ValueError("fiat_amounts must hold one or two values")

        for amount in self.fiat_amounts:
            if not math.isfinite(amount) or amount < 0:
                raise ValueError("Fiat amounts must be finite and non-negative")

        if not self.payment_methods:
            raise ValueError("At least one payment method is required")

        return True


@dataclass(frozen=True)
class ExtractionFailure:
    """Why an event was discarded during extraction."""

    event_id: str
    reason: FailureReason
    detail: str = ""
