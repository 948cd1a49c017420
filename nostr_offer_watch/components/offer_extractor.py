"""
Offer extraction components for the Nostr Offer Watch system.

This module turns the tag list of an order event into a typed Offer and
provides the text formatting used for amounts and payment methods.
"""

import logging
import math
import re
from decimal import Decimal
from typing import Optional, Sequence, Tuple, Union

from ..models.event import RawEvent
from ..models.offer import ExtractionFailure, FailureReason, Offer, OfferSide
from ..utils.error_handling import ErrorCategory, ErrorSeverity, get_error_tracker

logger = logging.getLogger(__name__)

SIDE_TAG = "k"
PREMIUM_TAG = "premium"
FIAT_AMOUNT_TAG = "fa"
PAYMENT_METHODS_TAG = "pm"

# Leading numeric prefix of a tag value
NUMBER_PREFIX = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_number(value: str) -> Optional[float]:
    """
    Parse the leading number of a tag value.

    Leading whitespace is skipped and trailing text ignored, so "2 " and
    "1_000" read as 2 and 1.

    Returns:
        The number, or None when the value does not start with one
    """
    match = NUMBER_PREFIX.match(value.lstrip())
    if match is None:
        return None
    return float(match.group(0).replace("Infinity", "inf"))


def format_fiat_amount(amounts: Sequence[float]) -> Optional[str]:
    """
    Format a fiat amount or range with two decimals.

    Args:
        amounts: One value, or a (low, high) pair

    Returns:
        "100.50" or "50.00 a 75.00", or None for any other count
    """
    if len(amounts) == 1:
        return f"{amounts[0]:.2f}"
    if len(amounts) == 2:
        return f"{amounts[0]:.2f} a {amounts[1]:.2f}"
    return None


def format_payment_methods(methods: Sequence[str]) -> str:
    """Join payment methods with " ou "."""
    return " ou ".join(methods)


def format_premium(premium: float) -> str:
    """
    Render a premium the shortest way.

    2.0 -> "2", 1.5 -> "1.5", 0.00001 -> "0.00001", 1e-07 -> "1e-7".
    Plain notation is used from 1e-6 up to 1e21, exponent notation outside.
    """
    if math.isnan(premium):
        return "NaN"
    if math.isinf(premium):
        return "Infinity" if premium > 0 else "-Infinity"
    if premium == 0:
        return "0"

    magnitude = abs(premium)
    if 1e-6 <= magnitude < 1e21:
        if premium.is_integer():
            return str(int(premium))
        return format(Decimal(repr(premium)), "f")

    mantissa, exponent = repr(premium).split("e")
    if mantissa.endswith(".0"):
        mantissa = mantissa[:-2]
    exponent_value = int(exponent)
    sign = "+" if exponent_value > 0 else "-"
    return f"{mantissa}e{sign}{abs(exponent_value)}"


class OfferExtractor:
    """Builds Offer records from raw relay events."""

    def extract(self, event: RawEvent) -> Union[Offer, ExtractionFailure]:
        """
        Extract an offer from an event's tags.

        The first tag with a given name wins. Failures are logged and
        returned, never raised.

        Args:
            event: Event to extract from

        Returns:
            Offer on success, ExtractionFailure otherwise
        """
        result = self._extract(event)

        if isinstance(result, ExtractionFailure):
            get_error_tracker().record_error(
                component="offer.extractor",
                category=ErrorCategory.EXTRACTION,
                severity=ErrorSeverity.LOW,
                message=f"Event {event.id} skipped: {result.detail}",
                context={"event_id": event.id, "reason": result.reason.value},
            )
        else:
            logger.debug(f"Extracted offer {result.id}")

        return result

    def _extract(self, event: RawEvent) -> Union[Offer, ExtractionFailure]:
        side_values = event.tag_values(SIDE_TAG)
        if not side_values:
            return ExtractionFailure(event.id, FailureReason.MISSING_SIDE, "missing side tag (k)")

        fiat_values = event.tag_values(FIAT_AMOUNT_TAG)
        payment_methods = event.tag_values(PAYMENT_METHODS_TAG)
        if fiat_values is None or not payment_methods:
            missing = FIAT_AMOUNT_TAG if fiat_values is None else PAYMENT_METHODS_TAG
            reason = (
                FailureReason.MISSING_FIAT_AMOUNT
                if fiat_values is None
                else FailureReason.MISSING_PAYMENT_METHODS
            )
            return ExtractionFailure(event.id, reason, f"missing required tag ({missing})")

        premium = self._parse_premium(event.tag_values(PREMIUM_TAG))
        if premium is None:
            return ExtractionFailure(event.id, FailureReason.INVALID_PREMIUM, "premium is absent or not numeric")

        fiat_amounts = self._parse_fiat_amounts(fiat_values)
        if fiat_amounts is None:
            return ExtractionFailure(event.id, FailureReason.INVALID_FIAT_AMOUNT, "invalid fiat amount format")

        offer = Offer(
            id=event.id,
            side=OfferSide.parse(side_values[0]),
            premium_percent=premium,
            fiat_amounts=fiat_amounts,
            payment_methods=tuple(payment_methods),
        )
        offer.validate()
        return offer

    @staticmethod
    def _parse_premium(values: Optional[Tuple[str, ...]]) -> Optional[float]:
        if not values:
            return None
        return parse_number(values[0])

    @staticmethod
    def _parse_fiat_amounts(values: Tuple[str, ...]) -> Optional[Tuple[float, ...]]:
        if len(values) not in (1, 2):
            return None

        amounts = []
        for value in values:
            amount = parse_number(value)
            if amount is None or not math.isfinite(amount) or amount < 0:
                return None
            amounts.append(amount)

        return tuple(amounts)
