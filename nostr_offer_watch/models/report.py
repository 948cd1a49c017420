"""
Run summary models.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .query import QueryWindow


@dataclass
class RunReport:
    """Summary of a single orchestrator pass."""

    window: Optional[QueryWindow] = None
    relays_connected: List[str] = field(default_factory=list)
    relays_failed: List[str] = field(default_factory=list)
    events_received: int = 0
    offers_extracted: int = 0
    extraction_failures: int = 0
    offers_rejected: int = 0
    notifications_sent: int = 0
    duplicates_skipped: int = 0
    delivery_failures: int = 0
    query_failed: bool = False
    error_counts: Dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, object]:
        """Flatten the report for structured logging."""
        return {
            "since": self.window.since if self.window else None,
            "until": self.window.until if self.window else None,
            "relays_connected": len(self.relays_connected),
            "relays_failed": len(self.relays_failed),
            "events_received": self.events_received,
            "offers_extracted": self.offers_extracted,
            "extraction_failures": self.extraction_failures,
            "offers_rejected": self.offers_rejected,
            "notifications_sent": self.notifications_sent,
            "duplicates_skipped": self.duplicates_skipped,
            "delivery_failures": self.delivery_failures,
            "query_failed": self.query_failed,
            "error_counts": dict(self.error_counts),
        }
