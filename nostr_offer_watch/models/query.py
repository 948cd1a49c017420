"""
Relay query models.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from nostr_sdk import Filter

from .event import RawEvent


@dataclass(frozen=True)
class QueryWindow:
    """Time bounds of a relay query in Unix seconds."""

    since: int
    until: int

    @classmethod
    def trailing(cls, days: int, now: Optional[datetime] = None) -> "QueryWindow":
        """Build the window covering the last ``days`` days up to ``now``."""
        if now is None:
            now = datetime.now(timezone.utc)
        start = now - timedelta(days=days)
        return cls(since=int(start.timestamp()), until=int(now.timestamp()))

    @property
    def start(self) -> datetime:
        return datetime.fromtimestamp(self.since, tz=timezone.utc)

    @property
    def end(self) -> datetime:
        return datetime.fromtimestamp(self.until, tz=timezone.utc)

    def validate(self) -> bool:
        """Validate window bounds."""
        if self.since > self.until:
            raise ValueError("Query window 'since' cannot be after 'until'")
        return True


@dataclass(frozen=True)
class RelayFilter:
    """Subscription filter sent to relays in a REQ message."""

    kinds: List[int]
    window: QueryWindow
    tag_matches: Dict[str, List[str]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the wire filter object."""
        payload: Dict[str, Any] = {
            "kinds": list(self.kinds),
            "since": self.window.since,
            "until": self.window.until,
        }
        for name, values in self.tag_matches.items():
            payload[f"#{name}"] = list(values)
        return payload

    def to_sdk_filter(self) -> Filter:
        """Build the nostr-sdk filter from the wire filter object."""
        return Filter.from_json(json.dumps(self.to_dict()))

    def matches(self, event: RawEvent) -> bool:
        """Check an event against the filter the way a relay would."""
        if event.kind is not None and event.kind not in self.kinds:
            return False

        if event.created_at is not None:
            if not (self.window.since <= event.created_at <= self.window.until):
                return False

        for name, wanted in self.tag_matches.items():
            present = {tag[1] for tag in event.tags if tag[0] == name and len(tag) > 1}
            if not present.intersection(wanted):
                return False

        return True
