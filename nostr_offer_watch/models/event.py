"""
Relay event data models for the Nostr Offer Watch system.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class RawEvent:
    """Raw event as delivered by a relay."""

    id: str
    tags: Tuple[Tuple[str, ...], ...]
    kind: Optional[int] = None
    created_at: Optional[int] = None
    pubkey: Optional[str] = None
    content: str = ""
    sig: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RawEvent":
        """
        Build a RawEvent from the relay wire representation.

        Args:
            data: Event object as decoded from an EVENT message

        Returns:
            RawEvent instance

        Raises:
            ValueError: If the record has no id or a malformed tag list
        """
        if not isinstance(data, dict):
            raise ValueError("Event must be a JSON object")

        event_id = data.get("id")
        if not isinstance(event_id, str) or not event_id.strip():
            raise ValueError("Event id must be a non-empty string")

        raw_tags = data.get("tags", [])
        if not isinstance(raw_tags, list):
            raise ValueError(f"Event {event_id} tags must be a list")

        tags = []
        for tag in raw_tags:
            if not isinstance(tag, list) or not tag:
                raise ValueError(f"Event {event_id} has a malformed tag: {tag!r}")
            if not all(isinstance(value, str) for value in tag):
                raise ValueError(f"Event {event_id} has a non-string tag value")
            tags.append(tuple(tag))

        return cls(
            id=event_id,
            tags=tuple(tags),
            kind=data.get("kind"),
            created_at=data.get("created_at"),
            pubkey=data.get("pubkey"),
            content=data.get("content", "") or "",
            sig=data.get("sig"),
        )

    def tag_values(self, name: str) -> Optional[Tuple[str, ...]]:
        """Return the values of the first tag called ``name``, if any."""
        for tag in self.tags:
            if tag[0] == name:
                return tag[1:]
        return None
