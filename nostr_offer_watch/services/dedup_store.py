"""
Persistent record of offers that already produced a notification.

The store keeps two independent key sets: event IDs and SHA-256 hashes of
rendered messages. A match on either one means the offer was notified.
The whole document is rewritten after every successful notification.
"""

import json
from pathlib import Path
from typing import Set, Union

from ..utils.error_handling import (
    ErrorCategory,
    ErrorSeverity,
    get_error_tracker,
    with_error_handling,
)
from ..utils.logging import get_logger

logger = get_logger("dedup.store")


class DedupStore:
    """Durable set of notified event IDs and message hashes."""

    def __init__(self, path: Union[str, Path]):
        """
        Initialize an empty store bound to a file.

        Args:
            path: JSON file holding the persisted state
        """
        self.path = Path(path)
        self.event_ids: Set[str] = set()
        self.message_hashes: Set[str] = set()

    def load(self) -> bool:
        """
        Load persisted state, replacing what is in memory.

        A missing or unreadable file leaves the store empty.

        Returns:
            True if state was read from disk
        """
        self.event_ids = set()
        self.message_hashes = set()

        if not self.path.exists():
            logger.info(f"No dedup file at {self.path}, starting empty")
            return False

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)

            events = data.get("events", [])
            messages = data.get("messages", [])
            if not isinstance(events, list) or not isinstance(messages, list):
                raise ValueError("'events' and 'messages' must be lists")

            self.event_ids = {str(e) for e in events}
            self.message_hashes = {str(m) for m in messages}

        except (OSError, ValueError, AttributeError) as e:
            self.event_ids = set()
            self.message_hashes = set()
            get_error_tracker().record_error(
                component="dedup.store",
                category=ErrorCategory.PERSISTENCE,
                severity=ErrorSeverity.LOW,
                message=f"Could not load dedup state from {self.path}: {e}",
                exception=e,
            )
            return False

        logger.info(
            f"Loaded {len(self.event_ids)} processed event IDs and "
            f"{len(self.message_hashes)} message hashes from file"
        )
        return True

    @with_error_handling(
        component="dedup.store",
        category=ErrorCategory.PERSISTENCE,
        severity=ErrorSeverity.LOW,
        fallback_value=False,
        suppress_exceptions=True,
    )
    def save(self) -> bool:
        """
        Overwrite the dedup file with the in-memory state.

        Returns:
            True if the file was written
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "events": sorted(self.event_ids),
            "messages": sorted(self.message_hashes),
        }

        # Write next to the target, then swap it in
        tmp_path = self.path.with_name(self.path.name + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f)
        tmp_path.replace(self.path)

        logger.debug(
            f"Saved {len(self.event_ids)} event IDs and "
            f"{len(self.message_hashes)} message hashes to {self.path}"
        )
        return True

    def contains(self, event_id: str, message_hash: str) -> bool:
        """Check whether either key has already been notified."""
        return event_id in self.event_ids or message_hash in self.message_hashes

    def mark(self, event_id: str, message_hash: str) -> None:
        """Record a successful notification in memory."""
        self.event_ids.add(event_id)
        self.message_hashes.add(message_hash)

    def __len__(self) -> int:
        return len(self.event_ids)
