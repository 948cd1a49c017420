"""
Relay aggregation for the Nostr Offer Watch system.

This module drives a nostr-sdk client over a fixed relay list: relays are
added and connected one by one, tolerating those that cannot be reached,
and a single query is fetched across whatever connected.
"""

import asyncio
import json
import logging
from datetime import timedelta
from typing import List, Optional, Tuple

from nostr_sdk import Client

from ..models.event import RawEvent
from ..models.query import RelayFilter
from ..utils.error_handling import ErrorCategory, ErrorSeverity, get_error_tracker

logger = logging.getLogger(__name__)

CONNECT_POLL_INTERVAL = 0.1


class RelayAggregator:
    """Connects to a fixed relay list and returns merged query results."""

    def __init__(
        self,
        relay_urls: List[str],
        client: Optional[Client] = None,
        connect_timeout: float = 10.0,
        query_timeout: float = 15.0,
        verify_events: bool = True,
    ):
        """
        Initialize relay aggregator.

        Args:
            relay_urls: Relay websocket URLs
            client: nostr-sdk client; a fresh one is created otherwise
            connect_timeout: Seconds to wait for each relay to connect
            query_timeout: Seconds to wait for relays to send stored events
            verify_events: Drop events whose id or signature does not verify
        """
        self.relay_urls = list(relay_urls)
        self.client = client if client is not None else Client()
        self.connect_timeout = connect_timeout
        self.query_timeout = query_timeout
        self.verify_events = verify_events
        self.connected: List[str] = []

    async def connect_all(self) -> Tuple[List[str], List[str]]:
        """
        Connect to every relay concurrently.

        Returns:
            Tuple of (connected URLs, failed URLs)
        """
        results = await asyncio.gather(*(self._connect(url) for url in self.relay_urls))

        self.connected = [url for url, ok in zip(self.relay_urls, results) if ok]
        failed = [url for url, ok in zip(self.relay_urls, results) if not ok]

        logger.info(f"Connected to {len(self.connected)}/{len(self.relay_urls)} relays")
        return list(self.connected), failed

    async def _connect(self, url: str) -> bool:
        try:
            await asyncio.wait_for(self._open(url), timeout=self.connect_timeout)
            return True
        except Exception as e:
            get_error_tracker().record_error(
                component="relay.aggregator",
                category=ErrorCategory.RELAY_CONNECTION,
                severity=ErrorSeverity.LOW,
                message=f"Failed to connect to relay {url}: {e or type(e).__name__}",
                context={"relay": url},
            )
            await self._discard(url)
            return False

    async def _open(self, url: str) -> None:
        await self.client.add_relay(url)
        await self.client.connect_relay(url)

        relay = await self.client.relay(url)
        while not relay.is_connected():
            await asyncio.sleep(CONNECT_POLL_INTERVAL)

    async def _discard(self, url: str) -> None:
        # Keep unreachable relays out of the query
        try:
            await self.client.remove_relay(url)
        except Exception as e:
            logger.debug(f"Could not remove relay {url}: {e}")

    async def fetch(self, relay_filter: RelayFilter) -> List[RawEvent]:
        """
        Run the query across the connected relays and return distinct events.

        Raises:
            Exception: Whatever the client raises while fetching; the caller
                treats this as a failed query.
        """
        if not self.connected:
            logger.warning("No relay connected, skipping query")
            return []

        fetched = await self.client.fetch_events(
            relay_filter.to_sdk_filter(),
            timedelta(seconds=self.query_timeout),
        )

        events: List[RawEvent] = []
        seen_ids = set()

        for sdk_event in fetched.to_vec():
            if self.verify_events and not sdk_event.verify():
                logger.warning(f"Discarding event {sdk_event.id().to_hex()}: verification failed")
                continue

            try:
                event = RawEvent.from_dict(json.loads(sdk_event.as_json()))
            except ValueError as e:
                logger.warning(f"Discarding malformed relay event: {e}")
                continue

            if event.id in seen_ids:
                continue

            if not relay_filter.matches(event):
                logger.debug(f"Discarding event {event.id}: outside query filter")
                continue

            seen_ids.add(event.id)
            events.append(event)

        logger.info(f"Fetched {len(events)} distinct events")
        return events

    async def close_all(self) -> None:
        """Disconnect every relay individually; failures are logged only."""
        await asyncio.gather(*(self._close(url) for url in self.connected))
        self.connected = []

        try:
            await self.client.disconnect()
        except Exception as e:
            logger.warning(f"Error shutting down relay client: {e}")

    async def _close(self, url: str) -> None:
        try:
            await self.client.disconnect_relay(url)
            logger.debug(f"Closed relay {url}")
        except Exception as e:
            get_error_tracker().record_error(
                component="relay.aggregator",
                category=ErrorCategory.RELAY_CONNECTION,
                severity=ErrorSeverity.LOW,
                message=f"Error closing relay {url}: {e}",
                context={"relay": url},
            )
