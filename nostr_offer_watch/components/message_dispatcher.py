"""
Message dispatching components for the Nostr Offer Watch system.

This module delivers formatted alerts to an ntfy topic over HTTP and
reports the outcome as a DeliveryResult instead of raising.
"""

import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..models.alert import FormattedAlert
from ..models.delivery import DeliveryResult

logger = logging.getLogger(__name__)


class DeliveryError(Exception):
    """Raised by a dispatcher when the endpoint rejects a message."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class BaseMessageDispatcher(ABC):
    """Base class for message dispatchers with common session handling."""

    def __init__(self, max_retries: int = 0, timeout: float = 30.0):
        """
        Initialize base dispatcher.

        Args:
            max_retries: Transport-level retries on 429/5xx; 0 sends once
            timeout: Request timeout in seconds
        """
        self.max_retries = max_retries
        self.timeout = timeout
        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        """Create a requests session with retry configuration."""
        session = requests.Session()

        retry_strategy = Retry(
            total=self.max_retries,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["POST"],
            raise_on_status=False,
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        session.headers.update({"User-Agent": "Nostr-Offer-Watch/1.0"})

        return session

    def send_alert(self, alert: FormattedAlert) -> DeliveryResult:
        """
        Send an alert and report what happened.

        Args:
            alert: Formatted alert to send

        Returns:
            DeliveryResult: success, or failure with the reason
        """
        start_time = datetime.now()

        try:
            status_code = self._send_message(alert)
        except DeliveryError as e:
            return self._failure(str(e), e.status_code)
        except requests.exceptions.RequestException as e:
            return self._failure(f"Request failed: {e}", None)

        delivery_time = datetime.now()
        logger.info(
            f"Alert sent successfully in {(delivery_time - start_time).total_seconds():.2f}s"
        )

        result = DeliveryResult(
            success=True,
            delivery_time=delivery_time,
            error_message=None,
            status_code=status_code,
        )
        result.validate()
        return result

    def _failure(self, error_msg: str, status_code: Optional[int]) -> DeliveryResult:
        logger.warning(f"Alert delivery failed: {error_msg}")

        result = DeliveryResult(
            success=False,
            delivery_time=datetime.now(),
            error_message=error_msg[:500],
            status_code=status_code,
        )
        result.validate()
        return result

    @abstractmethod
    def _send_message(self, alert: FormattedAlert) -> int:
        """
        Platform-specific message sending implementation.

        Args:
            alert: Formatted alert to send

        Returns:
            int: HTTP status code of the accepted request

        Raises:
            DeliveryError: If the endpoint does not accept the message
            requests.exceptions.RequestException: On transport failure
        """


class NtfyDispatcher(BaseMessageDispatcher):
    """ntfy topic message dispatcher."""

    def __init__(self, topic_url: str, max_retries: int = 0, timeout: float = 30.0):
        """
        Initialize ntfy dispatcher.

        Args:
            topic_url: Full topic URL, e.g. https://ntfy.sh/offers
            max_retries: Transport-level retries on 429/5xx
            timeout: Request timeout in seconds
        """
        super().__init__(max_retries, timeout)
        self.topic_url = topic_url

    def _send_message(self, alert: FormattedAlert) -> int:
        """Publish the alert body to the topic."""
        headers = {"Title": alert.title}
        if alert.tags:
            headers["Tags"] = ",".join(alert.tags)

        response = self.session.post(
            self.topic_url,
            data=alert.message.encode("utf-8"),
            headers=headers,
            timeout=self.timeout,
        )

        if not 200 <= response.status_code < 300:
            raise DeliveryError(
                f"Failed to send notification: {response.status_code} {response.reason}",
                status_code=response.status_code,
            )

        logger.debug(f"Message published to {self.topic_url}")
        return response.status_code
