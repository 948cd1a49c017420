"""
Unit tests for the message dispatcher system.
"""

from datetime import datetime
from unittest.mock import Mock, patch

import pytest
from requests.exceptions import ConnectionError, Timeout

from nostr_offer_watch.components.message_dispatcher import (
    BaseMessageDispatcher,
    DeliveryError,
    NtfyDispatcher,
)
from nostr_offer_watch.models.alert import FormattedAlert
from nostr_offer_watch.models.delivery import DeliveryResult


class MockMessageDispatcher(BaseMessageDispatcher):
    """Test implementation of BaseMessageDispatcher."""

    def __init__(self, error=None):
        super().__init__()
        self.error = error
        self.send_attempts = 0

    def _send_message(self, alert: FormattedAlert) -> int:
        self.send_attempts += 1
        if self.error is not None:
            raise self.error
        return 200


class TestBaseMessageDispatcher:
    """Test cases for BaseMessageDispatcher."""

    def setup_method(self):
        """Set up test fixtures."""
        self.test_alert = FormattedAlert(
            title="Oferta encontrada!",
            message="Valor: R$ 100.00\nPagamento via: pix\nSpread: 1.5%",
            tags=["rotating_light"],
        )

    def test_send_alert_success(self):
        """Test successful message sending."""
        dispatcher = MockMessageDispatcher()

        result = dispatcher.send_alert(self.test_alert)

        assert isinstance(result, DeliveryResult)
        assert result.success is True
        assert result.error_message is None
        assert result.status_code == 200
        assert isinstance(result.delivery_time, datetime)
        assert dispatcher.send_attempts == 1

    def test_delivery_error_becomes_failure(self):
        """Test that a rejected message yields a failed result."""
        dispatcher = MockMessageDispatcher(DeliveryError("Failed to send notification: 403 Forbidden", 403))

        result = dispatcher.send_alert(self.test_alert)

        assert result.success is False
        assert result.status_code == 403
        assert "403" in result.error_message
        assert dispatcher.send_attempts == 1

    def test_transport_error_becomes_failure(self):
        """Test that network errors yield a failed result."""
        dispatcher = MockMessageDispatcher(ConnectionError("Connection refused"))

        result = dispatcher.send_alert(self.test_alert)

        assert result.success is False
        assert result.status_code is None
        assert result.error_message.startswith("Request failed:")

    def test_long_error_is_truncated(self):
        """Test that error messages fit the result limit."""
        dispatcher = MockMessageDispatcher(DeliveryError("x" * 800))

        result = dispatcher.send_alert(self.test_alert)

        assert len(result.error_message) == 500

    def test_session_retry_configuration(self):
        """Test that retries are off unless configured."""
        dispatcher = MockMessageDispatcher()
        adapter = dispatcher.session.get_adapter("https://ntfy.sh")

        assert adapter.max_retries.total == 0
        assert "POST" in adapter.max_retries.allowed_methods


class TestNtfyDispatcher:
    """Test cases for NtfyDispatcher."""

    def setup_method(self):
        """Set up test fixtures."""
        self.dispatcher = NtfyDispatcher("https://ntfy.example/offers", timeout=5.0)
        self.test_alert = FormattedAlert(
            title="Oferta encontrada!",
            message="Valor: R$ 50.00 a 75.00\nPagamento via: pix ou ted\nSpread: 2%",
            tags=["rotating_light"],
        )

    @patch("requests.Session.post")
    def test_send_message_success(self, mock_post):
        """Test successful ntfy publish."""
        mock_response = Mock()
        mock_response.status_code = 200
        mock_post.return_value = mock_response

        result = self.dispatcher.send_alert(self.test_alert)

        assert result.success is True
        mock_post.assert_called_once()
        args, kwargs = mock_post.call_args
        assert args[0] == "https://ntfy.example/offers"
        assert kwargs["data"] == self.test_alert.message.encode("utf-8")
        assert kwargs["headers"]["Title"] == "Oferta encontrada!"
        assert kwargs["headers"]["Tags"] == "rotating_light"
        assert kwargs["timeout"] == 5.0

    @patch("requests.Session.post")
    def test_send_message_without_tags(self, mock_post):
        """Test that no Tags header is sent when there are none."""
        mock_post.return_value = Mock(status_code=200)
        alert = FormattedAlert(title="Oferta encontrada!", message="body")

        self.dispatcher.send_alert(alert)

        headers = mock_post.call_args[1]["headers"]
        assert "Tags" not in headers

    @patch("requests.Session.post")
    def test_send_message_server_error(self, mock_post):
        """Test that a non-2xx status is a failure."""
        mock_response = Mock()
        mock_response.status_code = 500
        mock_response.reason = "Internal Server Error"
        mock_post.return_value = mock_response

        result = self.dispatcher.send_alert(self.test_alert)

        assert result.success is False
        assert result.status_code == 500
        assert result.error_message == "Failed to send notification: 500 Internal Server Error"

    @patch("requests.Session.post")
    def test_send_message_timeout(self, mock_post):
        """Test that a timeout is a failure."""
        mock_post.side_effect = Timeout("timed out")

        result = self.dispatcher.send_alert(self.test_alert)

        assert result.success is False
        assert "timed out" in result.error_message

    def test_configured_retries(self):
        """Test that configured retries reach the transport adapter."""
        dispatcher = NtfyDispatcher("https://ntfy.example/offers", max_retries=3)
        adapter = dispatcher.session.get_adapter("https://ntfy.example/offers")

        assert adapter.max_retries.total == 3


class TestDeliveryError:
    """Test DeliveryError."""

    def test_carries_status_code(self):
        """Test that the status code is kept."""
        error = DeliveryError("rejected", status_code=429)

        assert str(error) == "rejected"
        assert error.status_code == 429

    def test_abstract_dispatcher(self):
        """Test that the base class cannot be used directly."""
        with pytest.raises(TypeError):
            BaseMessageDispatcher()
