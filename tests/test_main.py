"""
Tests for the command line entry point.
"""

from unittest.mock import AsyncMock, patch

from nostr_offer_watch import main as main_module
from nostr_offer_watch.models.report import RunReport
from nostr_offer_watch.utils.error_handling import ErrorCategory, get_error_tracker


class TestMain:
    """Test cases for main()."""

    @patch("nostr_offer_watch.main.async_main", new_callable=AsyncMock)
    def test_successful_run(self, mock_async_main):
        """Test that a completed pass exits with 0."""
        mock_async_main.return_value = RunReport()

        assert main_module.main([]) == 0
        mock_async_main.assert_awaited_once_with(None)

    @patch("nostr_offer_watch.main.async_main", new_callable=AsyncMock)
    def test_config_path_argument(self, mock_async_main):
        """Test that the first argument names the config file."""
        mock_async_main.return_value = RunReport()

        main_module.main(["config/config.yaml"])

        mock_async_main.assert_awaited_once_with("config/config.yaml")

    @patch("nostr_offer_watch.main.async_main", new_callable=AsyncMock)
    def test_fatal_error(self, mock_async_main, capsys):
        """Test that an unexpected error exits with 1."""
        mock_async_main.side_effect = ValueError("Invalid YAML in configuration file")

        assert main_module.main([]) == 1
        assert "Fatal error: Invalid YAML" in capsys.readouterr().err
        assert len(get_error_tracker().get_category_errors(ErrorCategory.SYSTEM)) == 1

    def test_missing_config_file(self, tmp_path, capsys):
        """Test that a missing config file is a configuration error."""
        missing = str(tmp_path / "nope.yaml")

        assert main_module.main([missing]) == 1

        tracker = get_error_tracker()
        errors = tracker.get_category_errors(ErrorCategory.CONFIGURATION)
        assert len(errors) == 1
        assert errors[0].context["config_path"] == missing
        assert tracker.get_category_errors(ErrorCategory.SYSTEM) == []
        assert "Configuration file not found" in capsys.readouterr().err

    @patch("nostr_offer_watch.main.async_main", new_callable=AsyncMock)
    def test_keyboard_interrupt(self, mock_async_main):
        """Test that an interrupted run exits with 130."""
        mock_async_main.side_effect = KeyboardInterrupt()

        assert main_module.main([]) == 130

    @patch("nostr_offer_watch.main.setup_logging")
    @patch("nostr_offer_watch.main.RunOrchestrator")
    def test_async_main_wires_configuration(self, mock_orchestrator, mock_setup_logging, tmp_path, monkeypatch):
        """Test that async_main loads config, sets up logging and runs once."""
        monkeypatch.chdir(tmp_path)
        report = RunReport()
        mock_orchestrator.return_value.run = AsyncMock(return_value=report)

        assert main_module.main([]) == 0

        mock_setup_logging.assert_called_once_with(log_dir="logs", log_level="INFO")
        mock_orchestrator.return_value.run.assert_awaited_once()
