"""
Main entry point for the Nostr Offer Watch system.

Runs a single pass and exits; schedule it with cron.
"""

import asyncio
import sys
from typing import List, Optional

from .models.report import RunReport
from .orchestrator import RunOrchestrator
from .services.config_manager import ConfigurationManager
from .utils.error_handling import ErrorCategory, ErrorSeverity, get_error_tracker
from .utils.logging import get_logger, setup_logging


async def async_main(config_path: Optional[str] = None) -> RunReport:
    """Load configuration and run one pass."""
    try:
        config = ConfigurationManager(config_path).load_config()
    except (FileNotFoundError, ValueError) as e:
        get_error_tracker().record_error(
            component="main",
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.CRITICAL,
            message=f"Configuration could not be loaded: {e}",
            exception=e,
            context={"config_path": config_path},
        )
        raise

    setup_logging(log_dir=config.system.log_dir, log_level=config.system.log_level)
    logger = get_logger("main")
    logger.info("Starting Nostr Offer Watch run", extra={"config_path": config_path})

    orchestrator = RunOrchestrator(config)
    return await orchestrator.run()


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    args = sys.argv[1:] if argv is None else argv
    config_path = args[0] if args else None

    try:
        asyncio.run(async_main(config_path))
    except KeyboardInterrupt:
        print("\nRun interrupted by user")
        return 130
    except Exception as e:
        if not get_error_tracker().get_category_errors(ErrorCategory.CONFIGURATION):
            get_error_tracker().record_error(
                component="main",
                category=ErrorCategory.SYSTEM,
                severity=ErrorSeverity.CRITICAL,
                message=f"Unexpected error: {e}",
                exception=e,
            )
        print(f"Fatal error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
