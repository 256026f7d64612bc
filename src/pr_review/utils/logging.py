"""Logging and observability setup using Pydantic Logfire."""

import logging
import sys

from pr_review.config.settings import Settings, settings


def setup_logging(app_settings: Settings = settings) -> None:
    """Configure application logging.

    Sets up structured logging with appropriate log levels and format.
    Reduces noise from verbose third-party libraries.
    """
    log_level = getattr(logging, app_settings.log_level)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stdout,
        force=True,  # Reconfigure if already setup
    )

    # Reduce noise from verbose libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("github").setLevel(logging.WARNING)


def setup_observability(app_settings: Settings = settings) -> None:
    """Setup logging and optional Logfire instrumentation.

    Logfire tracing of the model and HTTP calls is enabled only when a token
    is configured and the ``logfire`` extra is installed.
    """
    setup_logging(app_settings)

    logger = logging.getLogger(__name__)

    if not app_settings.logfire_token:
        logger.debug("Logfire token not configured, skipping observability setup")
        return

    try:
        import logfire

        logfire.configure(token=app_settings.logfire_token)
        logfire.instrument_pydantic_ai()
        logfire.instrument_httpx()

        logger.info(
            f"Logfire observability enabled for {app_settings.environment} environment"
        )

    except ImportError:
        logger.warning(
            "Logfire package not installed. Install with: pip install 'pr-review[logfire]'"
        )
    except Exception as e:
        logger.error(f"Failed to setup Logfire observability: {e}")
