"""Composition root for the intake server.

This module is the ONLY location that imports both core domain logic
and concrete adapter implementations. All wiring of dependencies
happens here.

Module Structure:
- Configuration loading via config module
- Adapter instantiation
- Pipeline initialization
- HTTP server start and graceful shutdown
"""

import asyncio
import logging
import sys
from pathlib import Path

from intake.adapters.notification.discord import DiscordWebhookNotificationAdapter
from intake.adapters.notification.system_event import CommandSystemEventAdapter
from intake.adapters.store.filesystem import FileIntakeStore
from intake.adapters.web.http_server import IntakeHTTPServer
from intake.config import Settings, load_settings
from intake.core.pipeline import SubmissionPipeline


def configure_logging(log_level: str, log_format: str) -> None:
    """Configure application logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).
    """
    level = getattr(logging, log_level, logging.INFO)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "name": "%(name)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
    )


def build_pipeline(settings: Settings) -> SubmissionPipeline:
    """Instantiate adapters from settings and wire them into a pipeline."""
    logger = logging.getLogger(__name__)

    store = FileIntakeStore(settings.storage_dir)

    webhook: DiscordWebhookNotificationAdapter | None = None
    if settings.webhook_url:
        webhook = DiscordWebhookNotificationAdapter(
            webhook_url=settings.webhook_url,
            timeout_seconds=settings.webhook_timeout_seconds,
        )
        logger.info("Webhook relay: Discord")
    else:
        logger.warning("WEBHOOK_URL not set, chat webhook relay disabled")

    system_event: CommandSystemEventAdapter | None = None
    if settings.system_event_enabled:
        system_event = CommandSystemEventAdapter(
            executable=settings.system_event_executable,
            mode=settings.system_event_mode,
            timeout_seconds=settings.system_event_timeout_seconds,
            search_path=settings.system_event_path,
        )
        logger.info(f"System event command: {settings.system_event_executable}")

    return SubmissionPipeline(
        store=store,
        webhook=webhook,
        system_event=system_event,
        brand_name=settings.brand_name,
        follow_up=settings.follow_up_instructions,
    )


async def bootstrap(settings: Settings | None = None) -> None:
    """Load configuration, wire adapters, and serve until cancelled.

    Steps:
    1. Load configuration from environment
    2. Configure logging
    3. Instantiate adapters and the pipeline
    4. Create the storage directory
    5. Start the HTTP server

    Raises:
        PersistenceError: If the storage directory cannot be created.
        OSError: If the listener cannot bind.
    """
    # Step 1: Load configuration
    if settings is None:
        settings = load_settings()

    # Step 2: Configure logging
    configure_logging(settings.log_level, settings.log_format)
    logger = logging.getLogger(__name__)
    logger.info("Starting intake server...")

    # Step 3: Wire adapters
    pipeline = build_pipeline(settings)

    # Step 4: Storage directory must exist before the first request
    await pipeline.store.prepare()

    form_path = Path(settings.form_file_path)
    if not form_path.is_file():
        logger.warning(f"Form file not found: {form_path} (GET / will return 500)")

    # Step 5: Serve
    http_server = IntakeHTTPServer(
        pipeline=pipeline,
        form_path=form_path,
        host=settings.bind_address,
        port=settings.port,
    )
    await http_server.start()

    try:
        while True:
            await asyncio.sleep(1)
    finally:
        await http_server.stop()
        await pipeline.drain()
        if pipeline.webhook is not None:
            await pipeline.webhook.close()


def main() -> None:
    """Application entry point.

    Exit codes:
        0: Successful shutdown
        1: Fatal bootstrap or runtime error
        130: Interrupted by user (SIGINT/KeyboardInterrupt)
    """
    logger = logging.getLogger(__name__)
    try:
        asyncio.run(bootstrap())
    except KeyboardInterrupt:
        logger.warning("Shutdown requested by user (SIGINT)")
        sys.exit(130)
    except asyncio.CancelledError:
        logger.info("Graceful shutdown completed")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
