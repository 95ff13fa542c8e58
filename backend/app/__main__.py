import logging
import sys

import uvicorn

from app.core.config import ConfigurationError, get_settings
from app.core.logging import configure_logging
from app.main import create_app
from app.services.storage import StorageError, build_storage_service

logger = logging.getLogger("app")


def fatal(message: str, *args) -> None:
    logger.critical(message, *args)
    sys.exit(1)


def main() -> None:
    try:
        settings = get_settings()
    except ConfigurationError as exc:
        logging.basicConfig(level=logging.INFO)
        fatal("Error loading configuration: %s", exc)

    try:
        configure_logging(settings.log_dir)
    except OSError as exc:
        logging.basicConfig(level=logging.INFO)
        fatal("Failed to set up logging in %s: %s", settings.log_dir, exc)

    try:
        storage = build_storage_service(settings)
    except StorageError as exc:
        fatal("Error creating storage client: %s", exc)

    app = create_app(settings, storage=storage)

    logger.info("Server running on :%d", settings.port)
    try:
        uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    except SystemExit as exc:
        if exc.code:
            logger.critical("Server exited with status %s", exc.code)
        raise


if __name__ == "__main__":
    main()
