"""Run the API with uvicorn: ``python -m piring_sehat``."""

import logging

import uvicorn

from piring_sehat.core.config import get_settings
from piring_sehat.core.logging_safety import configure_logging
from piring_sehat.main import create_app

logger = logging.getLogger("piring_sehat")


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(
        "server.starting host=%s port=%s auth_provider=%s store_backend=%s",
        settings.host,
        settings.port,
        settings.auth_provider,
        settings.store_backend,
    )
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
