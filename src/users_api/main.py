"""Console entrypoint that serves the users API with uvicorn."""

import uvicorn
from pymongo.errors import ConfigurationError

from users_api.api.asgi import build_app
from users_api.app_logging import configure_logging
from users_api.config import Settings


def main() -> None:
    """Build the application and serve it on the configured port."""
    settings = Settings()
    logger = configure_logging(settings.log_level)
    try:
        app = build_app(settings)
    except ConfigurationError:
        logger.exception("Could not create MongoDB client")
        raise SystemExit(1) from None

    logger.info("Server running on port %s", settings.port)
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
