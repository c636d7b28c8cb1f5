"""Root logger setup, run once from the application lifespan."""

import logging

from lending_identity.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging() -> None:
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT, force=True)
    # uvicorn access lines duplicate what the routers already log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
