"""Application bootstrap: things to run once before serving requests."""

import logging

from .log_config import setup_logging
from .settings import get_settings


def initialize_application():
    """Configure logging from settings."""
    cfg = get_settings()
    setup_logging(level=cfg.log_level, log_dir=cfg.log_dir, retention_days=cfg.log_retention_days)
    directory = cfg.directory_config()
    logging.getLogger(__name__).info("Directory %s, base DN %s", directory.url, directory.base_dn)
