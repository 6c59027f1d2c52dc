import logging
import sys
from app.core.config import get_settings

def setup_logging():
    """Configure logging for the application."""
    settings = get_settings()

    logger = logging.getLogger("app")
    logger.setLevel(settings.log_level.upper())

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(settings.log_level.upper())

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    handler.setFormatter(formatter)

    # Called on every get_logger; attach the handler only once
    if not logger.handlers:
        logger.addHandler(handler)

    return logger

def get_logger(name: str):
    """Get a logger instance with the given name."""
    # Ensure the parent 'app' logger is configured
    setup_logging()
    return logging.getLogger(f"app.{name}")
