"""Logging configuration for the toolbox website."""

import logging
import sys
from pathlib import Path

_configured = False


def setup_logging(log_level: str = "INFO") -> None:
    """Set up logging configuration. Only the first call installs handlers."""
    global _configured
    if _configured:
        logging.getLogger().setLevel(getattr(logging, log_level.upper(), logging.INFO))
        return
    _configured = True

    # Create logs directory if it doesn't exist
    log_dir = Path("logs")
    log_dir.mkdir(exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # File handler for all logs
    file_handler = logging.FileHandler(log_dir / "toolbox.log")
    file_handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    root_logger.addHandler(file_handler)

    # Stream handler for INFO and above
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(logging.Formatter("%(name)s - %(levelname)s - %(message)s"))
    stream_handler.setLevel(logging.INFO)
    root_logger.addHandler(stream_handler)

    # Uvicorn access logs are noisy at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
