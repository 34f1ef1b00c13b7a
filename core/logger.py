"""
Service logger setup

All modules use ``logging.getLogger(__name__)``; this module configures
the root handlers once per process from LoggingConfig.
"""

import logging
import sys
from typing import Optional

from core.config import LoggingConfig, get_settings

_configured = False


def setup_service_logger(service_name: str, config: Optional[LoggingConfig] = None) -> logging.Logger:
    """Configure process logging and return the service logger"""
    global _configured

    config = config or get_settings().logging
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    if not _configured:
        root = logging.getLogger()
        root.setLevel(level)
        formatter = logging.Formatter(config.log_format)

        if config.enable_console:
            console = logging.StreamHandler(sys.stdout)
            console.setFormatter(formatter)
            root.addHandler(console)

        if config.log_file:
            file_handler = logging.FileHandler(config.log_file)
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)

        # Quiet chatty client libraries
        for noisy in ("httpx", "httpcore", "asyncpg", "nats"):
            logging.getLogger(noisy).setLevel(max(level, logging.WARNING))

        _configured = True

    service_logger = logging.getLogger(service_name)
    service_logger.setLevel(level)
    return service_logger
