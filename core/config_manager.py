"""
Configuration Manager

Per-service view over the global settings. Resolves backing service
endpoints from environment variables with defaults taken from InfraConfig.

Usage:
    from core.config_manager import ConfigManager

    config = ConfigManager("sports_event_service")
    host, port = config.discover_service(
        service_name="postgres",
        default_host="localhost",
        default_port=5432,
        env_host_key="POSTGRES_HOST",
        env_port_key="POSTGRES_PORT",
    )
"""

import logging
import os
from typing import Optional, Tuple

from core.config import AppConfig, get_settings

logger = logging.getLogger(__name__)


class ConfigManager:
    """Service-scoped configuration access"""

    def __init__(self, service_name: str, settings: Optional[AppConfig] = None):
        self.service_name = service_name
        self.settings = settings or get_settings()

    @property
    def infrastructure(self):
        return self.settings.infrastructure

    @property
    def campus(self):
        return self.settings.campus

    @property
    def environment(self) -> str:
        return self.settings.environment

    def discover_service(
        self,
        service_name: str,
        default_host: str,
        default_port: int,
        env_host_key: Optional[str] = None,
        env_port_key: Optional[str] = None,
    ) -> Tuple[str, int]:
        """
        Resolve host/port for a backing service.

        Priority: environment variables -> defaults.
        """
        host = os.getenv(env_host_key) if env_host_key else None
        port_raw = os.getenv(env_port_key) if env_port_key else None

        port = default_port
        if port_raw:
            try:
                port = int(port_raw)
            except ValueError:
                logger.warning(f"[{self.service_name}] Invalid port {port_raw!r} for {service_name}, using {default_port}")

        resolved = (host or default_host, port)
        logger.debug(f"[{self.service_name}] {service_name} -> {resolved[0]}:{resolved[1]}")
        return resolved
