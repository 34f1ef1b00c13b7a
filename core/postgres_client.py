"""
PostgreSQL Client Wrapper for Campus Sports

Connection pool wrapper around asyncpg with endpoint resolution through
ConfigManager, plus dedicated connections for LISTEN/NOTIFY.

Usage:
    db = PostgresClientWrapper("campus_sports")
    async with db:
        await db.execute("SELECT 1")
"""

import logging
from typing import Any, Dict, List, Optional

import asyncpg

logger = logging.getLogger(__name__)


class PostgresClientWrapper:
    """
    PostgreSQL client wrapper.

    Provides:
    - Endpoint resolution for host/port configuration
    - Lazy pool creation
    - Dedicated connections for LISTEN/NOTIFY and transactions
    """

    def __init__(
        self,
        service_name: str,
        host: Optional[str] = None,
        port: Optional[int] = None,
        database: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        dsn: Optional[str] = None,
        min_size: Optional[int] = None,
        max_size: Optional[int] = None,
    ):
        """
        Initialize PostgreSQL client wrapper.

        Args:
            service_name: Name of the service using this client
            host: PostgreSQL host (defaults to env/config)
            port: PostgreSQL port (defaults to 5432)
            database: Database name (defaults to 'postgres')
            username: Database username
            password: Database password
            dsn: Full connection string, overrides the individual fields
        """
        from core.config_manager import ConfigManager

        self.service_name = service_name

        config = ConfigManager(service_name)
        infra = config.infrastructure
        discovered_host, discovered_port = config.discover_service(
            service_name="postgres",
            default_host=infra.postgres_host,
            default_port=infra.postgres_port,
            env_host_key="POSTGRES_HOST",
            env_port_key="POSTGRES_PORT",
        )

        self.dsn = dsn
        self.host = host or discovered_host
        self.port = port or discovered_port
        self.database = database or infra.postgres_db
        self.username = username or infra.postgres_user
        self.password = password if password is not None else infra.postgres_password
        self.min_size = min_size or infra.postgres_pool_min
        self.max_size = max_size or infra.postgres_pool_max

        self._pool: Optional[asyncpg.Pool] = None

        target = dsn or f"{self.host}:{self.port}/{self.database}"
        logger.info(f"PostgreSQL client initialized for {service_name}: {target}")

    async def connect(self) -> asyncpg.Pool:
        """Create the connection pool if needed"""
        if self._pool is None:
            if self.dsn:
                self._pool = await asyncpg.create_pool(
                    dsn=self.dsn, min_size=self.min_size, max_size=self.max_size
                )
            else:
                self._pool = await asyncpg.create_pool(
                    host=self.host,
                    port=self.port,
                    user=self.username,
                    password=self.password,
                    database=self.database,
                    min_size=self.min_size,
                    max_size=self.max_size,
                )
        return self._pool

    @property
    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("PostgreSQL pool not connected")
        return self._pool

    async def __aenter__(self):
        """Async context manager entry"""
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        await self.close()

    async def health_check(self) -> Optional[Dict]:
        """Check database health"""
        try:
            value = await self.pool.fetchval("SELECT 1")
            return {"healthy": value == 1}
        except Exception as e:
            logger.error(f"PostgreSQL health check failed: {e}")
            return {"healthy": False, "error": str(e)}

    async def execute(self, sql: str, params: Optional[List[Any]] = None) -> str:
        """Execute SQL statement"""
        return await self.pool.execute(sql, *(params or []))

    async def acquire_listener(self) -> asyncpg.Connection:
        """Dedicated connection for LISTEN; released with release_listener"""
        if self.dsn:
            return await asyncpg.connect(dsn=self.dsn)
        return await asyncpg.connect(
            host=self.host,
            port=self.port,
            user=self.username,
            password=self.password,
            database=self.database,
        )

    async def release_listener(self, conn: asyncpg.Connection):
        await conn.close()

    async def close(self):
        """Close the pool"""
        if self._pool is not None:
            await self._pool.close()
            self._pool = None
