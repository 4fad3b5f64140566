"""PostgreSQL provisioning for tests.

PostgresProvisioner owns one PostgresContainer: it starts it, publishes the
connection parameters, applies init scripts and stops it on exit.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from types import TracebackType

from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from testcontainers.postgres import PostgresContainer

from src.catalog.config import DEFAULT_PREFIX
from src.catalog.errors import ProvisioningError
from src.catalog.sql_scripts import run_sql_script
from src.provisioning.url import ContainerDatabaseUrl

logger = logging.getLogger(__name__)

DEFAULT_IMAGE = "postgres:15.2-alpine"
POSTGRES_PORT = 5432


def to_async_url(sync_url: str) -> str:
    """Rewrite a Testcontainers connection URL to the asyncpg driver."""
    url = make_url(sync_url)
    return url.set(drivername="postgresql+asyncpg").render_as_string(hide_password=False)


@dataclass(frozen=True)
class ProvisionedDatabase:
    """Connection parameters published by a running container."""

    host: str
    port: int
    username: str
    password: str
    database: str

    @property
    def async_url(self) -> str:
        url = URL.create(
            "postgresql+asyncpg",
            username=self.username,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.database,
        )
        return url.render_as_string(hide_password=False)

    def as_environment(self, prefix: str = DEFAULT_PREFIX) -> dict[str, str]:
        """Settings keys understood by DatabaseSettings.from_env."""
        return {
            f"{prefix}DATABASE__URL": self.async_url,
            f"{prefix}DATABASE__HOST": self.host,
            f"{prefix}DATABASE__PORT": str(self.port),
            f"{prefix}DATABASE__USERNAME": self.username,
            f"{prefix}DATABASE__PASSWORD": self.password,
            f"{prefix}DATABASE__NAME": self.database,
        }


class PostgresProvisioner:
    """Start a PostgreSQL container and hand out connections to it.

    Args:
        image: Docker image, e.g. ``postgres:15.2-alpine``.
        database: Database created inside the container.
        init_scripts: SQL files applied by apply_init_scripts, in order.
    """

    def __init__(
        self,
        image: str = DEFAULT_IMAGE,
        database: str = "test",
        init_scripts: Sequence[str | Path] = (),
    ) -> None:
        self.image = image
        self.init_scripts = [Path(script) for script in init_scripts]
        self._container = PostgresContainer(image, dbname=database)
        self._started = False

    @classmethod
    def from_url(cls, url: str, base_dir: str | Path = ".") -> PostgresProvisioner:
        """Build a provisioner from a container database URL.

        A relative TC_INITSCRIPT is resolved against base_dir.
        """
        parsed = ContainerDatabaseUrl.parse(url)
        script = parsed.resolve_init_script(base_dir)
        return cls(
            image=parsed.image,
            database=parsed.database,
            init_scripts=[script] if script is not None else [],
        )

    @property
    def database(self) -> ProvisionedDatabase:
        if not self._started:
            raise ProvisioningError("Container not started; use the provisioner as a context manager")
        container = self._container
        return ProvisionedDatabase(
            host=container.get_container_host_ip(),
            port=int(container.get_exposed_port(POSTGRES_PORT)),
            username=container.username,
            password=container.password,
            database=container.dbname,
        )

    def start(self) -> PostgresProvisioner:
        missing = [str(script) for script in self.init_scripts if not script.is_file()]
        if missing:
            raise ProvisioningError(f"Init script not found: {', '.join(missing)}")
        logger.info("Starting PostgreSQL container %s", self.image)
        self._container.start()
        self._started = True
        logger.info("PostgreSQL container ready at %s", self.database.async_url.split("@")[-1])
        return self

    def stop(self) -> None:
        if self._started:
            self._container.stop()
            self._started = False
            logger.info("Stopped PostgreSQL container %s", self.image)

    def __enter__(self) -> PostgresProvisioner:
        return self.start()

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()

    def create_engine(self, **kwargs: object) -> AsyncEngine:
        """Create an asyncpg engine connected to the container."""
        return create_async_engine(self.database.async_url, pool_pre_ping=True, **kwargs)

    async def apply_init_scripts(self, connection: AsyncConnection) -> int:
        """Run every init script on the connection; returns statements executed.

        The caller owns the transaction, so tests can roll the schema back.
        """
        executed = 0
        for script in self.init_scripts:
            executed += await run_sql_script(connection, script)
        return executed
