"""Container database URL parsing.

Format: ``[jdbc:]tc:<engine>[:<tag>]://[host]/<database>[?TC_INITSCRIPT=<path>]``.
The host part is ignored; the container decides where it listens.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import parse_qs

from src.catalog.errors import ProvisioningError

# engine name in the URL -> image repository
ENGINE_IMAGES: dict[str, str] = {
    "postgresql": "postgres",
}

DEFAULT_DATABASE = "test"

_URL = re.compile(
    r"^(?:jdbc:)?tc:(?P<engine>[A-Za-z0-9]+)(?::(?P<tag>[^:/?]+))?://"
    r"(?P<host>[^/?]*)(?:/(?P<database>[^?]*))?(?:\?(?P<query>.*))?$"
)


@dataclass(frozen=True)
class ContainerDatabaseUrl:
    engine: str
    tag: str
    database: str
    init_script: str | None = None

    @property
    def image(self) -> str:
        return f"{ENGINE_IMAGES[self.engine]}:{self.tag}"

    @classmethod
    def parse(cls, url: str) -> ContainerDatabaseUrl:
        """Parse a container database URL.

        Raises:
            ProvisioningError: The URL is malformed or names an unsupported engine.
        """
        match = _URL.match(url.strip())
        if match is None:
            raise ProvisioningError(f"Not a container database URL: {url!r}")

        engine = match.group("engine").lower()
        if engine not in ENGINE_IMAGES:
            raise ProvisioningError(
                f"Unsupported engine {engine!r} (supported: {', '.join(sorted(ENGINE_IMAGES))})"
            )

        params = parse_qs(match.group("query") or "", keep_blank_values=False)
        scripts = params.get("TC_INITSCRIPT", [])
        init_script = scripts[-1] if scripts else None
        if init_script:
            if init_script.startswith("classpath:"):
                init_script = init_script[len("classpath:"):].lstrip("/")
            elif init_script.startswith("file:"):
                init_script = init_script[len("file:"):]

        return cls(
            engine=engine,
            tag=match.group("tag") or "latest",
            database=match.group("database") or DEFAULT_DATABASE,
            init_script=init_script,
        )

    def resolve_init_script(self, base_dir: str | Path) -> Path | None:
        """Resolve the init script against a base directory (absolute paths kept)."""
        if self.init_script is None:
            return None
        path = Path(self.init_script)
        return path if path.is_absolute() else Path(base_dir) / path
