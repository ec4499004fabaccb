"""YAML database configuration loading with per-environment merging."""

from __future__ import annotations

import platform
from pathlib import Path
from typing import Any

import sqlalchemy as sa
import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

CONFIG_FILES = ("database.yml", "local_database.yml")

# Entry merged into the test environment when running on PyPy
ALTERNATE_RUNTIME_KEY = "pypy"

_DIALECTS = {
    "postgresql": "postgresql",
    "postgres": "postgresql",
    "postgis": "postgresql",
}


class ConfigurationError(KeyError):
    """Raised when the requested environment is missing or unusable."""


class DatabaseConfig(BaseModel):
    model_config = ConfigDict(extra="allow")

    adapter: str = "postgresql"
    driver: str = "psycopg2"
    host: str | None = None
    port: int | None = None
    database: str
    username: str | None = None
    password: str | None = None

    @classmethod
    def from_url(cls, url: str | sa.engine.URL) -> DatabaseConfig:
        """Describe an explicit connection URL as a connection spec."""
        parsed = sa.engine.make_url(url)
        if not parsed.database:
            raise ConfigurationError(f"no database name in {parsed.render_as_string(hide_password=True)}")
        return cls(
            adapter=parsed.get_backend_name(),
            driver=parsed.get_driver_name(),
            host=parsed.host,
            port=parsed.port,
            database=parsed.database,
            username=parsed.username,
            password=parsed.password,
        )

    def url(self) -> sa.engine.URL:
        """Build the SQLAlchemy URL for this connection spec."""
        dialect = _DIALECTS.get(self.adapter)
        if dialect is None:
            raise ConfigurationError(f"unsupported adapter {self.adapter!r}")
        return sa.engine.URL.create(
            drivername=f"{dialect}+{self.driver}",
            username=self.username,
            password=self.password,
            host=self.host,
            port=self.port,
            database=self.database,
        )


def is_alternate_runtime() -> bool:
    return platform.python_implementation() == "PyPy"


def merge_configurations(documents: list[dict[str, Any]], environment: str = "arunit") -> dict[str, Any]:
    """Merge parsed configuration documents, later ones taking precedence.

    Top-level entries replace each other wholesale, except the test
    environment entry which is merged key by key so a local file can override
    a single setting.
    """
    configurations: dict[str, Any] = {}
    env_entry: dict[str, Any] = {}

    for document in documents:
        configurations.update(document)

        if document.get(environment):
            env_entry.update(document[environment])

        if is_alternate_runtime() and document.get(ALTERNATE_RUNTIME_KEY):
            env_entry.update(document[ALTERNATE_RUNTIME_KEY])

    if env_entry:
        configurations[environment] = env_entry

    return configurations


def read_configurations(config_dir: str | Path, environment: str = "arunit") -> dict[str, Any]:
    """Read and merge database.yml and local_database.yml from config_dir."""
    documents = []
    for name in CONFIG_FILES:
        path = Path(config_dir) / name
        if not path.exists():
            continue
        with open(path) as f:
            documents.append(yaml.safe_load(f) or {})

    return merge_configurations(documents, environment)


def load_database_config(config_dir: str | Path = "tests", environment: str = "arunit") -> DatabaseConfig:
    """Load the connection spec for one environment."""
    load_dotenv()

    configurations = read_configurations(config_dir, environment)
    entry = configurations.get(environment)
    if not entry:
        raise ConfigurationError(f"no {environment!r} entry in {', '.join(CONFIG_FILES)} under {config_dir}")

    return DatabaseConfig(**entry)
