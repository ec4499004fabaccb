"""Test database bootstrap: config, connection, PostGIS, schema and fixtures."""

from __future__ import annotations

import platform
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError, version

import shapely
import sqlalchemy as sa
import structlog

from spatialrecord.config import DatabaseConfig, load_database_config
from spatialrecord.db import create_schema, get_engine
from spatialrecord.fixtures import load_fixtures
from spatialrecord.logging import setup_logging
from spatialrecord.postgis import PostGISVersion, ensure_postgis, server_version
from spatialrecord.settings import Settings


@dataclass
class Harness:
    engine: sa.engine.Engine
    config: DatabaseConfig
    server_version: str | None
    postgis: PostGISVersion

    def dispose(self) -> None:
        self.engine.dispose()


def package_version(name: str = "spatialrecord") -> str:
    try:
        return version(name)
    except PackageNotFoundError:
        return "unknown"


def report_lines() -> list[str]:
    """Library versions printed at the top of a test run."""
    return [
        f"spatialrecord {package_version()}",
        f"SQLAlchemy {sa.__version__}",
        f"GeoAlchemy2 {package_version('GeoAlchemy2')}",
        f"Python {platform.python_version()} - {platform.python_implementation()}",
        f"shapely {shapely.__version__}",
        f"GEOS {shapely.geos_version_string}",
    ]


def database_config(settings: Settings) -> DatabaseConfig:
    """The connection spec, taken from the URL override when one is set."""
    if settings.database_url:
        return DatabaseConfig.from_url(settings.database_url)
    return load_database_config(settings.config_dir, settings.environment)


def connect(settings: Settings) -> tuple[sa.engine.Engine, DatabaseConfig]:
    config = database_config(settings)
    engine = get_engine(config.url())
    return engine, config


def bootstrap(settings: Settings | None = None, load: bool = True) -> Harness:
    """Prepare the test database and return a handle to it.

    With ``load`` false, the schema and fixtures are left alone.
    """
    settings = settings or Settings()
    if settings.enable_logger:
        log = setup_logging(settings.log_dir, settings.log_name, log_sql=True)
    else:
        log = structlog.get_logger("spatialrecord")

    engine, config = connect(settings)

    try:
        with engine.connect() as conn:
            pg_version = server_version(conn)
        if pg_version:
            log.info("postgresql.version", version=pg_version)

        postgis = ensure_postgis(engine, log, settings.postgis_path)

        if load:
            create_schema(engine)
            load_fixtures(engine, settings.fixtures_dir, log)
    except BaseException:
        engine.dispose()
        raise

    return Harness(engine=engine, config=config, server_version=pg_version, postgis=postgis)
