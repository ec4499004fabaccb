"""PostGIS detection and installation for the test database."""

from __future__ import annotations

import glob
import re
from dataclasses import dataclass, field

import sqlalchemy as sa
import structlog

POSTGIS_CONTRIB_GLOBS = (
    "/opt/local/share/postgresql*/contrib/postgis-*",
    "/usr/share/postgresql*/contrib/postgis-*",
    "/usr/pgsql-*/share/contrib/postgis-*",
)

REQUIRED_EXTENSIONS = ("plpgsql", "postgis")

_FULL_VERSION_PAIR = re.compile(r'([A-Z_]+)="([^"]*)"')
_LIB_VERSION = re.compile(r"^(\d+)\.(\d+)(?:\.(\d+))?")


class PostGISUnavailableError(RuntimeError):
    """Raised when PostGIS is still missing after trying to install it."""


@dataclass
class PostGISVersion:
    lib: str
    major: int
    minor: int
    patch: int
    full: str = ""
    components: dict[str, str] = field(default_factory=dict)

    @property
    def geos(self) -> str | None:
        return self.components.get("GEOS")

    @property
    def proj(self) -> str | None:
        return self.components.get("PROJ")


def postgis_search_paths(extra: str | None = None) -> list[str]:
    """Glob patterns where a PostGIS contrib install may live, POSTGIS_PATH first."""
    return [p for p in (extra, *POSTGIS_CONTRIB_GLOBS) if p]


def find_postgis_contrib(extra: str | None = None) -> list[str]:
    """Directories matching the contrib search patterns that exist on this machine."""
    found: list[str] = []
    for pattern in postgis_search_paths(extra):
        for path in sorted(glob.glob(pattern)):
            if path not in found:
                found.append(path)
    return found


def parse_full_version(text: str) -> dict[str, str]:
    """Parse postgis_full_version() output such as 'POSTGIS="3.4.0 0874ea3" GEOS="3.12.0-CAPI-1.18.0"'."""
    return dict(_FULL_VERSION_PAIR.findall(text or ""))


def parse_lib_version(lib: str, full: str = "") -> PostGISVersion:
    match = _LIB_VERSION.match(lib.strip())
    if not match:
        raise ValueError(f"unrecognised PostGIS version {lib!r}")
    major, minor, patch = match.groups()
    return PostGISVersion(
        lib=lib.strip(),
        major=int(major),
        minor=int(minor),
        patch=int(patch or 0),
        full=full,
        components=parse_full_version(full),
    )


def server_version(conn: sa.Connection) -> str | None:
    return conn.execute(sa.text("SELECT version()")).scalar()


def postgis_version(conn: sa.Connection) -> PostGISVersion | None:
    """Ask the server which PostGIS it runs. Raises ProgrammingError when PostGIS is not installed."""
    lib = conn.execute(sa.text("SELECT postgis_lib_version()")).scalar()
    if not lib:
        return None
    full = conn.execute(sa.text("SELECT postgis_full_version()")).scalar() or ""
    return parse_lib_version(lib, full)


def extension_enabled(conn: sa.Connection, name: str) -> bool:
    return bool(
        conn.execute(
            sa.text("SELECT EXISTS (SELECT 1 FROM pg_extension WHERE extname = :name)"),
            {"name": name},
        ).scalar()
    )


def enable_extension(conn: sa.Connection, name: str) -> None:
    quoted = conn.dialect.identifier_preparer.quote_identifier(name)
    conn.execute(sa.text(f"CREATE EXTENSION IF NOT EXISTS {quoted}"))


def install_postgis(engine: sa.engine.Engine) -> list[str]:
    """Enable plpgsql and postgis where missing. Returns the extensions that were enabled."""
    enabled = []
    with engine.begin() as conn:
        for name in REQUIRED_EXTENSIONS:
            if not extension_enabled(conn, name):
                enable_extension(conn, name)
                enabled.append(name)
    return enabled


def _read_version(engine: sa.engine.Engine) -> PostGISVersion | None:
    # Each attempt gets its own transaction; a failed statement aborts it
    with engine.begin() as conn:
        return postgis_version(conn)


def ensure_postgis(
    engine: sa.engine.Engine,
    log: structlog.stdlib.BoundLogger,
    postgis_path: str | None = None,
) -> PostGISVersion:
    """Return the PostGIS version, installing the extension and retrying once if needed.

    Only ProgrammingError (undefined function, invalid statement) triggers the
    install. Errors on the retry propagate.
    """
    log.info("postgis.checking")
    try:
        version = _read_version(engine)
    except sa.exc.ProgrammingError as exc:
        log.warning("postgis.missing", error=str(exc.orig))
        version = None

    if version is None:
        log.info("postgis.installing", hint="If this doesn't work, you'll have to install PostGIS manually")
        enabled = install_postgis(engine)
        log.info("postgis.extensions_enabled", extensions=enabled)
        version = _read_version(engine)

    if version is None:
        searched = ", ".join(postgis_search_paths(postgis_path))
        raise PostGISUnavailableError(f"PostGIS did not report a version after installation; searched {searched}")

    log.info("postgis.found", full_version=version.full or version.lib)
    return version
