"""YAML fixture loading: one file per table, each mapping a label to a row."""

from __future__ import annotations

import zlib
from pathlib import Path
from typing import Any

import sqlalchemy as sa
import structlog
import yaml
from geoalchemy2 import Geography, Geometry
from geoalchemy2.shape import from_shape

from spatialrecord.db import Base
from spatialrecord.geometry import GeometryParseError, read_geometry, srid

MAX_ID = 2**30 - 1


class FixtureError(ValueError):
    """Raised for fixture files that cannot be loaded."""


def identify(label: str) -> int:
    """Stable integer id for a fixture label."""
    return zlib.crc32(str(label).encode("utf-8")) % MAX_ID


def fixture_files(fixtures_dir: str | Path) -> list[Path]:
    return sorted(Path(fixtures_dir).glob("*.yml"))


def read_fixture_file(path: str | Path) -> dict[str, dict[str, Any]]:
    """Parse one fixture file into {label: row}."""
    path = Path(path)
    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise FixtureError(f"{path.name}: {exc}") from exc

    if not isinstance(data, dict):
        raise FixtureError(f"{path.name}: expected a mapping of labels to rows, got {type(data).__name__}")
    for label, row in data.items():
        if not isinstance(row, dict):
            raise FixtureError(f"{path.name}: fixture {label!r} is not a mapping")
    return data


def _is_spatial(column: sa.Column) -> bool:
    return isinstance(column.type, (Geometry, Geography))


def coerce_row(table: sa.Table, label: str, row: dict[str, Any]) -> dict[str, Any]:
    """Fill in a label-derived id and turn geometry literals into bindable values."""
    values = dict(row)

    if "id" in table.c and "id" not in values:
        values["id"] = identify(label)

    for name, value in values.items():
        if name not in table.c:
            raise FixtureError(f"{table.name}.{label}: unknown column {name!r}")
        column = table.c[name]
        if value is None or not _is_spatial(column):
            continue
        column_srid = column.type.srid if column.type.srid and column.type.srid > 0 else None
        try:
            geom = read_geometry(value, default_srid=column_srid)
        except GeometryParseError as exc:
            raise FixtureError(f"{table.name}.{label}.{name}: {exc}") from exc
        values[name] = from_shape(geom, srid=srid(geom) or -1)

    return values


def _resolve_tables(conn: sa.Connection, names: list[str]) -> dict[str, sa.Table]:
    tables = {}
    reflected = sa.MetaData()
    for name in names:
        if name in Base.metadata.tables:
            tables[name] = Base.metadata.tables[name]
        else:
            tables[name] = sa.Table(name, reflected, autoload_with=conn)
    return tables


def _dependency_order(tables: dict[str, sa.Table]) -> list[sa.Table]:
    ordered = [t for t in Base.metadata.sorted_tables if t.name in tables]
    ordered += [t for name, t in tables.items() if name not in Base.metadata.tables]
    return ordered


def _reset_sequence(conn: sa.Connection, table: sa.Table) -> None:
    if "id" not in table.c:
        return
    sequence = conn.execute(sa.text("SELECT pg_get_serial_sequence(:table, 'id')"), {"table": table.name}).scalar()
    if not sequence:
        return
    max_id = conn.execute(sa.select(sa.func.max(table.c.id))).scalar()
    conn.execute(
        sa.text("SELECT setval(:sequence, :value, :called)"),
        {"sequence": sequence, "value": max_id or 1, "called": max_id is not None},
    )


def load_fixtures(
    engine: sa.engine.Engine,
    fixtures_dir: str | Path,
    log: structlog.stdlib.BoundLogger,
    tables: list[str] | None = None,
) -> dict[str, int]:
    """Replace the contents of every fixture table with its YAML rows.

    Runs in a single transaction. Returns the number of rows inserted per table.
    """
    files = {path.stem: path for path in fixture_files(fixtures_dir)}
    if tables is not None:
        missing = [name for name in tables if name not in files]
        if missing:
            raise FixtureError(f"no fixture file for {', '.join(missing)} in {fixtures_dir}")
        files = {name: files[name] for name in tables}

    fixtures = {name: read_fixture_file(path) for name, path in files.items()}
    counts: dict[str, int] = {}

    with engine.begin() as conn:
        resolved = _resolve_tables(conn, list(fixtures))
        ordered = _dependency_order(resolved)

        for table in reversed(ordered):
            conn.execute(table.delete())

        for table in ordered:
            rows = [coerce_row(table, label, row) for label, row in fixtures[table.name].items()]
            # Rows may name different columns, so no executemany
            for row in rows:
                conn.execute(table.insert().values(**row))
            _reset_sequence(conn, table)
            counts[table.name] = len(rows)
            log.debug("fixtures.table_loaded", table=table.name, rows=len(rows))

    log.info("fixtures.loaded", tables=len(counts), rows=sum(counts.values()))
    return counts
