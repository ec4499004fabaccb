"""Click CLI with commands: info, setup, convert."""

from __future__ import annotations

import click
import sqlalchemy as sa

from spatialrecord import geometry
from spatialrecord.harness import bootstrap, connect, report_lines
from spatialrecord.postgis import find_postgis_contrib, postgis_version, server_version
from spatialrecord.settings import Settings


@click.group()
@click.option("--config-dir", default=None, help="Directory holding database.yml and local_database.yml.")
@click.option("--env", "environment", default=None, help="Configuration entry to connect with.")
@click.pass_context
def cli(ctx: click.Context, config_dir: str | None, environment: str | None) -> None:
    """spatialrecord — PostGIS test database harness."""
    ctx.ensure_object(dict)
    overrides = {}
    if config_dir:
        overrides["config_dir"] = config_dir
    if environment:
        overrides["environment"] = environment
    ctx.obj["settings"] = Settings(**overrides)


@cli.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """Show library, server and PostGIS versions without changing anything."""
    settings = ctx.obj["settings"]

    click.echo("\n=== Libraries ===")
    for line in report_lines():
        click.echo(f"  {line}")

    contrib = find_postgis_contrib(settings.postgis_path)
    click.echo("\n=== PostGIS contrib ===")
    click.echo(f"  {', '.join(contrib) if contrib else 'none found'}")

    engine, config = connect(settings)
    try:
        with engine.connect() as conn:
            click.echo("\n=== Server ===")
            click.echo(f"  {config.host or 'localhost'}/{config.database}")
            click.echo(f"  {server_version(conn)}")
            try:
                version = postgis_version(conn)
            except sa.exc.ProgrammingError:
                version = None
            click.echo(f"  PostGIS: {version.full or version.lib if version else 'not installed'}")
    finally:
        engine.dispose()

    click.echo()


@cli.command()
@click.option("--skip-fixtures", is_flag=True, help="Only make sure PostGIS is installed.")
@click.pass_context
def setup(ctx: click.Context, skip_fixtures: bool) -> None:
    """Install PostGIS if needed, recreate the schema and load fixtures."""
    harness = bootstrap(ctx.obj["settings"], load=not skip_fixtures)
    try:
        click.echo(f"PostGIS {harness.postgis.lib} ready on {harness.config.database}")
    finally:
        harness.dispose()


@cli.command()
@click.argument("value")
@click.option("--srid", type=int, default=None, help="SRID for inputs that carry none.")
def convert(value: str, srid: int | None) -> None:
    """Print a geometry literal in every supported encoding."""
    try:
        geom = geometry.read_geometry(value, default_srid=srid)
    except geometry.GeometryParseError as exc:
        raise click.BadParameter(str(exc), param_hint="VALUE") from exc

    click.echo(f"WKT:   {geometry.to_wkt(geom)}")
    click.echo(f"EWKT:  {geometry.to_ewkt(geom)}")
    click.echo(f"WKB:   {geometry.to_wkb_hex(geom)}")
    click.echo(f"EWKB:  {geometry.to_ewkb_hex(geom)}")
    if geom.geom_type == "Point":
        click.echo(f"LatLng: {geometry.to_g_lat_lng(geom)}")
    else:
        click.echo(f"Bounds: {geometry.to_g_lat_lng_bounds(geom)}")
