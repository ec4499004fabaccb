"""Database engine and the ORM models backing the spatial fixtures."""

from __future__ import annotations

import sqlalchemy as sa
from geoalchemy2 import Geometry
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

DEFAULT_SRID = 4326
OTHER_SRID = 4269


class Base(DeclarativeBase):
    pass


class Foo(Base):
    __tablename__ = "foos"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str | None] = mapped_column(sa.Text, nullable=True)
    the_geom = mapped_column(Geometry("GEOMETRY", srid=DEFAULT_SRID), nullable=True)
    the_other_geom = mapped_column(Geometry("GEOMETRY", srid=OTHER_SRID), nullable=True)


class Bar(Base):
    __tablename__ = "bars"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str | None] = mapped_column(sa.Text, nullable=True)
    the_geom = mapped_column(Geometry("GEOMETRY", srid=DEFAULT_SRID), nullable=True)
    the_other_geom = mapped_column(Geometry("GEOMETRY", srid=OTHER_SRID), nullable=True)


class Blort(Base):
    __tablename__ = "blorts"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str | None] = mapped_column(sa.Text, nullable=True)
    foo_id: Mapped[int | None] = mapped_column(sa.ForeignKey("foos.id"), nullable=True)


def get_engine(url: str | sa.engine.URL, echo: bool = False) -> sa.engine.Engine:
    """Create a SQLAlchemy engine for the given database URL."""
    return sa.create_engine(url, echo=echo)


def create_schema(engine: sa.engine.Engine) -> None:
    """Drop and recreate every fixture table. PostGIS must already be enabled."""
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
