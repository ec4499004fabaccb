"""Shared test fixtures: version banner, debug logging and the PostGIS test database."""

from __future__ import annotations

from pathlib import Path

import pytest
import sqlalchemy as sa

from spatialrecord.harness import bootstrap, report_lines
from spatialrecord.logging import setup_logging
from spatialrecord.settings import Settings
from spatialrecord.testing import log_test_start

TESTS_DIR = Path(__file__).parent
FIXTURES_DIR = TESTS_DIR / "fixtures"


def _settings() -> Settings:
    return Settings(config_dir=str(TESTS_DIR), fixtures_dir=str(FIXTURES_DIR))


def pytest_report_header(config):
    return report_lines()


def pytest_configure(config):
    settings = _settings()
    if settings.enable_logger:
        setup_logging(settings.log_dir, settings.log_name, log_sql=True)


@pytest.fixture(autouse=True)
def _log_test_start(request):
    log_test_start(request.node.nodeid)
    yield


@pytest.fixture(scope="session")
def harness():
    """Session-scoped PostGIS database with schema and fixtures loaded."""
    try:
        h = bootstrap(_settings())
    except sa.exc.OperationalError as exc:
        pytest.skip(f"PostgreSQL not reachable: {exc.orig}")
    yield h
    h.dispose()


@pytest.fixture
def engine(harness):
    return harness.engine
