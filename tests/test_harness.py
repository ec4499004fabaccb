"""Tests for connecting and bootstrapping the test database."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from spatialrecord.config import ConfigurationError
from spatialrecord.harness import bootstrap, connect, database_config
from spatialrecord.postgis import PostGISUnavailableError
from spatialrecord.settings import Settings

OVERRIDE_URL = "postgresql+psycopg2://ci:pw@ci-db:5433/ci_tests"


class TestDatabaseConfig:
    def test_url_override_needs_no_yaml(self, tmp_path: Path) -> None:
        config = database_config(Settings(config_dir=str(tmp_path), database_url=OVERRIDE_URL))
        assert config.host == "ci-db"
        assert config.port == 5433
        assert config.database == "ci_tests"
        assert config.username == "ci"

    def test_url_override_wins_over_yaml(self) -> None:
        settings = Settings(config_dir=str(Path(__file__).parent), database_url=OVERRIDE_URL)
        assert database_config(settings).database == "ci_tests"

    def test_yaml_used_without_override(self) -> None:
        settings = Settings(config_dir=str(Path(__file__).parent), database_url="")
        assert database_config(settings).database == "spatialrecord_unit_tests"

    def test_no_override_and_no_yaml(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            database_config(Settings(config_dir=str(tmp_path), database_url=""))


class TestConnect:
    def test_engine_matches_config(self, tmp_path: Path) -> None:
        engine, config = connect(Settings(config_dir=str(tmp_path), database_url=OVERRIDE_URL))
        try:
            assert engine.url.host == config.host == "ci-db"
            assert engine.url.database == config.database == "ci_tests"
            assert engine.url.password == "pw"
        finally:
            engine.dispose()


class TestBootstrap:
    def test_engine_disposed_when_setup_fails(self, tmp_path: Path) -> None:
        settings = Settings(config_dir=str(tmp_path), database_url=OVERRIDE_URL)
        engine = MagicMock()
        with (
            patch("spatialrecord.harness.get_engine", return_value=engine),
            patch("spatialrecord.harness.server_version", return_value="PostgreSQL 16.2"),
            patch("spatialrecord.harness.ensure_postgis", side_effect=PostGISUnavailableError("missing")),
        ):
            with pytest.raises(PostGISUnavailableError):
                bootstrap(settings)

        engine.dispose.assert_called_once()

    def test_engine_kept_on_success(self, tmp_path: Path) -> None:
        settings = Settings(config_dir=str(tmp_path), database_url=OVERRIDE_URL)
        engine = MagicMock()
        with (
            patch("spatialrecord.harness.get_engine", return_value=engine),
            patch("spatialrecord.harness.server_version", return_value="PostgreSQL 16.2"),
            patch("spatialrecord.harness.ensure_postgis") as ensure_postgis,
        ):
            harness = bootstrap(settings, load=False)

        assert harness.engine is engine
        assert harness.server_version == "PostgreSQL 16.2"
        assert harness.postgis is ensure_postgis.return_value
        assert harness.config.database == "ci_tests"
        engine.dispose.assert_not_called()
