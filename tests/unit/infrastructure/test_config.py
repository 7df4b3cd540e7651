"""Unit tests for configuration loading and the runtime context."""

from pathlib import Path

import pytest

from src.catalog.runtime.config.config_data import (
    AppConfig,
    CORSConfig,
    ConfigData,
    DatabaseConfig,
    JWTConfig,
    PaginationConfig,
)
from src.catalog.runtime.config.config_template import (
    load_templated_yaml,
    substitute_env_vars,
)
from src.catalog.runtime.context import (
    get_config,
    load_config,
    merge_configs,
    with_context,
)

REPOSITORY_CONFIG = Path(__file__).resolve().parents[3] / "config.yaml"

CONFIG_TEXT = """
config:
  app:
    environment: ${CATALOG_T_ENV:-test}
    port: ${CATALOG_T_PORT:-9000}
  database:
    url: ${CATALOG_T_DB:-sqlite://}
  jwt:
    secret: ${CATALOG_T_SECRET:-}
  pagination:
    max_limit: 50
"""


class TestSubstitution:
    """Test ${VAR} placeholder handling."""

    def test_default_used_when_unset(self, monkeypatch):
        monkeypatch.delenv("CATALOG_T_PORT", raising=False)

        assert substitute_env_vars("port: ${CATALOG_T_PORT:-9000}") == "port: 9000"

    def test_environment_value_wins(self, monkeypatch):
        monkeypatch.setenv("CATALOG_T_PORT", "9100")

        assert substitute_env_vars("port: ${CATALOG_T_PORT:-9000}") == "port: 9100"

    def test_required_variable_missing(self, monkeypatch):
        monkeypatch.delenv("CATALOG_T_REQUIRED", raising=False)

        with pytest.raises(ValueError):
            substitute_env_vars("${CATALOG_T_REQUIRED}")

    def test_required_with_message(self, monkeypatch):
        monkeypatch.delenv("CATALOG_T_REQUIRED", raising=False)

        with pytest.raises(ValueError, match="set me"):
            substitute_env_vars("${CATALOG_T_REQUIRED:?set me}")

    def test_comment_lines_are_not_substituted(self, monkeypatch):
        monkeypatch.delenv("CATALOG_T_REQUIRED", raising=False)
        text = "# e.g. ${CATALOG_T_REQUIRED}\nport: ${CATALOG_T_PORT:-9000}\n"

        assert substitute_env_vars(text) == "# e.g. ${CATALOG_T_REQUIRED}\nport: 9000\n"


class TestLoadTemplatedYaml:
    """Test parsing a full configuration file."""

    def test_load(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("CATALOG_T_SECRET", "from-env")
        path = tmp_path / "config.yaml"
        path.write_text(CONFIG_TEXT)

        config = load_templated_yaml(path, env_mode="test")

        assert config.app.environment == "test"
        assert config.app.port == 9000
        assert config.database.is_memory is True
        assert config.jwt.secret == "from-env"
        assert config.pagination.max_limit == 50
        assert config.pagination.default_limit == 10

    def test_empty_placeholder_becomes_none(self, tmp_path: Path, monkeypatch):
        monkeypatch.delenv("CATALOG_T_SECRET", raising=False)
        path = tmp_path / "config.yaml"
        path.write_text(CONFIG_TEXT)

        assert load_templated_yaml(path, env_mode="test").jwt.secret is None

    def test_environment_prefixed_override(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("STAGING_CATALOG_T_PORT", "9200")
        # Registered so the promoted value is removed again after the test
        monkeypatch.setenv("CATALOG_T_PORT", "9000")
        path = tmp_path / "config.yaml"
        path.write_text(CONFIG_TEXT)

        config = load_templated_yaml(path, env_mode="staging")

        assert config.app.port == 9200

    def test_invalid_values(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("config:\n  pagination:\n    max_limit: 0\n")

        with pytest.raises(ValueError):
            load_templated_yaml(path, env_mode="test")

    def test_repository_config_loads_with_defaults(self, monkeypatch):
        """The shipped config.yaml loads with no variables exported."""
        monkeypatch.setenv("APP_CONFIG_FILE", str(REPOSITORY_CONFIG))
        monkeypatch.setenv("APP_ENVIRONMENT", "development")
        for name in ("DATABASE_URL", "JWT_SECRET", "APP_PORT", "APP_ENABLE_DEV_ROUTES"):
            monkeypatch.delenv(name, raising=False)

        config = load_config()

        assert config.app.environment == "development"
        assert config.app.port == 8000
        assert config.app.dev_routes_enabled is True
        assert config.database.url == "sqlite:///./catalog.db"
        assert config.jwt.secret is None
        assert config.pagination.max_limit == 100


class TestRuntimeValidation:
    """Test fail-fast checks for production."""

    def test_production_requires_jwt_secret(self):
        config = ConfigData(app=AppConfig(environment="production"))

        with pytest.raises(ValueError, match="jwt.secret"):
            config.validate_runtime()

    def test_production_rejects_wildcard_origin_with_credentials(self):
        config = ConfigData(
            app=AppConfig(environment="production", cors=CORSConfig(origins=["*"])),
            jwt=JWTConfig(secret="prod-secret"),
        )

        with pytest.raises(ValueError, match="CORS"):
            config.validate_runtime()

    def test_development_is_lenient(self):
        ConfigData().validate_runtime()

    def test_dev_routes_default_by_environment(self):
        assert AppConfig(environment="development").dev_routes_enabled is True
        assert AppConfig(environment="production").dev_routes_enabled is False
        assert (
            AppConfig(environment="production", enable_dev_routes=True).dev_routes_enabled
            is True
        )


class TestContext:
    """Test configuration overrides through the context."""

    def test_with_context_overrides_and_restores(self):
        original_limit = get_config().pagination.max_limit
        override = ConfigData(pagination=PaginationConfig(max_limit=5))

        with with_context(override):
            assert get_config().pagination.max_limit == 5

        assert get_config().pagination.max_limit == original_limit

    def test_merge_keeps_unset_nested_fields(self):
        base = ConfigData(database=DatabaseConfig(url="sqlite:///base.db", echo=True))
        override = ConfigData(database=DatabaseConfig(echo=False))

        merged = merge_configs(base, override)

        assert merged.database.url == "sqlite:///base.db"
        assert merged.database.echo is False

    def test_with_context_rejects_other_types(self):
        with pytest.raises(ValueError):
            with with_context({"app": {}}):
                pass
