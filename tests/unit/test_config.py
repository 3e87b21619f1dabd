"""
Tests for DatabaseSettings and DSN parsing.
"""

import pytest

from phoenix_db import ConfigurationError, DatabaseSettings


class TestFromDsn:
    """Tests for DatabaseSettings.from_dsn."""

    def test_mysql(self):
        """Host, database, port and charset are read."""
        settings = DatabaseSettings.from_dsn(
            "mysql:host=db.local;dbname=shop;port=3307;charset=latin1", "app", "secret"
        )
        assert settings.engine == "mysql"
        assert settings.host == "db.local"
        assert settings.database == "shop"
        assert settings.port == 3307
        assert settings.charset == "latin1"
        assert settings.user == "app"
        assert settings.password == "secret"

    def test_mariadb_prefix(self):
        """mariadb: is accepted as an engine prefix."""
        assert DatabaseSettings.from_dsn("mariadb:host=h;dbname=d").engine == "mariadb"

    def test_sqlite_memory(self):
        """sqlite::memory: opens an in-memory database."""
        settings = DatabaseSettings.from_dsn("sqlite::memory:")
        assert settings.is_sqlite
        assert settings.database == ":memory:"

    def test_sqlite_path(self):
        """The rest of a sqlite DSN is the file path."""
        assert DatabaseSettings.from_dsn("sqlite:/var/data/app.db").database == "/var/data/app.db"

    @pytest.mark.parametrize("dsn", [
        "no-prefix",
        ":memory:",
        "sqlite:",
        "mysql:host=h;dbname",
        "mysql:host=h;unknown=1",
        "mysql:host=h;dbname=d;port=abc",
    ])
    def test_invalid(self, dsn):
        """Malformed DSNs are configuration errors."""
        with pytest.raises(ConfigurationError):
            DatabaseSettings.from_dsn(dsn)

    def test_overrides(self):
        """Keyword overrides win over the DSN."""
        settings = DatabaseSettings.from_dsn("mysql:host=h;dbname=d", autocommit=False)
        assert settings.autocommit is False

    def test_bad_value_names_the_dsn(self):
        """A value the settings reject is reported against the DSN."""
        with pytest.raises(ConfigurationError, match="Invalid DSN mysql:host=h;dbname=d;port=abc") as exc_info:
            DatabaseSettings.from_dsn("mysql:host=h;dbname=d;port=abc")
        assert exc_info.value.details == {"dsn": "mysql:host=h;dbname=d;port=abc"}


class TestBuild:
    """Tests for DatabaseSettings.build."""

    def test_known_fields(self):
        """Keyword values become settings."""
        settings = DatabaseSettings.build(engine="mysql", host="h", ssl_ca="/etc/ca.pem")
        assert settings.ssl_ca == "/etc/ca.pem"

    def test_unknown_option(self):
        """Names that are not settings fields are rejected."""
        with pytest.raises(ConfigurationError, match="sslca") as exc_info:
            DatabaseSettings.build(engine="mysql", sslca="/etc/ca.pem")
        assert exc_info.value.details == {"options": ["sslca"]}

    def test_invalid_value(self):
        """Values pydantic rejects are configuration errors."""
        with pytest.raises(ConfigurationError):
            DatabaseSettings.build(engine="mysql", port="abc")


class TestRendering:
    """Tests for dsn and adapter config."""

    def test_dsn_round_trip(self):
        """The rendered DSN parses back to the same location."""
        settings = DatabaseSettings(engine="mysql", host="h", database="d", port=3310)
        assert settings.dsn == "mysql:host=h;dbname=d;port=3310"
        assert DatabaseSettings.from_dsn(settings.dsn).port == 3310

    def test_mysql_adapter_config(self):
        """Server engines get the full connection config."""
        config = DatabaseSettings(engine="mysql", host="h", database="d", user="u", password="p").to_adapter_config()
        assert config["host"] == "h"
        assert config["user"] == "u"
        assert config["password"] == "p"
        assert config["autocommit"] is True
        assert config["ssl_disabled"] is False
        assert config["ssl_ca"] is None

    def test_sqlite_adapter_config(self):
        """SQLite only needs path and file options."""
        config = DatabaseSettings(engine="sqlite", database=":memory:").to_adapter_config()
        assert config == {"database": ":memory:", "read_only": False, "timeout": 30.0}

    def test_env_prefix(self, monkeypatch):
        """PHOENIX_DB_* variables fill the settings."""
        monkeypatch.setenv("PHOENIX_DB_HOST", "env-host")
        monkeypatch.setenv("PHOENIX_DB_PORT", "3399")
        settings = DatabaseSettings()
        assert settings.host == "env-host"
        assert settings.port == 3399
