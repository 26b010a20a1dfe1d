"""
Tests for loading and validating the INI config file.
"""

import pytest
from pydantic import ValidationError

from conftest import make_config, write_ini
from pocket_app.config import load_settings, read_ini
from pocket_app.errors import StartupConfigError

GENERAL_KEYS = [
    "database", "secret", "authheader", "sslport", "httpport",
    "sslcert", "sslkey", "httpenabled", "sslenabled",
]
SMTP_KEYS = ["server", "port", "username", "password", "sendto"]


class TestLoadSettings:

    def test_loads_complete_file(self, tmp_path):
        path = write_ini(tmp_path / "config.ini", make_config("pocket.db"))

        settings = load_settings(path)

        assert settings.general.database == "pocket.db"
        assert settings.general.authheader == "X-Pocket-Auth"
        assert settings.general.http_port == 8080
        assert settings.general.http_enabled is True
        assert settings.general.ssl_enabled is False
        assert settings.general.host == "0.0.0.0"
        assert settings.smtp.port == 587
        assert settings.smtp.recipients == ["a@example.com", "b@example.com"]
        assert settings.smtp.envelope_sender == "pocket@example.com"

    @pytest.mark.parametrize("section, key", (
        [("general", key) for key in GENERAL_KEYS] + [("smtp", key) for key in SMTP_KEYS]
    ))
    def test_missing_key_is_fatal(self, tmp_path, section, key):
        config = make_config("pocket.db")
        del config[section][key]
        path = write_ini(tmp_path / "config.ini", config)

        with pytest.raises(StartupConfigError, match=f"Missing key: '{key}' under section: {section}"):
            load_settings(path)

    def test_empty_value_counts_as_missing(self, tmp_path):
        config = make_config("pocket.db")
        config["general"]["secret"] = ""
        path = write_ini(tmp_path / "config.ini", config)

        with pytest.raises(StartupConfigError, match="Missing key: 'secret'"):
            load_settings(path)

    def test_missing_section_is_fatal(self, tmp_path):
        config = make_config("pocket.db")
        del config["smtp"]
        path = write_ini(tmp_path / "config.ini", config)

        with pytest.raises(StartupConfigError, match="Missing config section: smtp"):
            load_settings(path)

    def test_missing_file_is_fatal(self, tmp_path):
        with pytest.raises(StartupConfigError, match="Failed to load config file"):
            load_settings(str(tmp_path / "absent.ini"))

    def test_malformed_file_is_fatal(self, tmp_path):
        path = tmp_path / "config.ini"
        path.write_text("secret = no section header\n")

        with pytest.raises(StartupConfigError, match="Failed to load config file"):
            load_settings(str(path))

    def test_invalid_port(self, tmp_path):
        config = make_config("pocket.db")
        config["general"]["httpport"] = "http"
        path = write_ini(tmp_path / "config.ini", config)

        with pytest.raises(StartupConfigError, match="Invalid value for 'httpport'"):
            load_settings(path)

    def test_invalid_ssl_port_when_enabled(self, tmp_path):
        config = make_config("pocket.db")
        config["general"]["sslenabled"] = "true"
        config["general"]["sslport"] = "99999"
        path = write_ini(tmp_path / "config.ini", config)

        with pytest.raises(StartupConfigError, match="Invalid value for 'sslport'"):
            load_settings(path)

    def test_disabled_listener_port_only_needs_a_value(self, tmp_path):
        config = make_config("pocket.db")
        config["general"]["sslport"] = "x"
        path = write_ini(tmp_path / "config.ini", config)

        settings = load_settings(path)

        assert settings.general.ssl_enabled is False
        assert settings.general.sslport == "x"

    @pytest.mark.parametrize("level", ["INFO", "Debug", "warning"])
    def test_loglevel_any_case(self, tmp_path, level):
        config = make_config("pocket.db")
        config["general"]["loglevel"] = level
        path = write_ini(tmp_path / "config.ini", config)

        assert load_settings(path).general.loglevel == level.lower()

    @pytest.mark.parametrize("flag, expected", [
        ("true", True),
        ("TRUE", False),
        ("yes", False),
        ("false", False),
    ])
    def test_flags_compare_literally(self, tmp_path, flag, expected):
        config = make_config("pocket.db")
        config["general"]["sslenabled"] = flag
        path = write_ini(tmp_path / "config.ini", config)

        assert load_settings(path).general.ssl_enabled is expected

    def test_optional_keys(self, tmp_path):
        config = make_config("pocket.db")
        config["general"]["host"] = "127.0.0.1"
        config["general"]["loglevel"] = "debug"
        config["smtp"]["sender"] = "alerts@example.com"
        config["smtp"]["sendto"] = "a@example.com,, b@example.com ,"
        path = write_ini(tmp_path / "config.ini", config)

        settings = load_settings(path)

        assert settings.general.host == "127.0.0.1"
        assert settings.general.loglevel == "debug"
        assert settings.smtp.envelope_sender == "alerts@example.com"
        assert settings.smtp.recipients == ["a@example.com", "b@example.com"]

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        path = write_ini(tmp_path / "config.ini", make_config("pocket.db"))
        monkeypatch.setenv("POCKET_GENERAL__SECRET", "from-env")

        settings = load_settings(path)

        assert settings.general.secret == "from-env"
        assert settings.general.database == "pocket.db"

    def test_settings_are_immutable(self, tmp_path):
        settings = load_settings(write_ini(tmp_path / "config.ini", make_config("pocket.db")))

        with pytest.raises(ValidationError):
            settings.general.secret = "changed"


def test_read_ini_keeps_values_verbatim(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text("[general]\nsecret = a%b=c\n")

    assert read_ini(str(path)) == {"general": {"secret": "a%b=c"}}
