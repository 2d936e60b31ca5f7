"""Tests for nomad-export config module."""

import pytest

from nomad_export.config import ClientSettings, get_env_var
from nomad_export.config.constants import ENV_VAR_DEFINITIONS
from nomad_export.config.settings import validate_env_var
from nomad_export.exceptions import ConfigurationError

NOMAD_ENV_VARS = [
    "NOMAD_ADDR",
    "NOMAD_TOKEN",
    "NOMAD_TOKEN_FILE",
    "NOMAD_CACERT",
    "NOMAD_CAPATH",
    "NOMAD_CLIENT_CERT",
    "NOMAD_CLIENT_KEY",
    "NOMAD_TLS_SERVER_NAME",
    "NOMAD_SKIP_VERIFY",
    "NOMAD_EXPORT_TIMEOUT",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in NOMAD_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestFromEnv:
    def test_defaults(self):
        settings = ClientSettings.from_env()
        assert settings.address == "http://127.0.0.1:4646"
        assert settings.token is None
        assert settings.timeout == 30
        assert settings.skip_verify is False
        assert settings.verify is True
        assert settings.cert is None

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("NOMAD_ADDR", "https://nomad.example.com:4646")
        monkeypatch.setenv("NOMAD_TOKEN", "abc")
        monkeypatch.setenv("NOMAD_CAPATH", "/etc/ssl/nomad")
        monkeypatch.setenv("NOMAD_TLS_SERVER_NAME", "server.global.nomad")
        monkeypatch.setenv("NOMAD_EXPORT_TIMEOUT", "5")

        settings = ClientSettings.from_env()

        assert settings.address == "https://nomad.example.com:4646"
        assert settings.token == "abc"
        assert settings.verify == "/etc/ssl/nomad"
        assert settings.tls_server_name == "server.global.nomad"
        assert settings.timeout == 5

    def test_blank_values_are_unset(self, monkeypatch):
        monkeypatch.setenv("NOMAD_TOKEN", "   ")
        monkeypatch.setenv("NOMAD_ADDR", "")
        settings = ClientSettings.from_env()
        assert settings.token is None
        assert settings.address == "http://127.0.0.1:4646"

    def test_skip_verify(self, monkeypatch):
        monkeypatch.setenv("NOMAD_SKIP_VERIFY", "true")
        monkeypatch.setenv("NOMAD_CACERT", "/etc/ca.pem")
        assert ClientSettings.from_env().verify is False

    def test_invalid_skip_verify(self, monkeypatch):
        monkeypatch.setenv("NOMAD_SKIP_VERIFY", "maybe")
        with pytest.raises(ConfigurationError):
            ClientSettings.from_env()

    def test_invalid_timeout(self, monkeypatch):
        monkeypatch.setenv("NOMAD_EXPORT_TIMEOUT", "soon")
        with pytest.raises(ConfigurationError) as exc_info:
            ClientSettings.from_env()
        assert exc_info.value.context["setting"] == "NOMAD_EXPORT_TIMEOUT"


class TestMerge:
    def test_set_values_override(self, monkeypatch):
        monkeypatch.setenv("NOMAD_ADDR", "http://env:4646")
        settings = ClientSettings.from_env().merge(address="http://flag:4646")
        assert settings.address == "http://flag:4646"

    def test_unset_values_keep_environment(self, monkeypatch):
        monkeypatch.setenv("NOMAD_TOKEN", "env-token")
        settings = ClientSettings.from_env().merge(token=None, address=None)
        assert settings.token == "env-token"
        assert settings.address == "http://127.0.0.1:4646"

    def test_unknown_setting(self):
        with pytest.raises(ConfigurationError, match="Unknown settings"):
            ClientSettings().merge(region="global")


class TestTokenAndTls:
    def test_token_wins_over_file(self, tmp_path):
        token_file = tmp_path / "token"
        token_file.write_text("from-file")
        settings = ClientSettings(token="direct", token_file=str(token_file))
        assert settings.resolve_token() == "direct"

    def test_missing_token_file(self, tmp_path):
        settings = ClientSettings(token_file=str(tmp_path / "missing"))
        with pytest.raises(ConfigurationError, match="token file"):
            settings.resolve_token()

    def test_ca_cert_preferred_over_ca_path(self):
        settings = ClientSettings(ca_cert="/ca.pem", ca_path="/certs")
        assert settings.verify == "/ca.pem"

    def test_cert_pair(self):
        settings = ClientSettings(client_cert="/c.pem", client_key="/k.pem")
        assert settings.cert == ("/c.pem", "/k.pem")


class TestValidate:
    def test_valid(self):
        ClientSettings(address="https://nomad:4646").validate()

    @pytest.mark.parametrize("address", ["nomad:4646", "ftp://nomad", "http://"])
    def test_bad_address(self, address):
        with pytest.raises(ConfigurationError, match="Invalid Nomad address"):
            ClientSettings(address=address).validate()

    def test_cert_without_key(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ClientSettings(client_cert="/c.pem").validate()
        assert exc_info.value.context["setting"] == "client_key"

    def test_key_without_cert(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ClientSettings(client_key="/k.pem").validate()
        assert exc_info.value.context["setting"] == "client_cert"

    def test_non_positive_timeout(self):
        with pytest.raises(ConfigurationError):
            ClientSettings(timeout=0).validate()


def test_validate_env_var():
    assert validate_env_var("NOMAD_SKIP_VERIFY", "TRUE") == (True, None)
    ok, error = validate_env_var("NOMAD_SKIP_VERIFY", "nope")
    assert not ok
    assert "NOMAD_SKIP_VERIFY" in error
    assert validate_env_var("SOMETHING_ELSE", "x") == (True, None)


def test_get_env_var_default():
    assert get_env_var("NOMAD_ADDR") == "http://127.0.0.1:4646"
    assert get_env_var("NOMAD_TOKEN") is None


def test_env_var_definitions_cover_settings():
    assert sorted(ENV_VAR_DEFINITIONS) == sorted(NOMAD_ENV_VARS)
    for definition in ENV_VAR_DEFINITIONS.values():
        assert set(definition) <= {"default", "valid_values"}
