"""Tests for client configuration resolution."""

import pytest

from easyrag_sdk import ClientConfig, ConfigurationError, DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from easyrag_sdk.config import resolve_config, safe_float


class TestResolveConfig:
    """resolve_config accepts every documented construction form."""

    def test_bare_credential_uses_defaults(self):
        config = resolve_config("sk-123")
        assert config.api_key == "sk-123"
        assert config.base_url == DEFAULT_BASE_URL
        assert config.timeout == DEFAULT_TIMEOUT == 30.0

    def test_mapping_with_wire_style_keys(self):
        config = resolve_config({"apiKey": "sk-1", "baseUrl": "http://localhost:3000", "timeout": 5})
        assert config.api_key == "sk-1"
        assert config.base_url == "http://localhost:3000"
        assert config.timeout == 5.0

    def test_mapping_with_python_style_keys(self):
        config = resolve_config({"api_key": "sk-1", "base_url": "http://localhost:3000"})
        assert config.base_url == "http://localhost:3000"
        assert config.timeout == DEFAULT_TIMEOUT

    def test_client_config_is_returned_as_is(self):
        config = ClientConfig(api_key="sk-1")
        assert resolve_config(config) is config

    def test_keyword_overrides_win(self):
        config = resolve_config(ClientConfig(api_key="sk-1"), timeout=2.5, base_url="http://x")
        assert config.api_key == "sk-1"
        assert config.timeout == 2.5
        assert config.base_url == "http://x"

    def test_trailing_slash_is_stripped(self):
        assert resolve_config("sk-1", base_url="http://localhost:3000/").base_url == "http://localhost:3000"

    def test_mapping_empty_values_use_defaults(self):
        config = resolve_config({"apiKey": "sk-1", "baseUrl": "", "timeout": 0})
        assert config.base_url == DEFAULT_BASE_URL
        assert config.timeout == DEFAULT_TIMEOUT

    def test_mapping_without_key_fails(self):
        with pytest.raises(ConfigurationError):
            resolve_config({"baseUrl": "http://x"})

    def test_non_positive_timeout_fails(self):
        with pytest.raises(ConfigurationError):
            resolve_config("sk-1", timeout=0)

    def test_unsupported_type_fails(self):
        with pytest.raises(ConfigurationError):
            resolve_config(42)

    def test_config_is_immutable(self):
        config = resolve_config("sk-1")
        with pytest.raises(Exception):
            config.api_key = "other"


class TestFromEnv:
    """Environment fallback when no explicit configuration is given."""

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("EASYRAG_API_KEY", "env-key")
        monkeypatch.setenv("EASYRAG_BASE_URL", "http://env.example")
        monkeypatch.setenv("EASYRAG_TIMEOUT", "12.5")

        config = resolve_config(None)

        assert config.api_key == "env-key"
        assert config.base_url == "http://env.example"
        assert config.timeout == 12.5

    def test_unparsable_timeout_falls_back_to_default(self, monkeypatch):
        monkeypatch.setenv("EASYRAG_API_KEY", "env-key")
        monkeypatch.setenv("EASYRAG_TIMEOUT", "soon")
        assert resolve_config(None).timeout == DEFAULT_TIMEOUT

    def test_explicit_key_beats_environment(self, monkeypatch):
        monkeypatch.setenv("EASYRAG_API_KEY", "env-key")
        assert resolve_config(None, api_key="explicit").api_key == "explicit"

    def test_missing_key_fails(self):
        with pytest.raises(ConfigurationError, match="EASYRAG_API_KEY"):
            resolve_config(None)


@pytest.mark.parametrize(
    "raw, expected",
    [(None, 1.0), ("", 1.0), ("2", 2.0), ("x", 1.0), (3, 3.0)],
)
def test_safe_float(raw, expected):
    assert safe_float(raw, 1.0) == expected
