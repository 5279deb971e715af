"""
Tests for simplehttp/config/runtime.py
"""

import pytest

from simplehttp.config import ClientConfig, get_default_config, set_default_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "TIMEOUT", "CONNECT_TIMEOUT", "MAX_WORKERS", "POOL_CONNECTIONS",
        "POOL_MAXSIZE", "USER_AGENT", "PROXY", "VERIFY_TLS", "LOG_LEVEL",
    ):
        monkeypatch.delenv(f"SIMPLEHTTP_{name}", raising=False)


class TestDefaults:
    def test_defaults(self):
        config = ClientConfig()
        assert config.timeout == 10.0
        assert config.connect_timeout == 10.0
        assert config.max_workers == 64
        assert config.request_timeout == (10.0, 10.0)

    def test_timeouts_disabled(self):
        assert ClientConfig(timeout=None, connect_timeout=None).request_timeout is None

    def test_invalid_worker_count(self):
        with pytest.raises(ValueError):
            ClientConfig(max_workers=0)

    def test_invalid_pool_size(self):
        with pytest.raises(ValueError):
            ClientConfig(pool_maxsize=0)

    def test_pool_size_defaults_to_worker_count(self):
        assert ClientConfig().connection_pool_size == 64
        assert ClientConfig(max_workers=8).connection_pool_size == 8
        assert ClientConfig(max_workers=8, pool_maxsize=3).connection_pool_size == 3


class TestLoading:
    """Tests for from_dict / from_yaml / from_env."""

    def test_from_dict_partial_ignores_unknown(self):
        config = ClientConfig.from_dict({"timeout": 3.5, "unknown": True})
        assert config.timeout == 3.5
        assert config.max_workers == 64

    def test_from_yaml_nested(self, tmp_path):
        path = tmp_path / "simplehttp.yaml"
        path.write_text("client:\n  timeout: 2\n  user_agent: yaml-agent\n")
        config = ClientConfig.from_yaml(path)
        assert config.timeout == 2
        assert config.user_agent == "yaml-agent"

    def test_from_yaml_flat(self, tmp_path):
        path = tmp_path / "simplehttp.yaml"
        path.write_text("max_workers: 5\n")
        assert ClientConfig.from_yaml(path).max_workers == 5

    def test_from_yaml_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            ClientConfig.from_yaml(tmp_path / "absent.yaml")

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SIMPLEHTTP_TIMEOUT", "none")
        monkeypatch.setenv("SIMPLEHTTP_MAX_WORKERS", "3")
        monkeypatch.setenv("SIMPLEHTTP_PROXY", "http://proxy:8080")
        monkeypatch.setenv("SIMPLEHTTP_VERIFY_TLS", "false")
        config = ClientConfig.from_env()
        assert config.timeout is None
        assert config.max_workers == 3
        assert config.proxy == "http://proxy:8080"
        assert config.verify_tls is False

    def test_with_env_overrides_returns_copy(self, monkeypatch):
        base = ClientConfig(timeout=1.0, user_agent="file-agent")
        monkeypatch.setenv("SIMPLEHTTP_USER_AGENT", "env-agent")
        overridden = base.with_env_overrides()
        assert overridden.user_agent == "env-agent"
        assert overridden.timeout == 1.0
        assert base.user_agent == "file-agent"

    def test_with_env_overrides_noop(self):
        base = ClientConfig()
        assert base.with_env_overrides() is base

    def test_to_dict_round_trip(self):
        config = ClientConfig(timeout=4.0, proxy="http://p:1")
        assert ClientConfig.from_dict(config.to_dict()) == config


class TestDefaultConfig:
    def test_set_and_reset(self):
        custom = ClientConfig(max_workers=2)
        set_default_config(custom)
        try:
            assert get_default_config() is custom
        finally:
            set_default_config(None)
        assert get_default_config().max_workers == 64
        set_default_config(None)

    def test_default_ignores_environment(self, monkeypatch):
        monkeypatch.setenv("SIMPLEHTTP_MAX_WORKERS", "3")
        monkeypatch.setenv("SIMPLEHTTP_TIMEOUT", "abc")
        set_default_config(None)
        try:
            assert get_default_config() == ClientConfig()
        finally:
            set_default_config(None)
