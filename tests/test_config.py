import os
from unittest.mock import patch

import pytest

from skyvendas.config import DEFAULT_API_BASE_URL, Config, get_config, reset_config
from skyvendas.utils.errors import ConfigurationError


@pytest.fixture(autouse=True)
def clear_test_env():
    """Clear SkyVendas related environment variables before each test."""
    reset_config()
    to_delete = [
        key
        for key in os.environ
        if key.startswith("SKYVENDAS_") or key in ("LOG_LEVEL", "DEBUG")
    ]
    with patch.dict(os.environ, {}, clear=False):
        for key in to_delete:
            del os.environ[key]
        yield
    reset_config()


def test_defaults():
    config = Config.from_env()

    assert config.api_base_url == DEFAULT_API_BASE_URL
    assert config.products_page_size == 10
    assert config.posts_page_size == 20
    assert config.ads_limit == 100
    assert config.request_timeout == 60.0
    assert config.has_token is False


def test_env_vars_override_defaults():
    env = {
        "SKYVENDAS_API_BASE_URL": "http://localhost:8000",
        "SKYVENDAS_API_TOKEN": "secret",
        "SKYVENDAS_PRODUCTS_PAGE_SIZE": "30",
        "SKYVENDAS_REQUEST_TIMEOUT": "5",
        "DEBUG": "true",
    }
    with patch.dict(os.environ, env):
        config = Config.from_env()

    assert config.api_base_url == "http://localhost:8000"
    assert config.has_token is True
    assert config.products_page_size == 30
    assert config.request_timeout == 5.0
    assert config.debug is True


def test_invalid_page_size_raises_configuration_error():
    with patch.dict(os.environ, {"SKYVENDAS_POSTS_PAGE_SIZE": "0"}):
        with pytest.raises(ConfigurationError):
            Config.from_env()


def test_load_reads_env_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("SKYVENDAS_ADS_LIMIT=25\n")

    config = Config.load(str(env_file))

    assert config.ads_limit == 25


def test_load_without_env_file(tmp_path):
    config = Config.load(str(tmp_path / "missing.env"))

    assert config.ads_limit == 100


def test_get_config_is_cached(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    first = get_config()
    assert get_config() is first

    reset_config()
    assert get_config() is not first
