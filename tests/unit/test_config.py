import pytest

from jewepe_portal.app.config import AppConfig
from jewepe_portal.clients.jewepe_sdk.config import DEFAULT_BASE_URL, ConfigError, SDKConfig, parse_bool

_KEYS = [
    "JEWEPE_API_URL",
    "JEWEPE_TIMEOUT_SECONDS",
    "JEWEPE_VERIFY_SSL",
    "JEWEPE_RETRY_MAX_ATTEMPTS",
    "JEWEPE_RETRY_BACKOFF_MS",
    "JEWEPE_DEBOUNCE_MS",
    "JEWEPE_PAGE_SIZE",
    "JEWEPE_EXPORT_DIR",
]


@pytest.fixture()
def clean_env(monkeypatch, tmp_path):
    for key in _KEYS:
        # register every key so values loaded from .env files are undone
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    return str(tmp_path / "missing.env")


def test_defaults(clean_env) -> None:
    config = AppConfig.from_env(clean_env)

    assert config.sdk.base_url == DEFAULT_BASE_URL
    assert config.sdk.timeout_seconds == 30
    assert config.sdk.retry_max_attempts == 3
    assert config.sdk.retry_backoff_ms == 150
    assert config.sdk.verify_ssl is True
    assert config.debounce_ms == 350
    assert config.page_size == 10
    assert str(config.export_dir) == "out/exports"


def test_env_file_values(clean_env, tmp_path) -> None:
    env_file = tmp_path / ".env"
    env_file.write_text("JEWEPE_API_URL=http://localhost:4000/api/v1/\nJEWEPE_PAGE_SIZE=20\nJEWEPE_VERIFY_SSL=no\n", encoding="utf-8")

    config = AppConfig.from_env(str(env_file))

    assert config.sdk.base_url == "http://localhost:4000/api/v1"
    assert config.sdk.verify_ssl is False
    assert config.page_size == 20


def test_invalid_values_rejected(clean_env, monkeypatch) -> None:
    monkeypatch.setenv("JEWEPE_PAGE_SIZE", "7")
    with pytest.raises(ConfigError):
        AppConfig.from_env(clean_env)

    monkeypatch.setenv("JEWEPE_PAGE_SIZE", "10")
    monkeypatch.setenv("JEWEPE_TIMEOUT_SECONDS", "abc")
    with pytest.raises(ConfigError):
        AppConfig.from_env(clean_env)


def test_sdk_validate() -> None:
    with pytest.raises(ConfigError):
        SDKConfig(retry_max_attempts=0).validate()
    with pytest.raises(ConfigError):
        SDKConfig(retry_backoff_ms=-1).validate()


@pytest.mark.parametrize(("raw", "expected"), [("true", True), ("0", False), ("OFF", False), (None, True), ("maybe", True)])
def test_parse_bool(raw, expected) -> None:
    assert parse_bool(raw) is expected
