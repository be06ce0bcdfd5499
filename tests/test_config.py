from __future__ import annotations

import pytest
from pydantic import ValidationError

from assign_app.constants.api_constants import DEFAULT_API_BASE_URL
from assign_app.utils.config import ConsoleConfig, load_config


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ("API_BASE_URL", "API_TOKEN", "DEFAULT_PAGE_SIZE", "LOG_LEVEL", "REQUEST_TIMEOUT_SECONDS"):
        monkeypatch.delenv(f"ASSIGNQT_{name}", raising=False)
    monkeypatch.chdir(tmp_path)


def test_defaults():
    config = load_config()
    assert config.api_base_url == DEFAULT_API_BASE_URL
    assert config.api_token is None
    assert config.default_page_size == 10
    assert config.log_level == "INFO"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("ASSIGNQT_API_BASE_URL", "https://staging.example.com/")
    monkeypatch.setenv("ASSIGNQT_API_TOKEN", "abc")
    monkeypatch.setenv("ASSIGNQT_DEFAULT_PAGE_SIZE", "50")
    monkeypatch.setenv("ASSIGNQT_LOG_LEVEL", "debug")

    config = load_config()

    assert config.api_base_url == "https://staging.example.com"
    assert config.api_token == "abc"
    assert config.default_page_size == 50
    assert config.log_level == "DEBUG"


def test_dotenv_file_is_read(tmp_path):
    (tmp_path / ".env").write_text("ASSIGNQT_API_TOKEN=from-file\n", encoding="utf-8")
    assert load_config().api_token == "from-file"


def test_blank_token_means_anonymous():
    assert ConsoleConfig(api_token="   ").api_token is None


@pytest.mark.parametrize(
    "overrides",
    [
        {"default_page_size": 7},
        {"log_level": "LOUD"},
        {"api_base_url": "  "},
        {"request_timeout_seconds": 0},
        {"ui_font_size": 40},
    ],
)
def test_invalid_values_are_rejected(overrides):
    with pytest.raises(ValidationError):
        load_config(**overrides)
