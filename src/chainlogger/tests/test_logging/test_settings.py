# src/chainlogger/tests/test_logging/test_settings.py
import pytest
from pydantic import ValidationError

from chainlogger.config.settings import Settings, get_settings
from chainlogger.validators.config_validators import normalize_format_name, normalize_level_name

def test_defaults():
    settings = Settings()
    assert settings.LOG_FORMAT == "text"
    assert settings.LOG_LEVEL == "INFO"
    assert settings.LOG_TO_STDOUT is True
    assert settings.LOGGER_NAME == "chainlogger"

def test_env_values_are_normalized(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", " debug ")
    monkeypatch.setenv("LOG_FORMAT", "JSON")
    settings = get_settings()
    assert settings.LOG_LEVEL == "DEBUG"
    assert settings.LOG_FORMAT == "json"

def test_get_settings_is_cached():
    assert get_settings() is get_settings()

def test_unknown_format_is_rejected(monkeypatch):
    monkeypatch.setenv("LOG_FORMAT", "xml")
    with pytest.raises(ValidationError):
        Settings()

def test_normalizers_pass_none_through():
    assert normalize_level_name(None) is None
    assert normalize_format_name(None) is None
