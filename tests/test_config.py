import pytest
from pydantic import ValidationError

from dice_forge.config import Settings


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    monkeypatch.delenv("DICE_FORGE_SERVER_NAME", raising=False)
    monkeypatch.delenv("DICE_FORGE_LOG_LEVEL", raising=False)


def test_defaults_without_environment():
    settings = Settings()
    assert settings.server_name == "dice-forge"
    assert settings.log_level == "WARNING"


def test_reads_prefixed_variables(monkeypatch):
    monkeypatch.setenv("DICE_FORGE_SERVER_NAME", " table-dice ")
    monkeypatch.setenv("DICE_FORGE_LOG_LEVEL", "debug")
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    settings = Settings()
    assert settings.server_name == "table-dice"
    assert settings.log_level == "DEBUG"


def test_blank_name_falls_back_to_default(monkeypatch):
    monkeypatch.setenv("DICE_FORGE_SERVER_NAME", "   ")
    assert Settings().server_name == "dice-forge"


def test_rejects_unknown_log_level(monkeypatch):
    monkeypatch.setenv("DICE_FORGE_LOG_LEVEL", "loud")
    with pytest.raises(ValidationError):
        Settings()
