import pytest

from sanctionlink.config import Settings


def test_defaults_allow_unauthenticated_use(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPENSANCTIONS_API_KEY", raising=False)

    settings = Settings(_env_file=None)  # type: ignore[call-arg]

    assert settings.opensanctions_api_key == ""
    assert settings.opensanctions_base_url == "https://api.opensanctions.org"
    assert settings.min_request_interval == 0.1


def test_settings_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENSANCTIONS_API_KEY", "secret")
    monkeypatch.setenv("MIN_REQUEST_INTERVAL", "0.5")
    monkeypatch.setenv("ADJACENT_LIMIT", "25")

    settings = Settings(_env_file=None)  # type: ignore[call-arg]

    assert settings.opensanctions_api_key == "secret"
    assert settings.min_request_interval == 0.5
    assert settings.adjacent_limit == 25
