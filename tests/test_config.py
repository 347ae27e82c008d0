from __future__ import annotations

import pytest

from pyulip.config import UlipConfig, join_url
from pyulip.exceptions import UlipConfigError

_ULIP_ENV = (
    "ULIP_USERNAME",
    "ULIP_PASSWORD",
    "ULIP_BASE_URL",
    "ULIP_LOGIN_URL",
    "ULIP_TIMEOUT_MS",
    "ULIP_RETRY_COUNT",
    "ULIP_TOKEN_TTL",
    "ULIP_CIRCUIT_BREAKER_ENABLED",
    "ULIP_CIRCUIT_BREAKER_FAILURE_THRESHOLD",
    "ULIP_CIRCUIT_BREAKER_COOLDOWN_MS",
)


@pytest.fixture
def ulip_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for key in _ULIP_ENV:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("ULIP_USERNAME", "svc-gateway")
    monkeypatch.setenv("ULIP_PASSWORD", "secret")
    monkeypatch.setenv("ULIP_BASE_URL", "https://ulip.example.gov.in/ulip/v1.0.0")
    return monkeypatch


def test_from_env_defaults(ulip_env: pytest.MonkeyPatch) -> None:
    config = UlipConfig.from_env()

    assert config.username == "svc-gateway"
    assert config.timeout == 10.0
    assert config.retry_count == 2
    assert config.circuit_breaker_enabled is False
    assert config.circuit_breaker_threshold == 5
    assert config.circuit_breaker_cooldown == 30.0
    assert config.resolved_login_url == "https://ulip.example.gov.in/ulip/v1.0.0/user/login"


def test_from_env_converts_milliseconds(ulip_env: pytest.MonkeyPatch) -> None:
    ulip_env.setenv("ULIP_TIMEOUT_MS", "2500")
    ulip_env.setenv("ULIP_RETRY_COUNT", "0")
    ulip_env.setenv("ULIP_CIRCUIT_BREAKER_ENABLED", "true")
    ulip_env.setenv("ULIP_CIRCUIT_BREAKER_FAILURE_THRESHOLD", "3")
    ulip_env.setenv("ULIP_CIRCUIT_BREAKER_COOLDOWN_MS", "60000")
    ulip_env.setenv("ULIP_LOGIN_URL", "https://auth.example.gov.in/login")

    config = UlipConfig.from_env()

    assert config.timeout == 2.5
    assert config.retry_count == 0
    assert config.circuit_breaker_enabled is True
    assert config.circuit_breaker_threshold == 3
    assert config.circuit_breaker_cooldown == 60.0
    assert config.resolved_login_url == "https://auth.example.gov.in/login"


def test_from_env_overrides_win(ulip_env: pytest.MonkeyPatch) -> None:
    config = UlipConfig.from_env(retry_count=5, token_ttl=120)

    assert config.retry_count == 5
    assert config.token_ttl == 120


def test_from_env_rejects_non_numeric(ulip_env: pytest.MonkeyPatch) -> None:
    ulip_env.setenv("ULIP_RETRY_COUNT", "many")

    with pytest.raises(UlipConfigError):
        UlipConfig.from_env()


def test_from_env_missing_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ULIP_ENV:
        monkeypatch.delenv(key, raising=False)

    with pytest.raises(UlipConfigError, match="Missing required configuration"):
        UlipConfig.from_env()


def test_validation_collects_every_problem() -> None:
    with pytest.raises(UlipConfigError) as exc_info:
        UlipConfig(
            username="",
            password="secret",
            base_url="ftp://ulip",
            timeout=0,
            retry_count=11,
            circuit_breaker_threshold=0,
        )

    problems = exc_info.value.details
    assert len(problems) == 5
    assert any("base_url" in p for p in problems)


def test_join_url_keeps_scheme_and_collapses_path_slashes() -> None:
    base = "https://ulip.example.gov.in/ulip/v1.0.0/"

    assert join_url(base, "VAHAN/01") == "https://ulip.example.gov.in/ulip/v1.0.0/VAHAN/01"
    assert join_url(base, "//FASTAG//02") == "https://ulip.example.gov.in/ulip/v1.0.0/FASTAG/02"
    assert join_url("http://localhost:8080", "user/login") == "http://localhost:8080/user/login"
