"""Client configuration for pyulip."""

from __future__ import annotations

import dataclasses
import os
import re
from typing import Any
from urllib.parse import urlsplit, urlunsplit

from pyulip._constants import DEFAULT_TOKEN_TTL, LOGIN_PATH
from pyulip.exceptions import UlipConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def join_url(base_url: str, path: str) -> str:
    """Append *path* to *base_url*, collapsing duplicate slashes in the path.

    The scheme separator is left alone (``https://`` stays intact).
    """
    parts = urlsplit(base_url)
    joined = re.sub(r"/{2,}", "/", f"{parts.path.rstrip('/')}/{path.lstrip('/')}")
    return urlunsplit((parts.scheme, parts.netloc, joined, parts.query, parts.fragment))


@dataclasses.dataclass(frozen=True)
class UlipConfig:
    """Client configuration.

    Parameters
    ----------
    username : str
        ULIP API user name.
    password : str
        ULIP API password.
    base_url : str
        Base URL every sub-service path is appended to.
    login_url : str or None
        Explicit login endpoint.  Defaults to ``<base_url>/user/login``.
    timeout : float
        Per-attempt HTTP timeout in seconds.  Bounds a single request,
        independently of the retry budget.
    retry_count : int
        Retries after the first attempt of a sub-service call.
    token_ttl : float
        Seconds a session token is reused before logging in again.
    circuit_breaker_enabled : bool
        Enable the circuit breaker guarding the upstream.
    circuit_breaker_threshold : int
        Consecutive failures that open the circuit.
    circuit_breaker_cooldown : float
        Seconds the circuit stays open before a trial call is admitted.
    """

    username: str
    password: str
    base_url: str
    login_url: str | None = None
    timeout: float = 10.0
    retry_count: int = 2
    token_ttl: float = DEFAULT_TOKEN_TTL
    circuit_breaker_enabled: bool = False
    circuit_breaker_threshold: int = 5
    circuit_breaker_cooldown: float = 30.0

    def __post_init__(self) -> None:
        problems: list[str] = []
        if not self.username:
            problems.append("username is required")
        if not self.password:
            problems.append("password is required")
        for name in ("base_url", "login_url"):
            value = getattr(self, name)
            if value is None and name == "login_url":
                continue
            parts = urlsplit(value or "")
            if parts.scheme not in ("http", "https") or not parts.netloc:
                problems.append(f"{name} must be an http(s) URL, got {value!r}")
        if not 0.1 <= self.timeout <= 120:
            problems.append(f"timeout must be between 0.1 and 120 seconds, got {self.timeout}")
        if not 0 <= self.retry_count <= 10:
            problems.append(f"retry_count must be between 0 and 10, got {self.retry_count}")
        if self.token_ttl <= 0:
            problems.append(f"token_ttl must be positive, got {self.token_ttl}")
        if self.circuit_breaker_threshold < 1:
            problems.append(f"circuit_breaker_threshold must be >= 1, got {self.circuit_breaker_threshold}")
        if self.circuit_breaker_cooldown < 1:
            problems.append(f"circuit_breaker_cooldown must be >= 1 second, got {self.circuit_breaker_cooldown}")
        if problems:
            raise UlipConfigError("Invalid configuration: " + "; ".join(problems), details=problems)

    @property
    def resolved_login_url(self) -> str:
        return self.login_url or join_url(self.base_url, LOGIN_PATH)

    @classmethod
    def from_env(cls, **overrides: Any) -> UlipConfig:
        """Create configuration from environment variables.

        Reads ``ULIP_USERNAME``, ``ULIP_PASSWORD``, ``ULIP_BASE_URL`` and the
        optional ``ULIP_*`` tuning variables.  Millisecond variables
        (``ULIP_TIMEOUT_MS``, ``ULIP_CIRCUIT_BREAKER_COOLDOWN_MS``) are
        converted to seconds.  Explicit keyword arguments override
        environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "ULIP_USERNAME": "username",
            "ULIP_PASSWORD": "password",
            "ULIP_BASE_URL": "base_url",
            "ULIP_LOGIN_URL": "login_url",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        try:
            timeout_env = env.get("ULIP_TIMEOUT_MS")
            if timeout_env is not None:
                config_kwargs["timeout"] = int(timeout_env) / 1000.0

            retry_env = env.get("ULIP_RETRY_COUNT")
            if retry_env is not None:
                config_kwargs["retry_count"] = int(retry_env)

            ttl_env = env.get("ULIP_TOKEN_TTL")
            if ttl_env is not None:
                config_kwargs["token_ttl"] = float(ttl_env)

            threshold_env = env.get("ULIP_CIRCUIT_BREAKER_FAILURE_THRESHOLD")
            if threshold_env is not None:
                config_kwargs["circuit_breaker_threshold"] = int(threshold_env)

            cooldown_env = env.get("ULIP_CIRCUIT_BREAKER_COOLDOWN_MS")
            if cooldown_env is not None:
                config_kwargs["circuit_breaker_cooldown"] = int(cooldown_env) / 1000.0
        except ValueError as exc:
            raise UlipConfigError(f"Invalid numeric ULIP_* environment variable: {exc}") from exc

        config_kwargs["circuit_breaker_enabled"] = _env_bool(env.get("ULIP_CIRCUIT_BREAKER_ENABLED"), False)

        config_kwargs.update(overrides)

        try:
            return cls(**config_kwargs)
        except TypeError as exc:
            raise UlipConfigError(f"Missing required configuration: {exc}") from exc
