"""pyulip - Async Python client for the ULIP vehicle, licence and toll-tag lookups."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyulip")
except PackageNotFoundError:
    __version__ = "0+local"
from pyulip._breaker import CircuitBreaker, CircuitState
from pyulip.client import UlipClient
from pyulip.config import UlipConfig
from pyulip.events import UpstreamEvent
from pyulip.exceptions import (
    BusinessRuleViolationError,
    CircuitOpenError,
    NotFoundError,
    RequestValidationError,
    UlipConfigError,
    UlipError,
    UnauthorizedError,
    UpstreamBadResponseError,
    UpstreamRejectedError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
    error_response,
)
from pyulip.models import (
    LicenceCategory,
    LicenceRecord,
    RegistryRecord,
    TollTagDetail,
    TollTagHistory,
    TollTagRecord,
    TollTransaction,
)

__all__ = [
    "__version__",
    "BusinessRuleViolationError",
    "CircuitBreaker",
    "CircuitOpenError",
    "CircuitState",
    "LicenceCategory",
    "LicenceRecord",
    "NotFoundError",
    "RegistryRecord",
    "RequestValidationError",
    "TollTagDetail",
    "TollTagHistory",
    "TollTagRecord",
    "TollTransaction",
    "UlipClient",
    "UlipConfig",
    "UlipConfigError",
    "UlipError",
    "UnauthorizedError",
    "UpstreamBadResponseError",
    "UpstreamEvent",
    "UpstreamRejectedError",
    "UpstreamTimeoutError",
    "UpstreamUnavailableError",
    "error_response",
]
