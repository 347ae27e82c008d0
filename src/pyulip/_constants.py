"""Internal constants shared across the library."""

USER_AGENT = "pyulip"

#: Sub-service paths on the ULIP aggregation API.
VAHAN_PATH = "VAHAN/01"
SARATHI_PATH = "SARATHI/01"
FASTAG_TXN_PATH = "FASTAG/01"
FASTAG_DETAIL_PATH = "FASTAG/02"

#: Path appended to the base URL when no explicit login URL is configured.
LOGIN_PATH = "user/login"

#: Login response fields that may carry the session token, in priority order.
#: ``response.id`` is checked before any of these.
TOKEN_FIELDS: tuple[str, ...] = ("id", "token", "access_token", "accessToken")

#: Literal VAHAN payload returned for unknown registration numbers.
VEHICLE_NOT_FOUND = "Vehicle Details not Found"

#: Default session token lifetime in seconds.  ULIP does not advertise an
#: expiry, so this is a guess kept well below observed session lifetimes.
DEFAULT_TOKEN_TTL: float = 10 * 60

# ------------------------------------------------------------------
# Retry backoff (seconds)
# ------------------------------------------------------------------

BACKOFF_BASE_DELAY: float = 1.0
BACKOFF_MAX_DELAY: float = 8.0

#: HTTP statuses that indicate the cached token was rejected.
AUTH_REJECTED_STATUSES: frozenset[int] = frozenset({401, 403})
