"""Application constants."""

USER_AGENT = "marinetraffic-ais-bridge/0.3 (+signalk; contact: configured-email)"
DEFAULT_BASE_URL = "https://services.marinetraffic.com/api"
API_KEY_ENV_VAR = "MARINETRAFFIC_API_KEY"
CONTEXT_PREFIX = "vessels.urn:mrn:imo:mmsi:"
SOURCE_LABEL_PREFIX = "marinetraffic-"
UNKNOWN_SOURCE = "unknown"
# Ordered from most to least comprehensive.
QUERY_TIERS = (
    "full",
    "extended",
    "simple",
)
EXIT_SUCCESS = 0
EXIT_PARTIAL = 10
EXIT_HARD_FAIL = 20
JSON_LOG_FIELDS = (
    "timestamp",
    "run_id",
    "stage",
    "tier",
    "source",
    "event",
    "status",
    "attempt",
    "duration_ms",
    "records_in",
    "events_out",
    "error_code",
    "message",
)
