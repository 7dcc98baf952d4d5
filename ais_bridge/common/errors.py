"""Domain errors and failure typing."""


class BridgeError(Exception):
    """Base class for bridge failures."""

    error_code = "BRIDGE_ERROR"


class ConfigError(BridgeError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class PayloadError(BridgeError):
    """Raised when a vessel batch cannot be parsed."""

    error_code = "PAYLOAD_ERROR"


class StageError(BridgeError):
    """Raised for fetch-cycle failures that should be contained to one cycle."""

    error_code = "STAGE_ERROR"
