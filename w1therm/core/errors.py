"""Domain-specific errors for w1therm."""


class W1ThermError(Exception):
    """Base error for w1therm."""


class ConfigValidationError(W1ThermError):
    """Raised when a config file does not conform to schema or semantics."""


class ConfigLoadError(W1ThermError):
    """Raised when reading the config file fails."""


class EnumerationError(W1ThermError):
    """Raised when bus masters or a bus master's slave list cannot be read."""


class BulkReadError(W1ThermError):
    """Base bulk conversion error."""


class BulkReadTriggerError(BulkReadError):
    """Raised when the therm_bulk_read control file cannot be written or read."""


class BulkReadTimeoutError(BulkReadError):
    """Raised when a bulk conversion does not complete before the deadline."""
