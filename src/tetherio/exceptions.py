from typing import Optional


class TetherIOError(Exception):
    """Base exception for all application-specific errors."""

    pass


# --- 1. Errors related to loading and parsing the configuration file ---
class ConfigurationError(TetherIOError):
    """Base class for errors encountered while finding, reading, or parsing config files."""

    pass


class ConfigFileMissingError(ConfigurationError):
    """Raised when the configuration file cannot be found."""

    pass


class ConfigParsingError(ConfigurationError):
    """Raised when a YAML configuration file is syntactically incorrect."""

    pass


class ConfigValidationError(ConfigurationError):
    """Raised when the configuration fails structural validation (e.g., Pydantic)."""

    pass


# --- 2. Errors related to stream IO operations ---
class StreamIOError(TetherIOError):
    """Base class for IO-related errors. Carries the path involved, if any."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class InvalidPathError(StreamIOError):
    """Raised when a path is invalid."""

    pass


class PathNotFoundError(StreamIOError):
    """Raised when a read target does not exist or cannot be opened."""

    pass


class OperationFailedError(StreamIOError):
    """Raised when the platform or the device transport reports a failure."""

    def __init__(self, message: str, path: Optional[str] = None, code: Optional[int] = None):
        super().__init__(message, path)
        self.code = code


class DeviceNotConnectedError(OperationFailedError):
    """Raised when the device-sync connection cannot be established."""

    pass


class UnknownBackendError(StreamIOError):
    """Raised when no backend is registered for the kind of a path."""

    pass


class StreamClosedError(StreamIOError):
    """Raised when a closed stream is used."""

    pass
