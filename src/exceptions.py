"""
Custom exceptions for the application.
"""


class BaseAppError(Exception):
    """Base exception class for application errors."""

    pass


class FileRepositoryError(BaseAppError):
    """Exception raised for file repository errors."""

    pass


class ConfigurationError(BaseAppError):
    """Exception raised for configuration errors."""

    pass


class AccessDeniedError(BaseAppError):
    """Exception raised when a path is outside the allowed directories."""

    pass


class InvalidLineRangeError(BaseAppError):
    """Exception raised for out-of-bounds or inverted line ranges."""

    pass


class BatchRequestError(BaseAppError):
    """Exception raised when a batch edit request cannot be decoded."""

    pass


class ToolError(BaseAppError):
    """Exception raised when a tool invocation has invalid arguments."""

    pass
