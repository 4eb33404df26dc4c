"""Custom exceptions for canvascluster."""


class CanvasClusterError(Exception):
    """Base exception for all canvascluster errors."""

    pass


# Configuration Errors
class ConfigurationError(CanvasClusterError):
    """Raised when configuration is invalid or cannot be loaded."""

    pass


# Input/Output Errors
class InputValidationError(CanvasClusterError):
    """Raised when a workspace document is missing required node data."""

    pass


class FileOperationError(CanvasClusterError):
    """Raised when file operations fail."""

    pass
