"""
Deploy exceptions
"""


class DeployError(Exception):
    """Base exception for deploy failures."""

    pass


class ConfigurationError(DeployError):
    """Raised when the target bucket or run configuration is invalid."""

    pass


class FilesystemError(DeployError):
    """Raised when the local source directory cannot be read."""

    pass


class TransferError(DeployError):
    """Raised when a list, upload or delete call against the bucket fails."""

    def __init__(self, message: str, key: str | None = None, operation: str | None = None):
        super().__init__(message)
        self.key = key
        self.operation = operation
