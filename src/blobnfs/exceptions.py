"""Exceptions raised by the share lifecycle."""


class ShareOpsError(Exception):
    """Base exception for share mount/export operations."""

    @property
    def message(self) -> str:
        """Return message passed as argument to exception."""
        return self.args[0]


class InvalidMountPathError(ShareOpsError):
    """Exception raised when a mount path is not an absolute path."""


class NamespaceExhaustedError(ShareOpsError):
    """Exception raised when no unused mount path could be generated."""


class ShareExistsError(ShareOpsError):
    """Exception raised when exporting a share name that is already exported."""


class CommandError(ShareOpsError):
    """Exception raised when an external command exits unsuccessfully."""

    def __init__(self, message, result=None):
        super().__init__(message)
        self.result = result
