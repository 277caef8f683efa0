"""Error taxonomy for Chronicle CLI."""


class ChronicleError(Exception):
    """Base class for all Chronicle errors."""


class ValidationError(ChronicleError, ValueError):
    """Raised when a focus configuration is rejected."""


class PersistenceError(ChronicleError):
    """Raised when the analytics snapshot cannot be loaded or saved."""


class NotificationError(ChronicleError):
    """Raised by notifiers; always swallowed by the focus engine."""


class AppError(ChronicleError):
    """Custom application error with exit code."""

    def __init__(self, message: str, exit_code: int = 1):
        super().__init__(message)
        self.exit_code = exit_code
