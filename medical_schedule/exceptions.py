class ScheduleError(Exception):
    """Base class for schedule store errors."""

    def __init__(self, message: str, *, cause: Exception = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self):
        if self.cause:
            return f"{self.message} (caused by {repr(self.cause)})"
        return self.message


class ValidationError(ScheduleError):
    """Missing required fields or a malformed document."""


class NotFoundError(ScheduleError):
    """No assignment exists at the requested slot."""


class PersistenceError(ScheduleError):
    """Reading or writing the data file failed."""
