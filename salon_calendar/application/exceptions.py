class CalendarEngineError(RuntimeError):
    """Base class for failures scoped to the current render."""
    pass


class NetworkFailure(CalendarEngineError):
    """Raised when a collaborator call fails (transport error or non-success status)."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AdminApiError(NetworkFailure):
    """Raised when the admin API rejects a mutation; message comes from the server."""
    pass


class ConflictError(AdminApiError):
    """Raised when an update collides with an existing booking."""

    def __init__(self, message: str) -> None:
        super().__init__(message, status_code=409)


class ValidationFailure(CalendarEngineError):
    """Raised locally before calling a collaborator (e.g. end time not after start time)."""
    pass
