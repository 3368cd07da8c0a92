class NotesError(Exception):
    """Base class for errors surfaced to the user."""


class NetworkFailure(NotesError):
    """The request failed, returned a non-2xx status, or the reply was unreadable."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ValidationFailure(NotesError):
    """Title or content is empty."""
