"""
Application errors.

StoreUnavailableError and GenerationFailureError are the two failure kinds of the
information pipeline; both are absorbed inside it and turned into safe text.
The others are mapped to HTTP responses by the API layer.
"""


class RescueLineError(Exception):
    """Base error carrying a user-facing message."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class StoreUnavailableError(RescueLineError):
    """Raised when the document or report store cannot be reached."""


class GenerationFailureError(RescueLineError):
    """Raised when the answer model call fails or returns nothing usable."""


class InvalidDocumentError(RescueLineError):
    """Raised when an uploaded document is too large or has no text."""

    def __init__(self, message: str, status_code: int = 400) -> None:
        self.status_code = status_code
        super().__init__(message)
