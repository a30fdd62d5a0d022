"""Nano Banana client exceptions."""


class NanoBananaError(Exception):
    """Base exception for Nano Banana client errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class TransportError(NanoBananaError):
    """Network failure while sending a request."""

    pass


class HttpStatusError(NanoBananaError):
    """Endpoint answered with a non-2xx status."""

    def __init__(self, message: str, status_code: int, body: str = "") -> None:
        super().__init__(message, status_code=status_code)
        self.body = body


class MalformedResponseError(NanoBananaError):
    """Response is missing the expected structure."""

    pass


class TextInsteadOfImageError(NanoBananaError):
    """Model replied with prose instead of an image."""

    def __init__(self, text: str) -> None:
        super().__init__(f"Model returned text instead of image: {text}")
        self.text = text


class EmptyImageError(NanoBananaError):
    """Model returned neither an image nor any text."""

    pass


class EmptyModelListError(NanoBananaError):
    """Model listing endpoint returned no models."""

    pass


class GenerationFailedError(NanoBananaError):
    """All generation attempts failed.

    Carries the number of attempts made and the last recoverable error,
    which is also chained as ``__cause__``.
    """

    def __init__(self, attempts: int, last_error: NanoBananaError | None = None) -> None:
        detail = last_error.message if last_error is not None else "unknown error"
        super().__init__(
            f"Image generation failed after {attempts} attempts: {detail}",
            status_code=last_error.status_code if last_error is not None else None,
        )
        self.attempts = attempts
        self.last_error = last_error


# Failures that drive the generation retry loop
RECOVERABLE_ERRORS = (
    TransportError,
    HttpStatusError,
    MalformedResponseError,
    TextInsteadOfImageError,
    EmptyImageError,
)
