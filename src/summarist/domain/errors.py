"""Error taxonomy shared by the service layer and the HTTP handlers.

Each error carries the HTTP status it maps to and a short message that is
safe to show to clients. Full details belong in the server log only.
"""


class SummaristError(Exception):
    """Base class for errors rendered into the response envelope."""

    status_code: int = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(SummaristError):
    """Request payload has the wrong shape, length or style."""

    status_code = 400


class RateLimitError(SummaristError):
    """Client exceeded its request quota for the current window."""

    status_code = 429

    def __init__(self, message: str, retry_after: int = 0) -> None:
        super().__init__(message)
        self.retry_after = retry_after


class NotFoundError(SummaristError):
    """Requested summary does not exist."""

    status_code = 404


class GenerationError(SummaristError):
    """Text generation service failed or returned nothing usable."""

    status_code = 500


class InternalError(SummaristError):
    """Anything unexpected, including store failures."""

    status_code = 500
