"""Exception hierarchy for speedrun.com API access.

All errors derive from SpeedrunError so callers can catch broadly or
specifically depending on context.
"""

from typing import Optional


class SpeedrunError(Exception):
    """Base class for all speedrun_client exceptions."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        self.message = message
        self.url = url
        super().__init__(message)

    def __str__(self) -> str:
        if self.url:
            return f"{self.message} ({self.url})"
        return self.message


class TransportError(SpeedrunError):
    """Raised when the HTTP request could not be performed at all."""


class HttpStatusError(SpeedrunError):
    """Raised when the API answers with a non-2xx status.

    Attributes:
        status: The HTTP status code of the response

    """

    def __init__(self, status: int, message: str, url: Optional[str] = None) -> None:
        self.status = status
        super().__init__(f"HTTP {status}: {message}", url)


class DecodeError(SpeedrunError):
    """Raised when a response body is not JSON or does not fit the target type."""


class NoSuchLinkError(SpeedrunError):
    """Raised (or attached to a collection) when an expected link is missing."""

    def __init__(self, rel: str) -> None:
        self.rel = rel
        super().__init__(f"Could not find a '{rel}' link.")
