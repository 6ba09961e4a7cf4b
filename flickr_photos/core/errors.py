from __future__ import annotations


class FlickrServiceError(Exception):
    """Raised by every service call that does not produce a result."""


class TransportError(FlickrServiceError):
    """The request did not complete or the remote side reported a failure."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class FlickrAPIError(TransportError):
    """The API answered with ``stat=fail``."""

    def __init__(self, code: int, message: str) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message


class ParseError(FlickrServiceError):
    """The response body could not be mapped to the expected shape."""
