"""Exceptions raised by the genomeapi service clients."""

from __future__ import annotations


class RequestError(Exception):
    """An upstream request failed or returned an unusable payload.

    Args:
        message: Human-readable description of the failure.
        status_code: HTTP status of the failed response, if one was received.
        url: The request URL, if known.
    """

    def __init__(self, message: str, status_code: int | None = None, url: str | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.url = url
