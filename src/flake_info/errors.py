"""Exceptions raised by flake-info."""

from __future__ import annotations


class FlakeInfoError(Exception):
    """Base class for flake-info errors."""


class SourceParseError(FlakeInfoError, ValueError):
    """A sources document or one of its entries has an invalid structure."""


class ChannelResolutionError(FlakeInfoError, RuntimeError):
    """GitHub could not resolve a channel to a commit.

    Attributes:
        status_code: HTTP status of the failed response, if one was received
        body: Response body text, if one was received
    """

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body
