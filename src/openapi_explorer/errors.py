"""Error types raised by the explorer pipeline."""

from __future__ import annotations


class ExplorerError(Exception):
    pass


class SpecParseError(ExplorerError):
    """The specification could not be fetched, parsed or dereferenced."""


class PreconditionError(ExplorerError):
    """A required field was missing before any I/O was attempted."""


class UnsupportedGrantType(ExplorerError):
    def __init__(self, grant_type: str) -> None:
        super().__init__(f"Unsupported grant type: {grant_type}")
        self.grant_type = grant_type


class TokenAcquisitionError(ExplorerError):
    pass


class JwtDecodeError(ExplorerError):
    pass
