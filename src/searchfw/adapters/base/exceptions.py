"""Adapter-specific exceptions."""

from __future__ import annotations


class AdapterError(Exception):
    """Base exception for adapter errors."""


class ConfigurationError(AdapterError):
    """Raised when adapter configuration is invalid."""


class EngineCallError(AdapterError):
    """Raised when a call to the search engine fails.

    Args:
        message: Human readable description of the failed call.
        index: The index the call targeted, if known.
        pending_count: Number of buffered documents still pending, if relevant.
    """

    def __init__(self, message: str, index: str | None = None, pending_count: int | None = None) -> None:
        super().__init__(message)
        self.index = index
        self.pending_count = pending_count


class FlushError(EngineCallError):
    """Raised when buffered documents could not be written to the engine.

    The buffer is left untouched, so the caller may retry the flush or
    discard the pending documents.
    """
