"""Exceptions raised while normalizing supplier offers."""

from __future__ import annotations


class NormalizationError(Exception):
    """Base class for normalizer failures."""


class OfferDataError(NormalizationError):
    """A single raw offer is structurally broken and must be skipped."""


class UpstreamResponseError(NormalizationError):
    """The search API reported a failed call instead of offers."""

    def __init__(self, message: str, error_code: str | None = None) -> None:
        super().__init__(message)
        self.error_code = error_code
