"""Custom exception hierarchy for the UCP estimator."""

from __future__ import annotations


class UcpError(Exception):
    """Base exception for all UCP estimator errors."""


class UnknownFactorError(UcpError):
    """Raised when a factor id is not part of the targeted factor set."""


class AnalysisProviderError(UcpError):
    """Raised when the analysis provider cannot be reached or rejects a request."""
