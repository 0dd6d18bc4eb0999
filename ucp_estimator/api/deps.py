"""Dependency injection for FastAPI endpoints."""

from __future__ import annotations

import logging
import os

from ucp_estimator.services.analysis_provider import DEFAULT_MODEL, AnalysisProvider

logger = logging.getLogger(__name__)

DEFAULT_CORS_ORIGINS = "http://localhost:3000"


def create_analysis_provider() -> AnalysisProvider:
    """Create an AnalysisProvider from environment configuration.

    Reads ANTHROPIC_API_KEY (required), UCP_ANALYSIS_MODEL and
    UCP_ANALYSIS_TIMEOUT (optional). Raises ValueError if the key is not set
    or the timeout is not a number.
    """
    api_key = os.environ.get("ANTHROPIC_API_KEY", "")
    if not api_key:
        msg = (
            "ANTHROPIC_API_KEY environment variable is not set. "
            "Set it to use the /api/analyze endpoints."
        )
        raise ValueError(msg)

    model = os.environ.get("UCP_ANALYSIS_MODEL") or DEFAULT_MODEL
    raw_timeout = os.environ.get("UCP_ANALYSIS_TIMEOUT") or "60"
    try:
        timeout = float(raw_timeout)
    except ValueError as exc:
        msg = f"UCP_ANALYSIS_TIMEOUT must be a number of seconds, got {raw_timeout!r}."
        raise ValueError(msg) from exc
    logger.info("Creating analysis provider (model=%s, timeout=%.0fs)", model, timeout)
    return AnalysisProvider(api_key=api_key, model=model, timeout=timeout)


def cors_origins() -> list[str]:
    raw = os.environ.get("UCP_CORS_ORIGINS") or DEFAULT_CORS_ORIGINS
    return [origin.strip() for origin in raw.split(",") if origin.strip()]
