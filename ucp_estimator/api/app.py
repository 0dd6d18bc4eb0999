"""FastAPI application: create_app factory with /api endpoints."""

from __future__ import annotations

import logging
import mimetypes
from dataclasses import asdict
from pathlib import Path
from typing import TYPE_CHECKING, Any

from dotenv import load_dotenv
from fastapi import Body, FastAPI, Form, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

# Load .env from the project root
_project_root = Path(__file__).resolve().parent.parent.parent
load_dotenv(_project_root / ".env")

from ucp_estimator.api.deps import cors_origins  # noqa: E402
from ucp_estimator.engine import ENGINE_VERSION, UcpEngine  # noqa: E402
from ucp_estimator.exceptions import AnalysisProviderError, UnknownFactorError  # noqa: E402
from ucp_estimator.models.counts import AnalysisSuggestion  # noqa: E402, TCH001
from ucp_estimator.models.enums import (  # noqa: E402, TCH001
    ComplexityLevel,
    CountCategory,
    FactorSetKind,
)
from ucp_estimator.models.estimate import EstimationInput  # noqa: E402, TCH001
from ucp_estimator.services.analysis_provider import (  # noqa: E402
    SUPPORTED_IMAGE_TYPES,
)

if TYPE_CHECKING:
    from ucp_estimator.calculator import UcpCalculator
    from ucp_estimator.models.estimate import UcpEstimate
    from ucp_estimator.services.analysis_provider import (
        AnalysisProvider,
        AnalysisResult,
    )

logger = logging.getLogger(__name__)


class ValueUpdate(BaseModel):
    """Body for endpoints that set a single number."""

    value: float = Field(allow_inf_nan=False)


class TextAnalysisRequest(BaseModel):
    text: str = Field(min_length=1)


def _estimate_payload(estimate: UcpEstimate) -> dict[str, Any]:
    return {
        "estimate": estimate.model_dump(mode="json"),
        "summary_dict": estimate.to_summary_dict(),
    }


def _analysis_payload(result: AnalysisResult) -> dict[str, Any]:
    suggestion = result.suggestion
    return {
        "raw_response": result.raw_response,
        "reasoning": result.reasoning,
        "suggestion": (
            suggestion.model_dump(mode="json", exclude_none=True)
            if suggestion is not None
            else None
        ),
        "warnings": result.warnings,
    }


def create_app(
    *,
    calculator: UcpCalculator | None = None,
    analysis_provider: AnalysisProvider | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    calculator
        Optional pre-built calculator. The app serves exactly one calculator
        (one session). If not provided, a default one is created.
    analysis_provider
        Optional pre-built provider for dependency injection (e.g. tests).
        If not provided, one is created from environment variables on the
        first analyze request.
    """
    app = FastAPI(title="UCP Estimator", version=ENGINE_VERSION)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if calculator is None:
        from ucp_estimator.factory import create_default_calculator

        calculator = create_default_calculator()

    # Store on app state so tests can inject mocks
    app.state.calculator = calculator
    app.state.analysis_provider = analysis_provider

    def _get_calculator() -> UcpCalculator:
        calc: UcpCalculator = app.state.calculator
        return calc

    def _get_provider() -> AnalysisProvider:
        provider: AnalysisProvider | None = app.state.analysis_provider
        if provider is not None:
            return provider
        # Lazy-create from environment
        from ucp_estimator.api.deps import create_analysis_provider

        try:
            provider = create_analysis_provider()
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        app.state.analysis_provider = provider
        return provider

    # ------------------------------------------------------------------
    # GET /api/health
    # ------------------------------------------------------------------

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "version": ENGINE_VERSION}

    # ------------------------------------------------------------------
    # Calculator state
    # ------------------------------------------------------------------

    @app.get("/api/state")
    def state() -> dict[str, Any]:
        return _get_calculator().state.model_dump(mode="json")

    @app.get("/api/results")
    def results() -> dict[str, Any]:
        return _estimate_payload(_get_calculator().estimate())

    @app.put("/api/counts/{category}/{level}")
    def set_count(
        category: CountCategory,
        level: ComplexityLevel,
        update: ValueUpdate,
    ) -> dict[str, Any]:
        calc = _get_calculator()
        calc.set_count(category, level, update.value)
        return _estimate_payload(calc.estimate())

    @app.put("/api/factors/{factor_set}/{factor_id}")
    def set_factor(
        factor_set: FactorSetKind,
        factor_id: int,
        update: ValueUpdate,
    ) -> dict[str, Any]:
        calc = _get_calculator()
        try:
            calc.set_factor_value(factor_set, factor_id, update.value)
        except UnknownFactorError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        return _estimate_payload(calc.estimate())

    @app.put("/api/productivity-factor")
    def set_productivity_factor(update: ValueUpdate) -> dict[str, Any]:
        calc = _get_calculator()
        calc.set_productivity_factor(update.value)
        return _estimate_payload(calc.estimate())

    @app.post("/api/reset")
    def reset() -> dict[str, Any]:
        calc = _get_calculator()
        calc.reset()
        return calc.state.model_dump(mode="json")

    # ------------------------------------------------------------------
    # AI-assisted counts
    # ------------------------------------------------------------------

    @app.post("/api/analyze/text")
    def analyze_text(request: TextAnalysisRequest) -> dict[str, Any]:
        provider = _get_provider()
        try:
            result = provider.analyze_text(request.text)
        except AnalysisProviderError as exc:
            logger.warning("Text analysis failed: %s", exc)
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        return _analysis_payload(result)

    @app.post("/api/analyze/image")
    async def analyze_image(
        file: UploadFile,
        notes: str | None = Form(None),
    ) -> dict[str, Any]:
        media_type = file.content_type or ""
        if media_type not in SUPPORTED_IMAGE_TYPES:
            media_type = mimetypes.guess_type(file.filename or "")[0] or ""
        if media_type not in SUPPORTED_IMAGE_TYPES:
            raise HTTPException(
                status_code=400,
                detail=(
                    "Invalid file type. Only PNG, JPEG, GIF and WebP "
                    "images are accepted."
                ),
            )

        provider = _get_provider()
        content = await file.read()
        try:
            result = provider.analyze_image(content, media_type, notes=notes)
        except AnalysisProviderError as exc:
            logger.warning("Image analysis failed: %s", exc)
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        return _analysis_payload(result)

    @app.post("/api/suggestions/apply")
    def apply_suggestion(
        suggestion: AnalysisSuggestion | None = Body(None),
    ) -> dict[str, Any]:
        calc = _get_calculator()
        decisions = calc.merge_suggestion(suggestion)
        return {
            "decisions": [asdict(d) for d in decisions],
            "state": calc.state.model_dump(mode="json"),
            **_estimate_payload(calc.estimate()),
        }

    # ------------------------------------------------------------------
    # POST /api/estimate
    # ------------------------------------------------------------------

    @app.post("/api/estimate")
    def estimate(estimation_input: EstimationInput) -> dict[str, Any]:
        return _estimate_payload(UcpEngine().estimate(estimation_input))

    return app
