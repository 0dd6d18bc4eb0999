"""Analysis provider: asks the Anthropic Messages API to count actors and use cases."""

from __future__ import annotations

import base64
import json
import logging
import mimetypes
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import anthropic
from anthropic.types import ImageBlockParam, TextBlockParam
from pydantic import ValidationError

from ucp_estimator.engine import UAW_WEIGHTS, UUCW_WEIGHTS
from ucp_estimator.exceptions import AnalysisProviderError
from ucp_estimator.models.counts import AnalysisSuggestion

logger = logging.getLogger(__name__)

SUPPORTED_IMAGE_TYPES: frozenset[str] = frozenset(
    {"image/png", "image/jpeg", "image/gif", "image/webp"}
)

DEFAULT_MODEL = "claude-sonnet-4-5-20250929"


@dataclass(frozen=True)
class AnalysisResult:
    """Outcome of one provider call.

    ``suggestion`` is None when no usable JSON could be extracted; callers
    treat that exactly like an empty suggestion.
    """

    raw_response: str
    reasoning: str
    suggestion: AnalysisSuggestion | None
    warnings: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# System prompt
# ---------------------------------------------------------------------------

SYSTEM_PROMPT = (
    "You are an experienced software estimator applying the Use Case "
    "Points method.\n\n"
    "Follow these exact steps:\n\n"
    "1. IDENTIFY all actors and classify each as Simple (another system "
    "with a defined API), Average (another system through a protocol or "
    "a person through a terminal) or Complex (a person through a "
    "graphical interface). Count each class.\n"
    "2. IDENTIFY all use cases and classify each as Simple (up to 3 "
    "transactions), Average (4 to 7 transactions) or Complex (more than 7 "
    "transactions). Count each class.\n"
    "3. CALCULATE UAW = (Simple Actors × 1) + (Average Actors × 2) + "
    "(Complex Actors × 3).\n"
    "4. CALCULATE UUCW = (Simple Use Cases × 5) + (Average Use Cases × 10) "
    "+ (Complex Use Cases × 15).\n\n"
    "Explain your classification briefly FIRST, then output a JSON object "
    "matching EXACTLY this schema:\n\n"
    "```json\n"
    "{\n"
    '  "uaw": {\n'
    '    "simple": <number of simple actors>,\n'
    '    "average": <number of average actors>,\n'
    '    "complex": <number of complex actors>,\n'
    '    "total": <UAW>\n'
    "  },\n"
    '  "uucw": {\n'
    '    "simple": <number of simple use cases>,\n'
    '    "average": <number of average use cases>,\n'
    '    "complex": <number of complex use cases>,\n'
    '    "total": <UUCW>\n'
    "  }\n"
    "}\n"
    "```\n\n"
    "IMPORTANT:\n"
    "- Wrap the JSON in ```json ... ``` code fences.\n"
    "- Use plain numbers, not strings.\n"
    "- Output only one JSON block.\n"
)


class AnalysisProvider:
    """Sends requirement text or diagram images to Anthropic and parses counts."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        timeout: float = 60.0,
    ) -> None:
        self._client = anthropic.Anthropic(
            api_key=api_key,
            timeout=timeout,
        )
        self._model = model

    def analyze_text(self, text: str) -> AnalysisResult:
        """Count actors and use cases described in free text."""
        content: list[ImageBlockParam | TextBlockParam] = [
            TextBlockParam(
                type="text",
                text=f"Here's the text to analyze:\n\n{text}",
            ),
        ]
        return self._analyze(content)

    def analyze_image(
        self,
        image_data: bytes,
        media_type: str,
        notes: str | None = None,
    ) -> AnalysisResult:
        """Count actors and use cases shown in an image (e.g. a use case diagram).

        Raises
        ------
        ValueError
            If ``media_type`` is not one of SUPPORTED_IMAGE_TYPES.
        """
        if media_type not in SUPPORTED_IMAGE_TYPES:
            msg = f"Unsupported image type: {media_type}"
            raise ValueError(msg)

        text = "Analyze this image and extract UCP values."
        if notes:
            text += f"\nAdditional notes: {notes}"

        content: list[ImageBlockParam | TextBlockParam] = [
            ImageBlockParam(
                type="image",
                source={
                    "type": "base64",
                    "media_type": media_type,  # type: ignore[typeddict-item]
                    "data": base64.b64encode(image_data).decode("utf-8"),
                },
            ),
            TextBlockParam(type="text", text=text),
        ]
        return self._analyze(content)

    def analyze_image_file(self, image_path: Path) -> AnalysisResult:
        """Read an image from disk and analyze it.

        Raises
        ------
        ValueError
            If the file is missing or its type is not supported.
        """
        image_path = Path(image_path)
        if not image_path.exists():
            msg = f"Image file not found: {image_path}"
            raise ValueError(msg)
        media_type, _ = mimetypes.guess_type(image_path.name)
        return self.analyze_image(image_path.read_bytes(), media_type or "")

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _analyze(
        self, content: list[ImageBlockParam | TextBlockParam]
    ) -> AnalysisResult:
        raw_response = self._call_api(content)
        return build_result(raw_response)

    def _call_api(self, content: list[ImageBlockParam | TextBlockParam]) -> str:
        """Call the Anthropic Messages API, wrapping transport failures."""
        try:
            response = self._client.messages.create(
                model=self._model,
                max_tokens=2048,
                temperature=0.2,
                system=SYSTEM_PROMPT,
                messages=[{"role": "user", "content": content}],
            )
        except anthropic.APIError as exc:
            logger.exception("Analysis provider request failed")
            msg = f"Analysis provider request failed: {exc}"
            raise AnalysisProviderError(msg) from exc

        text_blocks = [block.text for block in response.content if block.type == "text"]
        return "\n".join(text_blocks)


# ---------------------------------------------------------------------------
# Response parsing
# ---------------------------------------------------------------------------


def build_result(raw_response: str) -> AnalysisResult:
    """Turn a raw model reply into an AnalysisResult."""
    warnings: list[str] = []
    data = _load_json_object(raw_response)
    suggestion = _to_suggestion(data) if data is not None else None
    if suggestion is None:
        warnings.append("No usable count suggestion found in the response")
    elif suggestion.is_empty():
        warnings.append("Response JSON contained no actor or use case counts")
    else:
        warnings.extend(_check_totals(data or {}))

    return AnalysisResult(
        raw_response=raw_response,
        reasoning=_extract_reasoning(raw_response),
        suggestion=suggestion,
        warnings=warnings,
    )


def parse_suggestion(text: str) -> AnalysisSuggestion | None:
    """Extract a count suggestion from free text, or None if there is none."""
    data = _load_json_object(text)
    if data is None:
        return None
    return _to_suggestion(data)


def _extract_json(text: str) -> str | None:
    """Locate the JSON payload in a model reply.

    A ```json fenced block wins; otherwise the span from the first ``{`` to
    the last ``}`` is used.
    """
    start = text.find("```json")
    if start != -1:
        start += len("```json")
        end = text.find("```", start)
        if end != -1:
            return text[start:end].strip()

    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        return None
    return text[start : end + 1]


def _load_json_object(text: str) -> dict[str, Any] | None:
    json_str = _extract_json(text)
    if json_str is None:
        logger.warning("No JSON found in analysis response")
        return None

    try:
        data = json.loads(json_str)
    except json.JSONDecodeError:
        logger.warning("Invalid JSON in analysis response")
        return None

    if not isinstance(data, dict):
        logger.warning("Analysis JSON is not an object")
        return None
    return data


def _to_suggestion(data: dict[str, Any]) -> AnalysisSuggestion | None:
    try:
        return AnalysisSuggestion.model_validate(data)
    except ValidationError as exc:
        logger.warning("Analysis JSON does not match the count schema: %s", exc)
        return None


def _check_totals(data: dict[str, Any]) -> list[str]:
    """Compare the model's self-reported totals with the weighted counts."""
    warnings: list[str] = []
    for key, weights in (("uaw", UAW_WEIGHTS), ("uucw", UUCW_WEIGHTS)):
        section = data.get(key)
        if not isinstance(section, dict):
            continue
        reported = section.get("total")
        if not isinstance(reported, (int, float)) or isinstance(reported, bool):
            continue
        counts = [section.get(level, 0) for level in weights]
        if not all(isinstance(c, (int, float)) for c in counts):
            continue
        computed = sum(c * w for c, w in zip(counts, weights.values(), strict=True))
        if abs(computed - reported) > 1e-6:
            warnings.append(
                f"Reported {key.upper()} total {reported:g} does not match "
                f"the weighted counts ({computed:g}); totals are recomputed"
            )
    return warnings


def _extract_reasoning(raw_response: str) -> str:
    """Return the explanation text that precedes the JSON payload."""
    fence = raw_response.find("```")
    brace = raw_response.find("{")
    cut = min((i for i in (fence, brace) if i != -1), default=-1)
    if cut == -1:
        return raw_response.strip()
    return raw_response[:cut].strip()
