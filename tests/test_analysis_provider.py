"""Tests for the analysis provider. All API calls are mocked."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock, patch

import anthropic
import httpx
import pytest

from ucp_estimator.exceptions import AnalysisProviderError
from ucp_estimator.services.analysis_provider import (
    SYSTEM_PROMPT,
    AnalysisProvider,
    build_result,
    parse_suggestion,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _counts_payload(
    uaw: dict[str, Any] | None = None,
    uucw: dict[str, Any] | None = None,
) -> dict[str, Any]:
    return {
        "uaw": uaw if uaw is not None else {"simple": 1, "average": 2, "complex": 1, "total": 8},
        "uucw": uucw
        if uucw is not None
        else {"simple": 3, "average": 4, "complex": 0, "total": 55},
    }


def _make_fenced_response(payload: dict[str, Any] | None = None) -> str:
    json_str = json.dumps(payload or _counts_payload(), indent=2)
    return (
        "Actors: the Customer uses a web UI (complex); the Payment Gateway "
        "talks over a protocol (average).\n\n"
        f"```json\n{json_str}\n```\n\n"
        "Calculations: UAW = 1×1 + 2×2 + 1×3 = 8"
    )


def _mock_api_response(text: str) -> MagicMock:
    """Create a mock Anthropic API response."""
    text_block = MagicMock()
    text_block.type = "text"
    text_block.text = text
    response = MagicMock()
    response.content = [text_block]
    return response


@pytest.fixture()
def provider() -> AnalysisProvider:
    """Create an AnalysisProvider with a fake API key."""
    return AnalysisProvider(api_key="test-key-not-real")


# ---------------------------------------------------------------------------
# Tests: JSON extraction
# ---------------------------------------------------------------------------


class TestParseSuggestion:
    def test_fenced_block(self) -> None:
        suggestion = parse_suggestion(_make_fenced_response())
        assert suggestion is not None
        assert suggestion.uaw is not None
        assert suggestion.uaw.provided() == {"simple": 1.0, "average": 2.0, "complex": 1.0}
        assert suggestion.uucw is not None
        assert suggestion.uucw.average == 4.0

    def test_bare_braces(self) -> None:
        text = 'Here you go: {"uaw": {"simple": 2}} Hope that helps.'
        suggestion = parse_suggestion(text)
        assert suggestion is not None
        assert suggestion.uaw is not None
        assert suggestion.uaw.provided() == {"simple": 2.0}
        assert suggestion.uucw is None

    def test_fenced_block_preferred_over_braces(self) -> None:
        text = (
            'Earlier draft: {"uaw": {"simple": 100}}\n'
            '```json\n{"uaw": {"simple": 3}}\n```'
        )
        suggestion = parse_suggestion(text)
        assert suggestion is not None
        assert suggestion.uaw is not None
        assert suggestion.uaw.simple == 3.0

    def test_unterminated_fence_falls_back_to_braces(self) -> None:
        text = '```json\n{"uucw": {"complex": 2}}'
        suggestion = parse_suggestion(text)
        assert suggestion is not None
        assert suggestion.uucw is not None
        assert suggestion.uucw.complex == 2.0

    def test_no_json(self) -> None:
        assert parse_suggestion("I could not find any actors.") is None

    def test_invalid_json(self) -> None:
        assert parse_suggestion("```json\n{invalid json}\n```") is None

    def test_braces_around_prose_are_not_json(self) -> None:
        assert parse_suggestion("Use {simple} and {complex} classes.") is None

    def test_non_object_json(self) -> None:
        assert parse_suggestion("```json\n[1, 2, 3]\n```") is None

    def test_schema_mismatch(self) -> None:
        assert parse_suggestion('{"uaw": {"simple": "a few"}}') is None

    def test_unrelated_object_gives_empty_suggestion(self) -> None:
        suggestion = parse_suggestion('{"answer": 42}')
        assert suggestion is not None
        assert suggestion.is_empty()


class TestBuildResult:
    def test_reasoning_is_text_before_json(self) -> None:
        result = build_result(_make_fenced_response())
        assert result.reasoning.startswith("Actors:")
        assert "```" not in result.reasoning
        assert result.warnings == []

    def test_reasoning_before_bare_braces(self) -> None:
        result = build_result('Counted two actors. {"uaw": {"simple": 2}}')
        assert result.reasoning == "Counted two actors."

    def test_whole_text_is_reasoning_without_json(self) -> None:
        result = build_result("  Nothing to count here.  ")
        assert result.suggestion is None
        assert result.reasoning == "Nothing to count here."
        assert result.warnings == ["No usable count suggestion found in the response"]

    def test_json_without_counts_warns(self) -> None:
        result = build_result('Here is the answer: {"answer": 42, "uaw": null}')
        assert result.suggestion is not None
        assert result.suggestion.is_empty()
        assert result.warnings == ["Response JSON contained no actor or use case counts"]

    def test_total_mismatch_warns(self) -> None:
        payload = _counts_payload(uaw={"simple": 1, "average": 1, "complex": 1, "total": 10})
        result = build_result(_make_fenced_response(payload))

        assert result.suggestion is not None
        assert len(result.warnings) == 1
        assert "UAW total 10" in result.warnings[0]
        assert "(6)" in result.warnings[0]

    def test_partial_counts_total_check(self) -> None:
        """Missing levels count as zero when checking the reported total."""
        payload = {"uucw": {"average": 2, "total": 20}}
        result = build_result(_make_fenced_response(payload))
        assert result.warnings == []


# ---------------------------------------------------------------------------
# Tests: API calls
# ---------------------------------------------------------------------------


class TestAnalyzeText:
    def test_returns_suggestion(self, provider: AnalysisProvider) -> None:
        mock_response = _mock_api_response(_make_fenced_response())

        with patch.object(
            provider._client.messages, "create", return_value=mock_response
        ) as create:
            result = provider.analyze_text("Customers place orders online.")

        assert result.suggestion is not None
        assert result.suggestion.uucw is not None
        assert result.suggestion.uucw.simple == 3.0
        assert result.raw_response == _make_fenced_response()

        kwargs = create.call_args.kwargs
        assert kwargs["system"] == SYSTEM_PROMPT
        content = kwargs["messages"][0]["content"]
        assert content[0]["type"] == "text"
        assert "Customers place orders online." in content[0]["text"]

    def test_unparseable_reply_is_not_an_error(self, provider: AnalysisProvider) -> None:
        mock_response = _mock_api_response("Sorry, I can't help with that.")

        with patch.object(
            provider._client.messages, "create", return_value=mock_response
        ) as create:
            result = provider.analyze_text("hello")

        assert result.suggestion is None
        # No retry
        assert create.call_count == 1

    def test_joins_multiple_text_blocks(self, provider: AnalysisProvider) -> None:
        first = MagicMock(type="text", text="Reasoning.")
        second = MagicMock(type="text", text='```json\n{"uaw": {"simple": 1}}\n```')
        other = MagicMock(type="tool_use")
        response = MagicMock(content=[first, other, second])

        with patch.object(provider._client.messages, "create", return_value=response):
            result = provider.analyze_text("text")

        assert result.raw_response.startswith("Reasoning.\n")
        assert result.suggestion is not None

    def test_transport_error_wrapped(self, provider: AnalysisProvider) -> None:
        request = httpx.Request("POST", "https://api.anthropic.com/v1/messages")
        error = anthropic.APIConnectionError(request=request)

        with (
            patch.object(provider._client.messages, "create", side_effect=error),
            pytest.raises(AnalysisProviderError, match="request failed"),
        ):
            provider.analyze_text("text")


class TestAnalyzeImage:
    def test_sends_base64_image(self, provider: AnalysisProvider) -> None:
        mock_response = _mock_api_response(_make_fenced_response())

        with patch.object(
            provider._client.messages, "create", return_value=mock_response
        ) as create:
            result = provider.analyze_image(b"fake-bytes", "image/jpeg", notes="Order system")

        assert result.suggestion is not None
        content = create.call_args.kwargs["messages"][0]["content"]
        assert content[0]["type"] == "image"
        assert content[0]["source"]["media_type"] == "image/jpeg"
        assert content[0]["source"]["data"] == "ZmFrZS1ieXRlcw=="
        assert "Order system" in content[1]["text"]

    def test_unsupported_media_type(self, provider: AnalysisProvider) -> None:
        with pytest.raises(ValueError, match="Unsupported image type"):
            provider.analyze_image(b"%PDF-1.4", "application/pdf")

    def test_image_file(self, provider: AnalysisProvider, tmp_path: Path) -> None:
        image_path = tmp_path / "diagram.png"
        image_path.write_bytes(b"\x89PNG\r\n\x1a\n")
        mock_response = _mock_api_response(_make_fenced_response())

        with patch.object(
            provider._client.messages, "create", return_value=mock_response
        ) as create:
            provider.analyze_image_file(image_path)

        content = create.call_args.kwargs["messages"][0]["content"]
        assert content[0]["source"]["media_type"] == "image/png"

    def test_missing_image_file(self, provider: AnalysisProvider, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="not found"):
            provider.analyze_image_file(tmp_path / "missing.png")

    def test_unknown_file_extension(self, provider: AnalysisProvider, tmp_path: Path) -> None:
        path = tmp_path / "diagram.xyz"
        path.write_bytes(b"data")
        with pytest.raises(ValueError, match="Unsupported image type"):
            provider.analyze_image_file(path)
