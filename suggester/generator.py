from __future__ import annotations

import logging
import re
from typing import List, Optional

import httpx

from config.settings import Settings, get_settings
from suggester.gemini import UpstreamError, acall_gemini, call_gemini
from suggester.prompt import build_prompt
from suggester.schemas import (
    MAX_SUGGESTIONS,
    FailureReason,
    GenerationOutcome,
    SuggestionRequest,
    SuggestionResponse,
)


logger = logging.getLogger(__name__)

FALLBACK_COUNT = 3
FALLBACK_NOTES = {
    FailureReason.NO_CREDENTIAL: "لم يتم توفير مفتاح API؛ هذه اقتراحات افتراضية.",
    FailureReason.UPSTREAM_UNREACHABLE: "حدث خطأ عند الاتصال بواجهة Gemini؛ هذه اقتراحات افتراضية.",
    FailureReason.MALFORMED_UPSTREAM_RESPONSE: "حدث خطأ عند الاتصال بواجهة Gemini؛ هذه اقتراحات افتراضية.",
}

_LINE_BREAK = re.compile(r"[\r\n]")


def placeholder_suggestions(field_id: str) -> List[str]:
    return [f"قيمة {n} لـ {field_id}" for n in range(1, FALLBACK_COUNT + 1)]


def fallback_outcome(field_id: str, reason: FailureReason) -> GenerationOutcome:
    suggestions = placeholder_suggestions(field_id)
    return GenerationOutcome(
        response=SuggestionResponse(
            suggestions=suggestions,
            best=suggestions[0],
            notes=FALLBACK_NOTES[reason],
        ),
        failure=reason,
    )


def parse_suggestions(text: str) -> SuggestionResponse:
    """Turn raw model text into at most five trimmed, non-empty lines."""
    lines = [line.strip() for line in _LINE_BREAK.split(text)]
    suggestions = [line for line in lines if line][:MAX_SUGGESTIONS]
    return SuggestionResponse(
        suggestions=suggestions,
        best=suggestions[0] if suggestions else "",
        notes="",
    )


class SuggestionGenerator:
    """Produces field suggestions from Gemini, degrading to placeholders.

    ``generate`` and ``agenerate`` never raise: a missing key, a transport
    failure or an unusable Gemini body all resolve to the fallback payload.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        client: Optional[httpx.Client] = None,
        async_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self._client = client
        self._async_client = async_client

    def generate(self, request: SuggestionRequest) -> SuggestionResponse:
        return self.generate_outcome(request).response

    async def agenerate(self, request: SuggestionRequest) -> SuggestionResponse:
        outcome = await self.agenerate_outcome(request)
        return outcome.response

    def generate_outcome(self, request: SuggestionRequest) -> GenerationOutcome:
        if not self.settings.has_api_key:
            return self._no_credential(request)
        prompt = build_prompt(request)
        try:
            text = call_gemini(prompt, self.settings, client=self._client)
        except UpstreamError as exc:
            return self._upstream_failure(request, exc)
        return self._success(request, text)

    async def agenerate_outcome(self, request: SuggestionRequest) -> GenerationOutcome:
        if not self.settings.has_api_key:
            return self._no_credential(request)
        prompt = build_prompt(request)
        try:
            text = await acall_gemini(prompt, self.settings, client=self._async_client)
        except UpstreamError as exc:
            return self._upstream_failure(request, exc)
        return self._success(request, text)

    def _no_credential(self, request: SuggestionRequest) -> GenerationOutcome:
        logger.info("GOOGLE_API_KEY not set; returning placeholders for field=%s", request.field_id)
        return fallback_outcome(request.field_id, FailureReason.NO_CREDENTIAL)

    def _upstream_failure(
        self, request: SuggestionRequest, exc: UpstreamError
    ) -> GenerationOutcome:
        logger.warning(
            "Error calling Gemini API (reason=%s model=%s field=%s): %s",
            exc.reason.value,
            self.settings.gemini_model,
            request.field_id,
            exc,
        )
        return fallback_outcome(request.field_id, exc.reason)

    def _success(self, request: SuggestionRequest, text: str) -> GenerationOutcome:
        response = parse_suggestions(text)
        logger.info(
            "Gemini returned %s suggestions for field=%s",
            len(response.suggestions),
            request.field_id,
        )
        return GenerationOutcome(response=response)
