from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from config.settings import Settings
from suggester.schemas import FailureReason


# Fixed generation parameters, not caller-configurable.
GENERATION_CONFIG = {
    "temperature": 0.6,
    "topP": 0.8,
    "maxOutputTokens": 150,
}


class UpstreamError(RuntimeError):
    """Raised when the Gemini call fails or returns an unusable body."""

    def __init__(self, reason: FailureReason, message: str) -> None:
        super().__init__(message)
        self.reason = reason


def build_request_body(prompt: str) -> Dict[str, Any]:
    return {
        "contents": [
            {
                "role": "user",
                "parts": [{"text": prompt}],
            }
        ],
        "generationConfig": dict(GENERATION_CONFIG),
    }


def generate_content_url(settings: Settings) -> str:
    base = settings.gemini_api_base.rstrip("/")
    return f"{base}/models/{settings.gemini_model}:generateContent"


def extract_candidate_text(data: Any) -> str:
    """Join the text parts of the first candidate with a single space."""
    candidates = data.get("candidates") if isinstance(data, dict) else None
    first = candidates[0] if isinstance(candidates, list) and candidates else None
    if not isinstance(first, dict):
        raise UpstreamError(
            FailureReason.MALFORMED_UPSTREAM_RESPONSE, "Gemini response has no candidates"
        )
    content = first.get("content")
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        raise UpstreamError(
            FailureReason.MALFORMED_UPSTREAM_RESPONSE,
            "Gemini candidate is missing content.parts",
        )
    texts = []
    for part in parts:
        text = part.get("text") if isinstance(part, dict) else None
        texts.append(text if isinstance(text, str) else "")
    return " ".join(texts)


def _decode(response: httpx.Response) -> str:
    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        # str(exc) embeds the request URL, which carries the key.
        raise UpstreamError(
            FailureReason.UPSTREAM_UNREACHABLE,
            f"Gemini API returned HTTP {exc.response.status_code}",
        ) from exc
    try:
        data = response.json()
    except ValueError as exc:
        raise UpstreamError(
            FailureReason.MALFORMED_UPSTREAM_RESPONSE, "Gemini API returned invalid JSON"
        ) from exc
    return extract_candidate_text(data)


def _transport_error(exc: httpx.HTTPError) -> UpstreamError:
    return UpstreamError(
        FailureReason.UPSTREAM_UNREACHABLE,
        f"Gemini API call failed: {type(exc).__name__}",
    )


def call_gemini(
    prompt: str, settings: Settings, client: Optional[httpx.Client] = None
) -> str:
    """Send ``prompt`` to Gemini once and return the first candidate's text."""
    url = generate_content_url(settings)
    params = {"key": settings.google_api_key}
    body = build_request_body(prompt)
    try:
        if client is not None:
            response = client.post(url, params=params, json=body, timeout=settings.request_timeout)
        else:
            with httpx.Client(timeout=settings.request_timeout) as owned:
                response = owned.post(url, params=params, json=body)
    except httpx.HTTPError as exc:
        raise _transport_error(exc) from exc
    return _decode(response)


async def acall_gemini(
    prompt: str, settings: Settings, client: Optional[httpx.AsyncClient] = None
) -> str:
    url = generate_content_url(settings)
    params = {"key": settings.google_api_key}
    body = build_request_body(prompt)
    try:
        if client is not None:
            response = await client.post(
                url, params=params, json=body, timeout=settings.request_timeout
            )
        else:
            async with httpx.AsyncClient(timeout=settings.request_timeout) as owned:
                response = await owned.post(url, params=params, json=body)
    except httpx.HTTPError as exc:
        raise _transport_error(exc) from exc
    return _decode(response)
