from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from suggester.generator import SuggestionGenerator
from suggester.schemas import REQUIRED_FIELDS, SuggestionRequest


JSON_HEADERS = {"Content-Type": "application/json"}
TEXT_HEADERS = {"Content-Type": "text/plain; charset=utf-8"}

METHOD_NOT_ALLOWED = "Method Not Allowed"
INVALID_JSON = {"error": "Invalid JSON"}
MISSING_FIELDS = {"error": f"Missing required fields: {', '.join(REQUIRED_FIELDS)}"}


class InvalidJSONBody(ValueError):
    pass


@dataclass
class HandlerResult:
    """Transport-neutral outcome of one suggestion request."""

    status: int
    payload: Union[Dict[str, Any], str]
    headers: Dict[str, str] = field(default_factory=lambda: dict(JSON_HEADERS))

    @property
    def body(self) -> str:
        if isinstance(self.payload, str):
            return self.payload
        return json.dumps(self.payload, ensure_ascii=False)


def _reject_constant(name: str) -> Any:
    raise InvalidJSONBody(f"{name} is not valid JSON")


def _decode_body(body: Optional[Union[bytes, str]]) -> Any:
    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidJSONBody("body is not utf-8") from exc
    if not body or not body.strip():
        return {}
    try:
        return json.loads(body, parse_constant=_reject_constant)
    except json.JSONDecodeError as exc:
        raise InvalidJSONBody(str(exc)) from exc


def _prepare(method: str, body: Optional[Union[bytes, str]]):
    """Return either a ready ``HandlerResult`` or a validated request."""
    if (method or "").upper() != "POST":
        return HandlerResult(405, METHOD_NOT_ALLOWED, dict(TEXT_HEADERS)), None
    try:
        payload = _decode_body(body)
    except InvalidJSONBody:
        return HandlerResult(400, dict(INVALID_JSON)), None
    if SuggestionRequest.missing_required(payload):
        return HandlerResult(400, dict(MISSING_FIELDS)), None
    return None, SuggestionRequest.model_validate(payload)


def handle_suggest(
    method: str, body: Optional[Union[bytes, str]], generator: SuggestionGenerator
) -> HandlerResult:
    early, request = _prepare(method, body)
    if early is not None:
        return early
    return HandlerResult(200, generator.generate(request).to_payload())


async def ahandle_suggest(
    method: str, body: Optional[Union[bytes, str]], generator: SuggestionGenerator
) -> HandlerResult:
    early, request = _prepare(method, body)
    if early is not None:
        return early
    response = await generator.agenerate(request)
    return HandlerResult(200, response.to_payload())
