"""Single-invocation entry point for function hosts (Netlify, AWS Lambda).

The event carries ``httpMethod`` and a raw ``body`` string; the return
value is the ``{statusCode, headers, body}`` mapping those hosts expect.
"""

from __future__ import annotations

import base64
import binascii
import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from app.handler import INVALID_JSON, HandlerResult, handle_suggest
from config.settings import get_settings
from suggester.generator import SuggestionGenerator


logger = logging.getLogger("misbah.serverless")


@lru_cache(maxsize=1)
def get_generator() -> SuggestionGenerator:
    return SuggestionGenerator(get_settings())


def _event_body(event: Dict[str, Any]) -> Optional[str]:
    body = event.get("body")
    if body and event.get("isBase64Encoded"):
        return base64.b64decode(body, validate=True).decode("utf-8")
    return body


def _to_response(result: HandlerResult) -> Dict[str, Any]:
    return {
        "statusCode": result.status,
        "headers": result.headers,
        "body": result.body,
    }


def handler(
    event: Dict[str, Any],
    context: Any = None,
    generator: Optional[SuggestionGenerator] = None,
) -> Dict[str, Any]:
    method = event.get("httpMethod") or ""
    try:
        body = _event_body(event)
    except (binascii.Error, UnicodeDecodeError):
        logger.info("Rejected base64 body that does not decode")
        return _to_response(HandlerResult(400, dict(INVALID_JSON)))
    result = handle_suggest(method, body, generator or get_generator())
    return _to_response(result)


# AWS Lambda's default handler name.
lambda_handler = handler
