from __future__ import annotations

import json
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


REQUIRED_FIELDS = ("moduleName", "desiredOutcome", "fieldId")
DEFAULT_LANGUAGE = "ar"
MAX_SUGGESTIONS = 5


def _as_text(value: Any) -> str:
    """Render any JSON value as prompt text; lists and objects stay JSON."""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


class FailureReason(str, Enum):
    """Why a request degraded to placeholder suggestions."""

    NO_CREDENTIAL = "no_credential"
    UPSTREAM_UNREACHABLE = "upstream_unreachable"
    MALFORMED_UPSTREAM_RESPONSE = "malformed_upstream_response"


class SuggestionRequest(BaseModel):
    module_name: str = Field(..., alias="moduleName", min_length=1)
    desired_outcome: str = Field(..., alias="desiredOutcome", min_length=1)
    field_id: str = Field(..., alias="fieldId", min_length=1)
    known_info: str = Field("", alias="knownInfo")
    constraints: str = Field("")
    language: str = Field(DEFAULT_LANGUAGE)

    model_config = {"populate_by_name": True, "frozen": True}

    @field_validator(
        "module_name",
        "desired_outcome",
        "field_id",
        "known_info",
        "constraints",
        mode="before",
    )
    @classmethod
    def _stringify(cls, value: Any) -> str:
        if value is None:
            return ""
        return _as_text(value)

    @field_validator("language", mode="before")
    @classmethod
    def _default_language(cls, value: Any) -> Any:
        if not value:
            return DEFAULT_LANGUAGE
        return _as_text(value)

    @classmethod
    def missing_required(cls, payload: Any) -> bool:
        """True when ``payload`` is not an object or lacks a truthy required field."""
        if not isinstance(payload, dict):
            return True
        return not all(payload.get(name) for name in REQUIRED_FIELDS)


class SuggestionResponse(BaseModel):
    suggestions: List[str] = Field(default_factory=list, max_length=MAX_SUGGESTIONS)
    best: str = ""
    notes: str = ""

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump()


class GenerationOutcome(BaseModel):
    """Generator result plus the internal failure cause, if any."""

    response: SuggestionResponse
    failure: Optional[FailureReason] = None

    @property
    def degraded(self) -> bool:
        return self.failure is not None
