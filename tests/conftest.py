from __future__ import annotations

import pytest

from config.settings import Settings
from suggester.schemas import SuggestionRequest


@pytest.fixture
def keyed_settings() -> Settings:
    return Settings(
        app_env="test",
        google_api_key="test-key",
        gemini_model="gemini-test",
        gemini_api_base="https://gemini.example/v1beta",
        request_timeout=5.0,
        port=3000,
    )


@pytest.fixture
def keyless_settings() -> Settings:
    return Settings(
        app_env="test",
        google_api_key="",
        gemini_model="gemini-test",
        gemini_api_base="https://gemini.example/v1beta",
        request_timeout=5.0,
        port=3000,
    )


@pytest.fixture
def suggestion_request() -> SuggestionRequest:
    return SuggestionRequest(
        moduleName="خطة تسويق",
        desiredOutcome="زيادة المبيعات",
        fieldId="targetAudience",
    )
