from __future__ import annotations

import logging
from functools import lru_cache
from typing import Dict

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from app.handler import ahandle_suggest
from config.settings import get_settings
from suggester.generator import SuggestionGenerator


logging.basicConfig(level=logging.INFO, format="[%(asctime)s] %(levelname)s - %(message)s")
# httpx logs full request URLs at INFO, and the Gemini URL carries the key.
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger("misbah")

app = FastAPI(title="Misbah+ AI Field Suggestions", version="1.0.0")

# CORS: allow local frontend during development
settings = get_settings()
if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@lru_cache(maxsize=1)
def get_generator() -> SuggestionGenerator:
    return SuggestionGenerator(get_settings())


# Every method is routed here so non-POST calls get the plain-text 405.
@app.api_route(
    "/suggest-field",
    methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
)
async def suggest_field(
    request: Request, generator: SuggestionGenerator = Depends(get_generator)
) -> Response:
    body = await request.body()
    try:
        result = await ahandle_suggest(request.method, body, generator)
    except Exception:
        logger.exception("Suggestion request failed")
        raise
    if isinstance(result.payload, str):
        return PlainTextResponse(result.payload, status_code=result.status)
    if result.status != 200:
        logger.info("Rejected suggestion request: status=%s error=%s", result.status, result.payload.get("error"))
    return JSONResponse(result.payload, status_code=result.status)


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


def run() -> None:
    import uvicorn

    port = get_settings().port
    logger.info("Misbah+ AI server running on port %s", port)
    uvicorn.run(app, host="0.0.0.0", port=port)


if __name__ == "__main__":
    run()
