"""
Polly API Routes.

Endpoints:
    *    /api/polly  - Synthesis endpoint (POST), CORS preflight (OPTIONS),
                       405 for every other method
    GET  /health     - Liveness check, never calls Polly
    GET  /metrics    - Prometheus metrics

Request Flow (POST /api/polly):
    1. Generate request ID for log correlation
    2. Parse the JSON body (anything but an object counts as empty)
    3. Build PollyConfig from settings + current environment
    4. SynthesisRequestHandler.handle() in the threadpool
    5. Return {"base64", "contentType"} or {"error"}

Every response from /api/polly carries Content-Type: application/json and
the CORS headers in CORS_HEADERS.

Error Handling:
    TTSError codes map to HTTP status codes:
        - INVALID_ARGUMENT -> 400
        - MISCONFIGURED    -> 500
        - EMPTY_AUDIO      -> 500
        - PROVIDER_FAILURE -> 500
    Any other exception becomes 500 {"error": "Polly failed: <message>"}.

Example Usage:
    curl -X POST http://localhost:8000/api/polly \\
        -H "Content-Type: application/json" \\
        -d '{"text": "Merhaba!", "languageCode": "tr-TR"}'
"""
from __future__ import annotations

import json
import uuid
from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

import polly_tts
from polly_tts.api.dependencies import get_client_factory, get_settings
from polly_tts.api.schemas import ErrorResponse, PollyRequest, PollyResponse
from polly_tts.core.config import PollyConfig, Settings
from polly_tts.core.logging import error, get_logger, info, set_request_id, warn
from polly_tts.core.metrics import metrics
from polly_tts.polly.client import ClientFactory
from polly_tts.services.errors import ErrorCode, ProviderError, TTSError
from polly_tts.services.synthesis_service import SynthesisRequestHandler

router = APIRouter()

_LOG = get_logger("polly-tts.api")

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}

STATUS_MAP = {
    ErrorCode.INVALID_ARGUMENT: 400,
    ErrorCode.MISCONFIGURED: 500,
    ErrorCode.EMPTY_AUDIO: 500,
    ErrorCode.PROVIDER_FAILURE: 500,
}

# Every method is routed here so the 405 body can be ours
ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def _json_response(payload: Dict[str, Any], status_code: int = 200, request_id: str | None = None) -> JSONResponse:
    headers = dict(CORS_HEADERS)
    if request_id:
        headers["X-Request-Id"] = request_id
    return JSONResponse(status_code=status_code, content=payload, headers=headers)


def _error_response(err: TTSError, request_id: str) -> JSONResponse:
    return _json_response(err.to_dict(), STATUS_MAP.get(err.code, 500), request_id)


async def _read_payload(request: Request) -> Dict[str, Any]:
    """Parse the body as a JSON object; anything else yields {}."""
    raw = await request.body()
    if not raw:
        return {}
    try:
        payload = json.loads(raw)
    except ValueError:
        warn(_LOG, "body_not_json", bytes=len(raw))
        return {}
    return payload if isinstance(payload, dict) else {}


@router.api_route(
    "/api/polly",
    methods=ALL_METHODS,
    response_class=JSONResponse,
    responses={
        200: {"model": PollyResponse},
        400: {"model": ErrorResponse},
        405: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def polly(
    request: Request,
    settings: Settings = Depends(get_settings),
    client_factory: ClientFactory = Depends(get_client_factory),
):
    """
    Synthesize speech with AWS Polly.

    OPTIONS answers the CORS preflight with an empty 200. Anything other
    than POST gets 405 ``{"error": "Use POST"}``.

    Returns:
        200 ``{"base64": ..., "contentType": ...}`` on success, otherwise
        an ``{"error": ...}`` body with the status from STATUS_MAP.
    """
    if request.method == "OPTIONS":
        return Response(content=b"", status_code=200, media_type="application/json", headers=CORS_HEADERS)

    if request.method != "POST":
        return _json_response({"error": "Use POST"}, status_code=405)

    rid = str(uuid.uuid4())[:12]
    set_request_id(rid)

    try:
        body = PollyRequest.model_validate(await _read_payload(request))
        handler = SynthesisRequestHandler(PollyConfig.from_settings(settings), client_factory)
        result = await run_in_threadpool(handler.handle, body.to_synthesis_request())
    except TTSError as e:
        if e.code != ErrorCode.PROVIDER_FAILURE:
            info(_LOG, "request_rejected", code=e.code, error=e.message)
        return _error_response(e, rid)
    except Exception as e:
        error(_LOG, "request_failed", error=str(e), error_type=type(e).__name__)
        return _error_response(ProviderError(str(e)), rid)

    return _json_response(result.to_dict(), request_id=rid)


@router.get("/health")
def health(settings: Settings = Depends(get_settings)):
    """
    Health check endpoint for load balancers.

    Reports whether credentials are present without exposing them and
    without contacting AWS.
    """
    config = PollyConfig.from_settings(settings)
    return {
        "ok": True,
        "service": "polly-tts",
        "version": polly_tts.__version__,
        "region": config.region,
        "engine": config.engine,
        "credentials": config.has_credentials,
    }


@router.get("/metrics")
def prometheus_metrics():
    """Prometheus metrics endpoint."""
    content, content_type = metrics.get_metrics_response()
    return Response(content=content, media_type=content_type)
