"""ASGI application for Larder."""

from __future__ import annotations

import logging
from time import perf_counter
from typing import Any, List, Optional
from uuid import uuid4

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from pydantic import BaseModel, Field

from larder import __version__, metrics
from larder.config import Settings, get_settings
from larder.logging_utils import configure_logging as configure_app_logging
from larder.matching import InventoryMatcher, scan_receipt
from larder.models.receipt import CandidateLineItem, MatchResult, ReceiptScanResult
from larder.ocr import segment_receipt
from larder.server import deps

logger = logging.getLogger(__name__)

MAX_RECEIPT_TEXT_CHARS = 20_000


class ReceiptTextRequest(BaseModel):
    text: str = Field(max_length=MAX_RECEIPT_TEXT_CHARS)
    store_hint: Optional[str] = Field(default=None, max_length=255)


class SegmentResponse(BaseModel):
    layout: str
    items: List[CandidateLineItem]


class MatchRequest(BaseModel):
    items: List[CandidateLineItem] = Field(default_factory=list)


def _json_safe(value: Any) -> Any:
    """Convert non-serializable values into JSON-safe representations."""

    if isinstance(value, (str, int, float, bool)) or value is None:
        return value
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError:
            return value.hex()
    if isinstance(value, (list, tuple)):
        return [_json_safe(entry) for entry in value]
    if isinstance(value, dict):
        return {key: _json_safe(sub_value) for key, sub_value in value.items()}
    return repr(value)


def _normalize_validation_errors(errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Ensure validation error payloads can be serialized to JSON."""

    return [{key: _json_safe(value) for key, value in error.items()} for error in errors]


def _configure_logging(settings: Settings) -> None:
    secrets = [settings.api_token or "", settings.openai_api_key or ""]
    configure_app_logging(settings.log_level, settings.log_format, secrets)


def create_app() -> FastAPI:
    """Create and configure a FastAPI application instance."""

    settings = get_settings()
    _configure_logging(settings)

    application = FastAPI(title="Larder Receipt Matcher", version=__version__)
    logger.debug("Application created with log level %s", settings.log_level)

    if settings.log_requests:
        access_logger = logging.getLogger("larder.access")

        @application.middleware("http")
        async def log_request_response(request: Request, call_next):
            """Log request/response details without leaking sensitive data."""

            request_id = request.headers.get("X-Request-ID") or uuid4().hex
            request.state.request_id = request_id
            start = perf_counter()
            path = request.url.path
            method = request.method
            try:
                response: Response = await call_next(request)
            except Exception:
                duration_ms = (perf_counter() - start) * 1000
                access_logger.exception(
                    "HTTP %s %s status=500 duration_ms=%.2f",
                    method,
                    path,
                    duration_ms,
                    extra={"request_id": request_id},
                )
                metrics.REQUEST_COUNT.labels(method=method, path=path, status="500").inc()
                metrics.REQUEST_LATENCY.labels(method=method, path=path).observe(
                    duration_ms / 1000.0
                )
                raise

            duration_ms = (perf_counter() - start) * 1000
            response.headers.setdefault("X-Request-ID", request_id)
            access_logger.info(
                "HTTP %s %s status=%s duration_ms=%.2f",
                method,
                path,
                response.status_code,
                duration_ms,
                extra={"request_id": request_id},
            )
            metrics.REQUEST_COUNT.labels(
                method=method,
                path=path,
                status=str(response.status_code),
            ).inc()
            metrics.REQUEST_LATENCY.labels(method=method, path=path).observe(duration_ms / 1000.0)
            return response

    @application.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        body_preview: str | None = None
        try:
            raw_body = await request.body()
            if raw_body:
                decoded = raw_body.decode("utf-8", errors="replace")
                if len(decoded) > 2048:
                    decoded = decoded[:2048] + "...(truncated)"
                body_preview = decoded
        except Exception:  # pragma: no cover - body already consumed
            body_preview = "<unable to read body>"

        log_kwargs: dict[str, Any] = {}
        request_id = getattr(request.state, "request_id", None)
        if request_id:
            log_kwargs["extra"] = {"request_id": request_id}

        logger.warning(
            "Validation error on %s %s: %s | body=%s",
            request.method,
            request.url.path,
            exc.errors(),
            body_preview,
            **log_kwargs,
        )
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": _normalize_validation_errors(exc.errors())},
        )

    @application.get("/healthz", summary="Liveness check")
    def healthz() -> dict[str, str]:
        return {"status": "ok", "version": __version__}

    @application.post(
        "/receipts/segment",
        response_model=SegmentResponse,
        summary="Segment receipt text into candidate items",
    )
    def receipts_segment(payload: ReceiptTextRequest) -> SegmentResponse:
        layout, items = segment_receipt(payload.text, payload.store_hint)
        return SegmentResponse(layout=layout.value, items=items)

    @application.post(
        "/receipts/scan",
        response_model=ReceiptScanResult,
        summary="Segment receipt text and match it against the inventory",
    )
    async def receipts_scan(
        payload: ReceiptTextRequest,
        auth: None = Depends(deps.require_api_token),
        matcher: InventoryMatcher = Depends(deps.get_matcher),
    ) -> ReceiptScanResult:
        result = await scan_receipt(payload.text, matcher, payload.store_hint)
        logger.info(
            "Scanned receipt layout=%s candidates=%s",
            result.layout,
            result.candidates_found,
        )
        return result

    @application.post(
        "/matcher/match",
        response_model=list[MatchResult],
        summary="Match candidate items against the inventory",
    )
    async def matcher_match(
        payload: MatchRequest,
        auth: None = Depends(deps.require_api_token),
        matcher: InventoryMatcher = Depends(deps.get_matcher),
    ) -> list[MatchResult]:
        return await matcher.match(payload.items)

    @application.post(
        "/matcher/cache/invalidate",
        status_code=status.HTTP_204_NO_CONTENT,
        summary="Force the next match to re-fetch the inventory",
    )
    def matcher_cache_invalidate(
        auth: None = Depends(deps.require_api_token),
        matcher: InventoryMatcher = Depends(deps.get_matcher),
    ) -> Response:
        matcher.invalidate_cache()
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @application.get("/metrics", include_in_schema=False)
    def metrics_endpoint() -> Response:
        payload = generate_latest()
        return Response(content=payload, media_type=CONTENT_TYPE_LATEST)

    return application


app = create_app()

__all__ = ["app", "create_app"]
