"""FastAPI binding for promptqr."""
from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Header, HTTPException, Request, status
from fastapi.responses import JSONResponse, Response
from starlette.concurrency import run_in_threadpool

from .config import BuildConfig, settings
from .identifiers import identify
from .logging_conf import configure_logging
from .middleware import RequestLoggingMiddleware
from .monitoring import metrics_payload, record_encode_error, record_payload
from .promptpay_encoder import verify_payload
from .renderer import render_html_img, render_png_base64, render_svg
from .schemas import (
    BuildOptions,
    ClassifyRequest,
    ClassifyResponse,
    PayloadRequest,
    PayloadResponse,
    QRRequest,
    QRResponse,
    VerifyRequest,
    VerifyResponse,
)
from .services.builder import BuildResult, build_payload
from .services.errors import EncodeError
from .validation import validate_identifier

app = FastAPI(title="promptqr", version="0.1.0")
app.add_middleware(RequestLoggingMiddleware)

logger = logging.getLogger("promptqr.api")

_RENDERERS = {
    "png": render_png_base64,
    "svg": render_svg,
    "html": render_html_img,
}


def _warn_insecure_defaults() -> None:
    if settings.api_key == "dev-secret-key":
        logger.warning("api key is using the default value", extra={"config_key": "api_key"})


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    _warn_insecure_defaults()


async def require_api_key(x_api_key: str = Header(...)) -> None:
    if x_api_key != settings.api_key:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")


@app.exception_handler(EncodeError)
async def encode_error_handler(request: Request, exc: EncodeError) -> JSONResponse:
    route = request.scope.get("route")
    route_path = route.path if route else request.url.path
    logger.warning(
        "encode error",
        extra={"code": exc.code.value, "path": route_path, "method": request.method},
    )
    record_encode_error(exc.code.value, route_path)
    return JSONResponse(status_code=exc.status_code, content={"code": exc.code.value, "message": exc.message})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    route = request.scope.get("route")
    route_path = route.path if route else request.url.path
    logger.exception(
        "unhandled exception",
        extra={"path": route_path, "method": request.method},
    )
    return JSONResponse(status_code=500, content={"code": "ERR_INTERNAL", "message": "Internal server error"})


def _build_config(options: BuildOptions | None) -> BuildConfig:
    if options is None:
        return settings.build_config()
    return settings.build_config(**options.model_dump())


def _build(request: PayloadRequest) -> BuildResult:
    result = build_payload(request.identifier, request.amount, _build_config(request.config))
    record_payload(result.identifier.kind.value, result.amount is not None)
    return result


def _payload_fields(result: BuildResult) -> dict[str, object]:
    return {
        "payload": result.payload,
        "crc": result.encoded.crc,
        "kind": result.identifier.kind.value,
        "sanitized": result.identifier.sanitized,
        "amount": result.amount,
    }


@app.get("/health", tags=["system"])
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/metrics", tags=["system"])
async def metrics() -> Response:
    payload, content_type = metrics_payload()
    return Response(content=payload, media_type=content_type)


@app.post("/v1/payload", response_model=PayloadResponse, tags=["payload"], dependencies=[Depends(require_api_key)])
async def create_payload(request: PayloadRequest) -> PayloadResponse:
    return PayloadResponse(**_payload_fields(_build(request)))


@app.post("/v1/qr", response_model=QRResponse, tags=["payload"], dependencies=[Depends(require_api_key)])
async def create_qr(request: QRRequest) -> QRResponse:
    result = _build(request)
    image = await run_in_threadpool(_RENDERERS[request.format], result.payload, settings.render)
    return QRResponse(**_payload_fields(result), format=request.format, image=image)


@app.post("/v1/payload/verify", response_model=VerifyResponse, tags=["payload"], dependencies=[Depends(require_api_key)])
async def verify(request: VerifyRequest) -> VerifyResponse:
    valid = verify_payload(request.payload)
    return VerifyResponse(valid=valid, crc=request.payload[-4:] if valid else None)


@app.post(
    "/v1/identifiers/classify",
    response_model=ClassifyResponse,
    tags=["identifiers"],
    dependencies=[Depends(require_api_key)],
)
async def classify_identifier(request: ClassifyRequest) -> ClassifyResponse:
    merchant = identify(request.identifier)
    try:
        validate_identifier(merchant)
    except EncodeError as exc:
        return ClassifyResponse(
            raw=merchant.raw,
            sanitized=merchant.sanitized,
            kind=merchant.kind.value,
            valid=False,
            error_code=exc.code.value,
            error_message=exc.message,
        )
    return ClassifyResponse(raw=merchant.raw, sanitized=merchant.sanitized, kind=merchant.kind.value, valid=True)
