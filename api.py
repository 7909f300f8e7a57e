"""
api.py

WHAT THIS FILE IS FOR
---------------------
This module defines the FastAPI application entrypoint for the
InvokeHTTP error-details service.

It is responsible for:
- Creating the FastAPI app instance (title/version/description)
- Registering middleware for:
    - Correlation ID propagation (X-Correlation-Id)
    - API version validation (X-API-Version)
- Defining standard error responses using a consistent schema:
    {code, message, subErrors, timestamp, correlationId}
- Registering exception handlers for:
    - RequestValidationError (400 VALIDATION_FAILED)
    - HTTPException passthrough (with standardized envelope)
- Exposing HTTP endpoints:
    - GET /health and /healthz
    - POST /api/v1/error-details/http-status
    - POST /api/v1/error-details/exception

REQUEST/RESPONSE CONTRACT RULES
-------------------------------
- Request bodies are flowfile attribute bags. Keys may be the attribute
  names ("invokehttp.status.code") or the snake_case field names.
- Response "data" holds the attributes to write back, keyed by their
  attribute names: title, error.details and, on the exception path,
  error.code.

DESIGN INTENT
-------------
This file contains ONLY the HTTP layer. Classification rules live in:
- functions/error_details/*
"""

from __future__ import annotations

import time
import uuid
from typing import Any, Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from functions.error_details.exception_classifier import (
    EXCEPTION_RULES,
    classify_exception_error,
    short_class_name,
)
from functions.error_details.status_classifier import HTTP_STATUS_TITLES, classify_http_error
from functions.utils.logging_config import configure_logging
from functions.utils.settings import get_settings
from schemas.input_schema import ExceptionContext, HttpErrorContext
from schemas.output_schema import ClassificationResult, ErrorDetailsEnvelope

logger = structlog.get_logger(__name__)

settings = get_settings()
configure_logging(settings)

app = FastAPI(
    title="InvokeHTTP Error Details",
    version="1.0.0",
    description="Derives title and error details attributes from failed HTTP invokes.",
)

CORRELATION_HEADER = "X-Correlation-Id"
API_VERSION_HEADER = "X-API-Version"
SUPPORTED_API_VERSIONS = {"1"}


# -------------------------------------------------------------------
# Helpers
# -------------------------------------------------------------------
def _get_or_create_correlation_id(request: Request) -> str:
    incoming = request.headers.get(CORRELATION_HEADER)
    return incoming.strip() if incoming else f"corr_{uuid.uuid4().hex}"


def _get_api_version(request: Request) -> str:
    v = getattr(request.state, "api_version", None)
    return str(v) if v else request.headers.get(API_VERSION_HEADER, "1").strip() or "1"


def _std_error(
    *,
    code: str,
    message: str,
    correlation_id: str,
    http_status: int,
    api_version: str = "1",
    sub_errors: Optional[list[dict[str, Any]]] = None,
) -> JSONResponse:
    payload = {
        "code": code,
        "message": message,
        "subErrors": sub_errors or [],
        "timestamp": int(time.time()),
        "correlationId": correlation_id,
    }
    headers = {
        CORRELATION_HEADER: correlation_id,
        API_VERSION_HEADER: api_version,
    }
    return JSONResponse(status_code=http_status, content=payload, headers=headers)


def _envelope(
    result: ClassificationResult,
    correlation_id: str,
    metadata: Optional[dict[str, Any]] = None,
) -> JSONResponse:
    envelope = ErrorDetailsEnvelope(
        status="success",
        data=result.to_attributes(),
        correlation_id=correlation_id,
        metadata=metadata if settings.enable_debug_metadata else None,
    )
    return JSONResponse(status_code=200, content=envelope.model_dump(by_alias=True))


# -------------------------------------------------------------------
# Middleware
# -------------------------------------------------------------------
@app.middleware("http")
async def api_version_middleware(request: Request, call_next):
    correlation_id = getattr(request.state, "correlation_id", f"corr_{uuid.uuid4().hex}")
    version = request.headers.get(API_VERSION_HEADER, "1").strip() or "1"

    if version not in SUPPORTED_API_VERSIONS:
        return _std_error(
            code="INVALID_FIELD_VALUE",
            message="Invalid API version",
            correlation_id=correlation_id,
            http_status=400,
            sub_errors=[
                {
                    "field": API_VERSION_HEADER,
                    "errors": [{"code": "isIn", "message": "Supported versions: 1"}],
                }
            ],
        )

    request.state.api_version = version
    response = await call_next(request)
    response.headers[API_VERSION_HEADER] = version
    return response


# Registered last so it runs first: the version check above sees the id.
@app.middleware("http")
async def correlation_id_middleware(request: Request, call_next):
    correlation_id = _get_or_create_correlation_id(request)
    request.state.correlation_id = correlation_id
    response = await call_next(request)
    response.headers[CORRELATION_HEADER] = correlation_id
    return response


# -------------------------------------------------------------------
# Exception handlers
# -------------------------------------------------------------------
@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    correlation_id = getattr(request.state, "correlation_id", f"corr_{uuid.uuid4().hex}")
    api_version = _get_api_version(request)

    sub_errors: list[dict[str, Any]] = []
    for err in exc.errors():
        field = ".".join(str(x) for x in err.get("loc", []) if x != "body") or "body"
        sub_errors.append(
            {
                "field": field,
                "errors": [{"code": err.get("type"), "message": err.get("msg")}],
            }
        )

    logger.info(
        "request_validation_failed",
        correlation_id=correlation_id,
        error_count=len(sub_errors),
    )

    return _std_error(
        code="VALIDATION_FAILED",
        message="Validation failed",
        correlation_id=correlation_id,
        http_status=400,
        api_version=api_version,
        sub_errors=sub_errors,
    )


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    correlation_id = getattr(request.state, "correlation_id", f"corr_{uuid.uuid4().hex}")
    api_version = _get_api_version(request)

    logger.warning(
        "http_exception",
        correlation_id=correlation_id,
        status_code=exc.status_code,
        detail=str(exc.detail),
    )

    return _std_error(
        code="HTTP_ERROR",
        message=str(exc.detail),
        correlation_id=correlation_id,
        http_status=exc.status_code,
        api_version=api_version,
    )


# -------------------------------------------------------------------
# Endpoints
# -------------------------------------------------------------------
@app.get("/healthz")
@app.get("/health")
async def health():
    return {
        "status": "ok",
        "service": settings.service_name,
        "environment": settings.environment,
    }


@app.post("/api/v1/error-details/http-status", response_model=ErrorDetailsEnvelope)
async def describe_http_status(payload: HttpErrorContext, request: Request) -> JSONResponse:
    correlation_id = getattr(request.state, "correlation_id", f"corr_{uuid.uuid4().hex}")

    result = classify_http_error(payload)

    logger.info(
        "http_status_classified",
        correlation_id=correlation_id,
        status_code=payload.status_code,
        title=result.title,
    )

    return _envelope(
        result,
        correlation_id,
        metadata={"knownStatusCode": payload.status_code in HTTP_STATUS_TITLES},
    )


@app.post("/api/v1/error-details/exception", response_model=ErrorDetailsEnvelope)
async def describe_exception(payload: ExceptionContext, request: Request) -> JSONResponse:
    correlation_id = getattr(request.state, "correlation_id", f"corr_{uuid.uuid4().hex}")

    result = classify_exception_error(payload)
    short_name = short_class_name(payload.exception_class)

    logger.info(
        "exception_classified",
        correlation_id=correlation_id,
        exception_class=short_name,
        title=result.title,
        error_code=result.error_code,
    )

    return _envelope(
        result,
        correlation_id,
        metadata={
            "shortClassName": short_name,
            "knownException": short_name in EXCEPTION_RULES,
        },
    )
