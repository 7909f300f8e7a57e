# tests/test_schemas.py
from __future__ import annotations

import pytest
from pydantic import ValidationError

from schemas.input_schema import ExceptionContext, HttpErrorContext
from schemas.output_schema import ClassificationResult


def test_http_error_context_is_immutable() -> None:
    ctx = HttpErrorContext(status_code="404", request_url="http://x/y")
    with pytest.raises(ValidationError):
        ctx.status_code = "500"  # type: ignore[misc]
    assert ctx.status_code == "404"


def test_exception_context_is_immutable() -> None:
    ctx = ExceptionContext(exception_class="java.net.ConnectException", request_url="http://a")
    with pytest.raises(ValidationError):
        ctx.exception_class = "java.net.SocketException"  # type: ignore[misc]
    assert ctx.exception_class == "java.net.ConnectException"


def test_classification_result_is_immutable() -> None:
    result = ClassificationResult(title="t", details="d", error_code="CIM-IE-0000")
    with pytest.raises(ValidationError):
        result.title = "other"  # type: ignore[misc]
    with pytest.raises(ValidationError):
        result.error_code = None  # type: ignore[misc]
    assert result.to_attributes()["title"] == "t"


def test_exception_context_requires_exception_class() -> None:
    with pytest.raises(ValidationError):
        ExceptionContext.model_validate({"invokehttp.request.url": "http://a"})
