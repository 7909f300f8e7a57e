# -------------------------------------------------------------------
# schemas/input_schema.py
#
# WHAT THIS FILE IS FOR
# --------------------
# This module defines the **input value records** consumed by the
# error classifiers: what an upstream InvokeHTTP processor left on a
# flowfile after a failed call.
#
# Two records exist, one per failure path:
#   - HttpErrorContext:  the call completed with an error status code
#   - ExceptionContext:  the call raised before a status was received
#
# KEY DESIGN DECISION
# -------------------
# Each field accepts **both** the flowfile attribute name and the
# snake_case field name:
#
#   - attribute name: "invokehttp.status.code"
#   - field name:     status_code
#
# This is implemented via:
#   - alias=<attribute name> on each field
#   - populate_by_name=True in model_config
#
# so an attribute bag can be validated as-is, while Python callers
# keep plain keyword access.
#
# NULL HANDLING
# -------------
# - On the status path every field is optional; a missing value is
#   interpolated by the classifier, never rejected.
# - On the exception path the exception class is REQUIRED. Without it
#   no short class name exists to classify on.
#
# WHAT THIS FILE IS NOT FOR
# ------------------------
# This module does NOT classify anything or render text. Records are
# frozen: produced once per invocation, consumed once, never mutated.
# -------------------------------------------------------------------

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from functions.error_details import attributes


class HttpErrorContext(BaseModel):
    """
    Attributes of a flowfile whose HTTP invoke returned an error status.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "invokehttp.status.code": "404",
                "invokehttp.request.url": "http://orders.local/api/v1/orders/17",
                "invokehttp.response.body": '{"error": "order not found"}',
            }
        },
    )

    status_code: Optional[str] = Field(
        None,
        alias=attributes.STATUS_CODE,
        description="HTTP status code as returned by the invoke, e.g. '404'",
    )

    request_url: Optional[str] = Field(
        None,
        alias=attributes.REQUEST_URL,
        description="Full URL of the failed request",
    )

    response_body: Optional[str] = Field(
        None,
        alias=attributes.RESPONSE_BODY,
        description="Response body, if the invoke captured one",
    )


class ExceptionContext(BaseModel):
    """
    Attributes of a flowfile whose HTTP invoke raised an exception.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        frozen=True,
        json_schema_extra={
            "example": {
                "invokehttp.java.exception.class": "java.net.SocketTimeoutException",
                "invokehttp.request.url": "http://orders.local/api/v1/orders/17",
                "invokehttp.java.exception.message": "Read timed out",
            }
        },
    )

    exception_class: str = Field(
        ...,
        alias=attributes.EXCEPTION_CLASS,
        description="Exception class name, with or without its package prefix",
    )

    request_url: Optional[str] = Field(
        None,
        alias=attributes.REQUEST_URL,
        description="Full URL of the failed request",
    )

    exception_message: Optional[str] = Field(
        None,
        alias=attributes.EXCEPTION_MESSAGE,
        description="Exception message, if any",
    )
