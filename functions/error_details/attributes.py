"""
functions/error_details/attributes.py

Flowfile attribute names read from the upstream InvokeHTTP processor and
written back by the error-details enrichers.
"""

from __future__ import annotations

from typing import Optional

# Read
REQUEST_URL = "invokehttp.request.url"
STATUS_CODE = "invokehttp.status.code"
RESPONSE_BODY = "invokehttp.response.body"
EXCEPTION_CLASS = "invokehttp.java.exception.class"
EXCEPTION_MESSAGE = "invokehttp.java.exception.message"

# Written
TITLE = "title"
ERROR_DETAILS = "error.details"
ERROR_CODE = "error.code"


def as_text(value: Optional[str]) -> str:
    """
    Render an attribute value the way the host concatenates it into a string.

    An absent attribute becomes the literal "null"; everything else is
    passed through untouched.
    """
    return "null" if value is None else value
