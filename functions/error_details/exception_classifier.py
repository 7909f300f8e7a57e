"""
functions/error_details/exception_classifier.py

WHAT THIS FILE IS FOR
---------------------
This module describes an HTTP invoke that failed with an exception
instead of a status code (timeouts, DNS failures, refused connections).

Input is the exception class name, the request URL and the exception
message. Output is a title, a details text and the fixed diagnostic
code CIM-IE-0000.

CLASSIFICATION
--------------
The class name is reduced to its short form first
("java.net.ConnectException" -> "ConnectException") and looked up in
EXCEPTION_RULES. Each rule carries the title and a one-sentence
description of the failure. Unknown classes fall back to:

    title:   <short> in HTTP  invoke process.
    details: <prefix><message>

Keep the double space in the fallback title; downstream text matching
expects it.

DETAILS FORMAT
--------------
    <short> during invoke "<url>". <description> <message>

<message> is built in two steps, in this order:
  1) if the raw message is non-empty, it becomes
     "Exception message: <raw>"
  2) the result is appended unconditionally; an empty message adds "",
     a missing one adds "null"

MISSING EXCEPTION CLASS
-----------------------
Without a class name there is nothing to classify on. classify_exception
raises MissingAttributeError instead of guessing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from functions.error_details.attributes import EXCEPTION_CLASS, as_text
from functions.error_details.errors import MissingAttributeError
from schemas.input_schema import ExceptionContext
from schemas.output_schema import ClassificationResult

INVOKE_EXCEPTION_ERROR_CODE = "CIM-IE-0000"

_CONNECT_FAILURE = (
    "Error occurred while attempting to connect a socket to a remote address and port."
)


@dataclass(frozen=True)
class ExceptionRule:
    title: str
    description: str


EXCEPTION_RULES: Dict[str, ExceptionRule] = {
    "SocketTimeoutException": ExceptionRule(
        title="Socket timeout during HTTP invoke.",
        description="Timeout has occurred on a socket read or accept.",
    ),
    "UnknownHostException": ExceptionRule(
        title="Unknown host in HTTP invoke process.",
        description="IP address of a host could not be determined.",
    ),
    "ConnectException": ExceptionRule(
        title="Connection error during HTTP invoke.",
        description=_CONNECT_FAILURE,
    ),
    "SocketException": ExceptionRule(
        title="Socket error in HTTP invoke process.",
        description="Error creating or accessing a Socket.",
    ),
    "NoRouteToHostException": ExceptionRule(
        title="Remote host cannot be reached.",
        description=_CONNECT_FAILURE,
    ),
}


def short_class_name(exception_class: str) -> str:
    """Drop the package prefix: everything up to and including the last '.'."""
    return exception_class.rsplit(".", 1)[-1]


def classify_exception(
    *,
    exception_class: Optional[str],
    request_url: Optional[str],
    exception_message: Optional[str] = None,
) -> ClassificationResult:
    if exception_class is None:
        raise MissingAttributeError(EXCEPTION_CLASS)

    key = short_class_name(exception_class)
    error_prefix = f'{key} during invoke "{as_text(request_url)}". '

    message = exception_message
    if message:
        message = f"Exception message: {message}"
    message_text = as_text(message)

    rule = EXCEPTION_RULES.get(key)
    if rule is None:
        title = f"{key} in HTTP  invoke process."
        details = error_prefix + message_text
    else:
        title = rule.title
        details = f"{error_prefix}{rule.description} {message_text}"

    return ClassificationResult(
        title=title,
        details=details,
        error_code=INVOKE_EXCEPTION_ERROR_CODE,
    )


def classify_exception_error(context: ExceptionContext) -> ClassificationResult:
    return classify_exception(
        exception_class=context.exception_class,
        request_url=context.request_url,
        exception_message=context.exception_message,
    )
