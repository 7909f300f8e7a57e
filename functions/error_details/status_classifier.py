"""
functions/error_details/status_classifier.py

WHAT THIS FILE IS FOR
---------------------
This module defines the *single canonical rule* for describing an HTTP
invoke that completed with an error status code.

Given the status code, the request URL and the response body left on a
flowfile by the upstream InvokeHTTP processor, it produces:

- title:   short, human-readable summary
- details: longer text naming the code, the URL and, when present,
           what the remote side returned

TITLE TABLE
-----------
- "400" -> HTTP status code 400: Bad Request
- "401" -> HTTP status code 401: Unauthorized
- "404" -> HTTP status code 404: Not Found
- "408" -> HTTP status code 408: Request Timeout
- other -> HTTP status code <code>

Matching is exact string comparison. "404 " or 404 (int) are "other".

DETAILS FORMAT
--------------
    Error <code> during invoke "<url>". [Request return: <body>]

The trailing segment is added only when the body is non-empty. No
placeholder is written for an empty body.

PASSTHROUGH
-----------
Inputs are NOT validated. A missing code or URL is interpolated the way
the host renders an absent attribute ("null"), so downstream text is
identical to what the flow produced before this module existed.

WHAT THIS FILE IS NOT FOR
-------------------------
This module MUST NOT:
- Read or write flowfile attributes (see flowfile_enricher.py)
- Log, raise, or handle exceptions
- Decide routing

It performs **pure, deterministic mapping only**.
"""

from __future__ import annotations

from typing import Dict, Optional

from functions.error_details.attributes import as_text
from schemas.input_schema import HttpErrorContext
from schemas.output_schema import ClassificationResult

HTTP_STATUS_TITLES: Dict[str, str] = {
    "400": "HTTP status code 400: Bad Request",
    "401": "HTTP status code 401: Unauthorized",
    "404": "HTTP status code 404: Not Found",
    "408": "HTTP status code 408: Request Timeout",
}


def http_status_title(status_code: Optional[str]) -> str:
    code = as_text(status_code)
    return HTTP_STATUS_TITLES.get(code, f"HTTP status code {code}")


def classify_http_status(
    *,
    status_code: Optional[str],
    request_url: Optional[str],
    response_body: Optional[str] = None,
) -> ClassificationResult:
    """
    Build title and details for an error status code.

    error_code is never set on this path.
    """
    details = f'Error {as_text(status_code)} during invoke "{as_text(request_url)}". '
    if response_body:
        details += f"Request return: {response_body}"

    return ClassificationResult(
        title=http_status_title(status_code),
        details=details,
    )


def classify_http_error(context: HttpErrorContext) -> ClassificationResult:
    return classify_http_status(
        status_code=context.status_code,
        request_url=context.request_url,
        response_body=context.response_body,
    )
