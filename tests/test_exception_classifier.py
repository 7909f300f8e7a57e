# tests/test_exception_classifier.py
from __future__ import annotations

import pytest

from functions.error_details.errors import MissingAttributeError
from functions.error_details.exception_classifier import (
    EXCEPTION_RULES,
    INVOKE_EXCEPTION_ERROR_CODE,
    classify_exception,
    classify_exception_error,
    short_class_name,
)
from schemas.input_schema import ExceptionContext

CONNECT = "Error occurred while attempting to connect a socket to a remote address and port."


def test_short_class_name_strips_package_prefix() -> None:
    assert short_class_name("org.a.b.ConnectException") == "ConnectException"
    assert short_class_name("ConnectException") == "ConnectException"
    assert short_class_name("java.net.SocketTimeoutException") == "SocketTimeoutException"


def test_short_class_name_keeps_nested_class_whole() -> None:
    assert short_class_name("a.Outer$Inner") == "Outer$Inner"
    assert short_class_name("org.apache.http.conn.HttpHostConnectException") == "HttpHostConnectException"


def test_short_class_name_of_extracted_name_matches_rule_table() -> None:
    assert short_class_name("org.a.b.ConnectException") in EXCEPTION_RULES


@pytest.mark.parametrize(
    "exception_class, title, description",
    [
        (
            "java.net.SocketTimeoutException",
            "Socket timeout during HTTP invoke.",
            "Timeout has occurred on a socket read or accept.",
        ),
        (
            "java.net.UnknownHostException",
            "Unknown host in HTTP invoke process.",
            "IP address of a host could not be determined.",
        ),
        ("java.net.ConnectException", "Connection error during HTTP invoke.", CONNECT),
        (
            "java.net.SocketException",
            "Socket error in HTTP invoke process.",
            "Error creating or accessing a Socket.",
        ),
        ("java.net.NoRouteToHostException", "Remote host cannot be reached.", CONNECT),
    ],
)
def test_known_exceptions(exception_class: str, title: str, description: str) -> None:
    out = classify_exception(
        exception_class=exception_class,
        request_url="http://a",
        exception_message="boom",
    )
    short = exception_class.rsplit(".", 1)[-1]

    assert out.title == title
    assert out.details == f'{short} during invoke "http://a". {description} Exception message: boom'
    assert out.error_code == INVOKE_EXCEPTION_ERROR_CODE


def test_socket_timeout_example() -> None:
    out = classify_exception(
        exception_class="java.net.SocketTimeoutException",
        request_url="http://a",
        exception_message="timed out",
    )
    assert out.title == "Socket timeout during HTTP invoke."
    assert out.error_code == "CIM-IE-0000"


def test_unknown_exception_keeps_double_space_in_title() -> None:
    out = classify_exception(
        exception_class="com.foo.bar.WeirdException",
        request_url="http://a",
        exception_message="msg",
    )
    assert out.title == "WeirdException in HTTP  invoke process."
    assert out.details == 'WeirdException during invoke "http://a". Exception message: msg'
    assert out.error_code == "CIM-IE-0000"


def test_empty_message_contributes_nothing() -> None:
    out = classify_exception(
        exception_class="java.net.ConnectException",
        request_url="http://a",
        exception_message="",
    )
    assert out.details == f'ConnectException during invoke "http://a". {CONNECT} '


def test_missing_message_is_concatenated_as_null() -> None:
    out = classify_exception(
        exception_class="java.net.SocketException",
        request_url="http://a",
        exception_message=None,
    )
    assert out.details == (
        'SocketException during invoke "http://a". Error creating or accessing a Socket. null'
    )


def test_unknown_exception_with_missing_message() -> None:
    out = classify_exception(
        exception_class="javax.net.ssl.SSLHandshakeException",
        request_url="https://a",
        exception_message=None,
    )
    assert out.title == "SSLHandshakeException in HTTP  invoke process."
    assert out.details == 'SSLHandshakeException during invoke "https://a". null'


def test_missing_url_is_interpolated_as_null() -> None:
    out = classify_exception(
        exception_class="UnknownHostException",
        request_url=None,
        exception_message="orders.local",
    )
    assert out.details.startswith('UnknownHostException during invoke "null". ')


def test_missing_exception_class_raises() -> None:
    with pytest.raises(MissingAttributeError) as exc_info:
        classify_exception(exception_class=None, request_url="http://a", exception_message="x")

    assert exc_info.value.attribute == "invokehttp.java.exception.class"
    assert isinstance(exc_info.value, ValueError)


def test_classify_is_idempotent() -> None:
    kwargs = dict(exception_class="a.b.C", request_url="http://a", exception_message="m")
    assert classify_exception(**kwargs) == classify_exception(**kwargs)


def test_to_attributes_includes_error_code() -> None:
    out = classify_exception(
        exception_class="java.net.ConnectException",
        request_url="http://a",
        exception_message="refused",
    )
    attrs = out.to_attributes()
    assert set(attrs) == {"title", "error.details", "error.code"}
    assert attrs["error.code"] == "CIM-IE-0000"


def test_classify_exception_error_accepts_attribute_names() -> None:
    ctx = ExceptionContext.model_validate(
        {
            "invokehttp.java.exception.class": "java.net.NoRouteToHostException",
            "invokehttp.request.url": "http://a",
            "invokehttp.java.exception.message": "No route",
        }
    )
    out = classify_exception_error(ctx)
    assert out.title == "Remote host cannot be reached."
    assert out.details.endswith("Exception message: No route")
