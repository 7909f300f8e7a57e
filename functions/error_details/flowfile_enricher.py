"""
functions/error_details/flowfile_enricher.py

WHAT THIS FILE IS FOR
---------------------
This module is the flowfile boundary of the error-details classifiers.
One invocation:

  1) takes the next flowfile from the session (none -> no-op)
  2) reads the InvokeHTTP attributes it needs
  3) classifies them (status_classifier / exception_classifier)
  4) writes title, error.details[, error.code] back
  5) transfers the flowfile on the success relationship

There is no failure relationship. A flowfile is either enriched and
transferred, or left untouched when classification cannot start
(MissingAttributeError propagates to the host before any write).

HOST COLLABORATORS
------------------
The host's session and flowfile are passed in explicitly and described
by the FlowFile / ProcessSession protocols below. Any object with the
same methods works, which is how the tests drive this module.

WHAT THIS FILE IS NOT FOR
-------------------------
- Classification rules (see the classifier modules)
- Retrying, penalizing or routing to other relationships
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional, Protocol

import structlog

from functions.error_details import attributes
from functions.error_details.exception_classifier import classify_exception
from functions.error_details.status_classifier import classify_http_status
from schemas.output_schema import ClassificationResult

logger = structlog.get_logger(__name__)

REL_SUCCESS = "success"


class FlowFile(Protocol):
    def get_attribute(self, name: str) -> Optional[str]: ...


class ProcessSession(Protocol):
    def get(self) -> Optional[FlowFile]: ...

    def put_attribute(self, flowfile: FlowFile, key: str, value: str) -> FlowFile: ...

    def transfer(self, flowfile: FlowFile, relationship: str) -> None: ...


class ErrorDetailsEnricher(ABC):
    """
    Base enricher: pull one flowfile, classify, write back, transfer.

    Subclasses only implement classify().
    """

    def __init__(self, relationship: str = REL_SUCCESS) -> None:
        self.relationship = relationship

    @abstractmethod
    def classify(self, flowfile: FlowFile) -> ClassificationResult:
        """Classify the flowfile's InvokeHTTP attributes."""

    def on_trigger(self, session: ProcessSession) -> bool:
        """
        Process at most one flowfile.

        Returns False when the session had nothing to offer.
        """
        flowfile = session.get()
        if flowfile is None:
            return False

        result = self.classify(flowfile)

        for key, value in result.to_attributes().items():
            flowfile = session.put_attribute(flowfile, key, value)

        session.transfer(flowfile, self.relationship)

        logger.info(
            "flowfile_enriched",
            enricher=type(self).__name__,
            title=result.title,
            error_code=result.error_code,
            relationship=self.relationship,
        )
        return True


class HttpStatusEnricher(ErrorDetailsEnricher):
    """Enrich flowfiles whose invoke returned an error status code."""

    def classify(self, flowfile: FlowFile) -> ClassificationResult:
        return classify_http_status(
            status_code=flowfile.get_attribute(attributes.STATUS_CODE),
            request_url=flowfile.get_attribute(attributes.REQUEST_URL),
            response_body=flowfile.get_attribute(attributes.RESPONSE_BODY),
        )


class InvokeExceptionEnricher(ErrorDetailsEnricher):
    """Enrich flowfiles whose invoke raised an exception."""

    def classify(self, flowfile: FlowFile) -> ClassificationResult:
        return classify_exception(
            exception_class=flowfile.get_attribute(attributes.EXCEPTION_CLASS),
            request_url=flowfile.get_attribute(attributes.REQUEST_URL),
            exception_message=flowfile.get_attribute(attributes.EXCEPTION_MESSAGE),
        )


def build_enricher(kind: str, settings: Any = None) -> ErrorDetailsEnricher:
    """
    Build an enricher by kind ("http_status" or "exception").

    The success relationship comes from settings when given.
    """
    relationship = getattr(settings, "success_relationship", None) or REL_SUCCESS
    if kind == "http_status":
        return HttpStatusEnricher(relationship=relationship)
    if kind == "exception":
        return InvokeExceptionEnricher(relationship=relationship)
    raise ValueError(f"Unknown enricher kind: {kind!r}")
