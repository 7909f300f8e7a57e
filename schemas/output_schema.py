# -------------------------------------------------------------------
# schemas/output_schema.py
#
# WHAT THIS FILE IS FOR
# --------------------
# This module defines the **output structures** of the error-details
# service:
#
#   - ClassificationResult: what a classifier returns
#   - ErrorDetailsEnvelope: what the HTTP surface returns
#
# ATTRIBUTE RENDERING
# -------------------
# A ClassificationResult is turned into flowfile attributes with
# to_attributes(). "error.code" is only emitted when set (exception
# path); the status path writes "title" and "error.details" only.
#
# NAMING CONVENTION
# -----------------
# Fields are snake_case in Python. The envelope serializes
# correlation_id as "correlationId" via alias; the "data" block keeps
# the flowfile attribute names verbatim.
# -------------------------------------------------------------------

from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from functions.error_details import attributes


class ClassificationResult(BaseModel):
    """
    Title and details derived from a failed HTTP invoke.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    title: str = Field(..., min_length=1)
    details: str = Field(..., min_length=1)
    error_code: Optional[str] = None

    def to_attributes(self) -> Dict[str, str]:
        out = {
            attributes.TITLE: self.title,
            attributes.ERROR_DETAILS: self.details,
        }
        if self.error_code is not None:
            out[attributes.ERROR_CODE] = self.error_code
        return out


class ErrorDetailsEnvelope(BaseModel):
    """
    Standard response envelope for the classification endpoints.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    status: Literal["success", "error"] = "success"

    # Attributes to write back: title, error.details[, error.code]
    data: Dict[str, str] = Field(default_factory=dict)

    correlation_id: Optional[str] = Field(None, alias="correlationId")

    # Debug-only metadata (enable_debug_metadata)
    metadata: Optional[Dict[str, Any]] = None
