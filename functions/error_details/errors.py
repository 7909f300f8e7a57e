"""
functions/error_details/errors.py

Errors raised by the error-details package.

Classification itself is total; the only failure is an input attribute the
classifier cannot work without.
"""

from __future__ import annotations


class MissingAttributeError(ValueError):
    """A required flowfile attribute is absent."""

    def __init__(self, attribute: str):
        super().__init__(f"Required attribute '{attribute}' is missing")
        self.attribute = attribute
