"""Errors raised by the scheduling core."""
from __future__ import annotations


class InputValidationError(ValueError):
    """Raised when a request field cannot be turned into a valid scheduling input.

    The whole request is rejected; no partial schedule is ever produced.
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message
