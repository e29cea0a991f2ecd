"""
Failure classification for the identity core.

The core recovers locally from every external failure (provider outages
become empty color sets). What remains observable at the boundary is:

- Programmer errors: a filter built in violation of its own invariants.
- Known, explainable outcomes: a decklist with nothing parseable in it.

Both are raised as KnownError subclasses so a host can turn them into a
FailureDetail without inspecting exception types.
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"

    # Resource failures
    NOT_FOUND = "not_found"
    EMPTY_RESULT = "empty_result"

    # Service failures
    EXTERNAL_API_ERROR = "external_api_error"

    # Internal errors
    INVARIANT_VIOLATION = "invariant_violation"


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        """Convert to a FailureDetail."""
        return FailureDetail(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class FilterConstructionError(KnownError):
    """
    Raised when a color filter is built with colors its type cannot hold.

    This is a programmer error: colorless takes no colors, mono exactly one,
    exact two or more.
    """

    def __init__(self, filter_type: str, colors: tuple[str, ...], reason: str):
        self.filter_type = filter_type
        self.colors = colors
        super().__init__(
            kind=FailureKind.INVARIANT_VIOLATION,
            message=f"Invalid {filter_type} filter: {reason}",
            detail=f"colors={list(colors)}",
        )


class EmptyDecklistError(KnownError):
    """Raised when decklist text yields zero card entries."""

    def __init__(self, line_count: int):
        self.line_count = line_count
        super().__init__(
            kind=FailureKind.EMPTY_RESULT,
            message="No cards could be read from the decklist.",
            detail=f"Scanned {line_count} lines",
            suggestion='Use one card per line, e.g. "4 Lightning Bolt" or "1 Sol Ring (C21)".',
        )
