"""
Result of one target invocation.
"""

import enum
from dataclasses import dataclass
from typing import Optional


class OutcomeKind(enum.Enum):
    SUCCESS = "success"
    RECOGNIZED_ERROR = "recognized_error"
    UNCLASSIFIED_FAILURE = "unclassified_failure"


class RecognizedErrorKind(enum.Enum):
    """Categories of clean rejection the decoder is known to raise."""

    FORMAT_VALIDATION = "format_validation"
    IO_FAILURE = "io_failure"
    RESOURCE_LIMIT = "resource_limit"


@dataclass(frozen=True)
class Outcome:
    """
    Tagged outcome: success, recognized error (with its kind), or
    unclassified failure (with its cause).

    The harness itself only returns the first two; an unclassified failure
    propagates as an exception and is wrapped here only by a driver that
    caught it (see replay).
    """

    kind: OutcomeKind
    error_kind: Optional[RecognizedErrorKind] = None
    cause: Optional[BaseException] = None

    @classmethod
    def success(cls) -> "Outcome":
        return cls(OutcomeKind.SUCCESS)

    @classmethod
    def recognized(cls, error_kind: RecognizedErrorKind) -> "Outcome":
        return cls(OutcomeKind.RECOGNIZED_ERROR, error_kind=error_kind)

    @classmethod
    def unclassified(cls, cause: BaseException) -> "Outcome":
        return cls(OutcomeKind.UNCLASSIFIED_FAILURE, cause=cause)

    @property
    def benign(self) -> bool:
        """True for success and recognized errors."""
        return self.kind is not OutcomeKind.UNCLASSIFIED_FAILURE

    def describe(self) -> str:
        if self.kind is OutcomeKind.RECOGNIZED_ERROR and self.error_kind:
            return f"{self.kind.value} ({self.error_kind.value})"
        if self.kind is OutcomeKind.UNCLASSIFIED_FAILURE and self.cause is not None:
            return f"{self.kind.value} ({type(self.cause).__name__}: {self.cause})"
        return self.kind.value
