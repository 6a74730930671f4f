from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    NOT_CONFIGURED = "not_configured"
    TRANSPORT = "transport"
    PROTOCOL = "protocol"
    EMPTY_RESULT = "empty_result"

    @property
    def retryable(self) -> bool:
        return self is not ErrorKind.NOT_CONFIGURED


class GenerationError(Exception):
    """A failed generation, tagged with the kind of failure."""

    def __init__(self, kind: ErrorKind, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"GenerationError({self.kind.value!r}, {self.message!r})"


@dataclass(frozen=True)
class GenerationResult:
    html: Optional[str] = None
    error: Optional[GenerationError] = None

    @classmethod
    def success(cls, html: str) -> "GenerationResult":
        return cls(html=html)

    @classmethod
    def failure(cls, error: GenerationError) -> "GenerationResult":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error is not None else None


class StaleResultError(Exception):
    """A generation was cancelled or overtaken by a newer request; its result is discarded."""
