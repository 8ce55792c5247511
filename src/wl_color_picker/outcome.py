"""Tagged results for the external tool steps.

Each step of a pick returns an Outcome instead of an exit status, so the
caller can stop at the first step that did not succeed.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class Status(Enum):
    SUCCESS = "success"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass(frozen=True)
class Outcome:
    """Result of one step: a value, a user cancellation, or a failure reason."""

    status: Status
    value: Any = None
    reason: Optional[str] = None

    @classmethod
    def success(cls, value: Any) -> "Outcome":
        return cls(Status.SUCCESS, value=value)

    @classmethod
    def cancelled(cls) -> "Outcome":
        return cls(Status.CANCELLED)

    @classmethod
    def failed(cls, reason: str) -> "Outcome":
        return cls(Status.FAILED, reason=reason)

    @property
    def ok(self) -> bool:
        return self.status is Status.SUCCESS
