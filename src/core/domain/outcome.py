"""Per-URL delivery outcome."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class OutcomeKind(str, Enum):
    SENT = "sent"
    REQUEST_BUILD_FAILED = "request_build_failed"
    TRANSPORT_FAILED = "transport_failed"


class FailurePolicy(str, Enum):
    """What the dispatcher does when delivery to one URL fails."""

    FAIL_FAST = "fail_fast"
    CONTINUE = "continue"

    @classmethod
    def from_bool(cls, continue_on_error: bool) -> "FailurePolicy":
        return cls.CONTINUE if continue_on_error else cls.FAIL_FAST


@dataclass(frozen=True)
class DeliveryOutcome:
    """Result of one delivery attempt. `index` is 1-based."""

    index: int
    url: str
    kind: OutcomeKind
    status_code: int | None = None
    status_line: str | None = None
    body: str | None = None
    error: str | None = None

    @classmethod
    def sent(cls, index: int, url: str, *, status_code: int, status_line: str, body: str | None) -> "DeliveryOutcome":
        return cls(
            index=index,
            url=url,
            kind=OutcomeKind.SENT,
            status_code=status_code,
            status_line=status_line,
            body=body,
        )

    @classmethod
    def request_build_failed(cls, index: int, url: str, error: Exception) -> "DeliveryOutcome":
        return cls(index=index, url=url, kind=OutcomeKind.REQUEST_BUILD_FAILED, error=str(error))

    @classmethod
    def transport_failed(cls, index: int, url: str, error: Exception) -> "DeliveryOutcome":
        return cls(index=index, url=url, kind=OutcomeKind.TRANSPORT_FAILED, error=str(error))

    @property
    def delivered(self) -> bool:
        """True when a response came back, whatever its status."""

        return self.kind is OutcomeKind.SENT
