"""
Structured result for operations that may degrade instead of failing.

- success: everything worked
- degraded(reason): part of the work was skipped, callers get defaults
- fatal(reason): nothing useful could be done (store unreachable)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

OutcomeStatus = Literal["success", "degraded", "fatal"]


@dataclass(frozen=True)
class Outcome:
    status: OutcomeStatus
    reason: str | None = None

    @classmethod
    def success(cls) -> "Outcome":
        return cls("success")

    @classmethod
    def degraded(cls, reason: str) -> "Outcome":
        return cls("degraded", reason)

    @classmethod
    def fatal(cls, reason: str) -> "Outcome":
        return cls("fatal", reason)

    @property
    def ok(self) -> bool:
        return self.status == "success"

    @property
    def is_fatal(self) -> bool:
        return self.status == "fatal"


def combine(outcomes: list[Outcome]) -> Outcome:
    """
    Fold many outcomes into one: fatal beats degraded beats success.
    """
    fatal = [o.reason or "" for o in outcomes if o.status == "fatal"]
    if fatal:
        return Outcome.fatal("; ".join(fatal))
    degraded = [o.reason or "" for o in outcomes if o.status == "degraded"]
    if degraded:
        return Outcome.degraded("; ".join(degraded))
    return Outcome.success()
