"""Exception taxonomy for valguard.

Rule failures are data (:class:`~valguard.domain.outcome.Outcome`), not
exceptions. The classes here cover configuration mistakes and the
in-rule signalling channel.
"""

from __future__ import annotations

from typing import Any


class ValguardError(Exception):
    """Base class for all valguard exceptions."""


class PolicyError(ValguardError, ValueError):
    """Malformed policy or strategy configuration.

    Raised at construction time, never deferred to evaluation.
    """


class RuleViolation(ValguardError):
    """Raised inside :meth:`Rule.check` to report a domain failure.

    INVARIANT: never escapes a cell. The evaluator converts it into a
    rule-origin :class:`~valguard.domain.outcome.Cause`.
    """

    def __init__(self, code: str, message: str = "", **detail: Any) -> None:
        super().__init__(message or code)
        self.code = code
        self.message = message
        self.detail = detail
