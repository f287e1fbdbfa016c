"""Outcome and Cause — the result contract of every rule and aggregation.

INVARIANT: An Outcome carries a Cause iff it is invalid.
Rules, the evaluator, and guarded cells all speak this type.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Self

from pydantic import BaseModel, Field, model_validator

# --- Synthetic aggregate codes ---

NO_RULE_SATISFIED = "no_rule_satisfied"
INSUFFICIENT_RULES_SATISFIED = "insufficient_rules_satisfied"
RULE_ERROR = "rule_error"


class CauseOrigin(StrEnum):
    """Where a failure cause came from."""

    RULE = "rule"
    AGGREGATE = "aggregate"


class Cause(BaseModel):
    """Structured failure payload within an Outcome.

    Attributes:
        code: Machine-readable failure kind (e.g. ``"invalid_length"``).
        message: Optional human-readable explanation.
        origin: ``rule`` for a single rule's cause, ``aggregate`` for
            synthetic causes produced by ``ANY`` / ``AT_LEAST``.
        rule: Name of the rule that produced the cause, if attributable.
        detail: Free-form context (bounds, counts, ...).
    """

    model_config = {"frozen": True}

    code: str
    message: str = ""
    origin: CauseOrigin = CauseOrigin.RULE
    rule: str | None = None
    detail: dict[str, Any] = Field(default_factory=dict)

    def __str__(self) -> str:
        text = self.message or self.code
        if self.rule:
            return f"{self.rule}: {text}"
        return text


class Outcome(BaseModel):
    """Result of evaluating one rule or a whole rule set."""

    model_config = {"frozen": True}

    valid: bool
    cause: Cause | None = None

    @model_validator(mode="after")
    def _cause_matches_validity(self) -> Self:
        if self.valid and self.cause is not None:
            raise ValueError("a valid outcome cannot carry a cause")
        if not self.valid and self.cause is None:
            raise ValueError("an invalid outcome requires a cause")
        return self

    @classmethod
    def success(cls) -> Outcome:
        return _SUCCESS

    @classmethod
    def failure(cls, cause: Cause | str, message: str = "", **detail: Any) -> Outcome:
        """Build an invalid outcome from a Cause or from a bare code."""
        if isinstance(cause, str):
            cause = Cause(code=cause, message=message, detail=detail)
        return cls(valid=False, cause=cause)

    def attributed_to(self, rule_name: str) -> Outcome:
        """Return a copy whose rule-origin cause names *rule_name*.

        Uses model_copy(update=...) since Outcome and Cause are frozen.
        Causes that already name a rule are left untouched.
        """
        if self.cause is None or self.cause.rule is not None:
            return self
        if self.cause.origin is not CauseOrigin.RULE:
            return self
        return self.model_copy(update={"cause": self.cause.model_copy(update={"rule": rule_name})})


_SUCCESS = Outcome(valid=True)
