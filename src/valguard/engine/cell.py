"""GuardedValue — a value cell that revalidates itself per its Policy.

Writes are observational, not transactional: a failed validation never
blocks a write. It only changes what ``is_valid`` and
``validation_error`` report.

INVARIANT: ``last_outcome`` is a cache of the most recent aggregation,
never authoritative state. Skipped values leave it untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

import structlog

from valguard.domain.builder import rule_set
from valguard.domain.outcome import Cause, Outcome
from valguard.domain.policy import Policy, Timing
from valguard.domain.rules import Rule
from valguard.engine.evaluator import evaluate

logger = logging.getLogger(__name__)

type FailureHook = Callable[[Cause, Any], None]


class GuardedValue[T]:
    """Owns a value, its ordered rules, and the policy that governs them.

    The constructor runs a write-time validation pass so ``last_outcome``
    is correct from the start.

    Usage::

        username = GuardedValue(
            "JohnDoe",
            rule_set(LengthRule(5, 10), PatternRule(r"^[a-zA-Z]+$")),
            Policy(timing={Timing.ALWAYS}, verbose=True),
        )
        username.set("No")
        if not username.is_valid:
            print(username.validation_error)

    Raises:
        PolicyError: If the policy's strategy can never be satisfied by
            the given rules (``AT_LEAST(n)`` with ``n > len(rules)``).
    """

    def __init__(
        self,
        initial: T,
        rules: Iterable[Rule[T]] = (),
        policy: Policy | None = None,
        *,
        on_failure: FailureHook | None = None,
    ) -> None:
        self._policy = policy if policy is not None else Policy()
        self._rules: tuple[Rule[T], ...] = rule_set(rules)
        self._strategy = self._policy.effective_strategy()
        self._strategy.check_satisfiable(len(self._rules))
        self._on_failure = on_failure
        self._value = initial
        self._last_outcome: Outcome | None = None
        self._revalidate(initial, trigger="init", report=True)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get(self) -> T:
        """Return the current value, revalidating first if reads trigger."""
        if self._policy.triggers_on(Timing.ON_READ):
            self._revalidate(self._value, trigger="read", report=True)
        return self._value

    def set(self, new_value: T) -> None:
        """Store *new_value*, revalidating it first if writes trigger.

        The value is committed even when validation fails.
        """
        if self._policy.triggers_on(Timing.ON_WRITE):
            self._revalidate(new_value, trigger="write", report=True)
        self._value = new_value

    # ------------------------------------------------------------------
    # Validity queries
    # ------------------------------------------------------------------

    @property
    def is_valid(self) -> bool:
        """Re-check the current value and report whether it passes.

        Runs regardless of the policy's timing flags. Skip conditions
        still apply; a value that has never been validated counts as
        valid.
        """
        self._revalidate(self._value, trigger="query", report=False)
        return self.validation_error is None

    @property
    def validation_error(self) -> Cause | None:
        """Cause of the last recorded failure, or None."""
        if self._last_outcome is None:
            return None
        return self._last_outcome.cause

    @property
    def last_outcome(self) -> Outcome | None:
        """Most recent aggregation, or None if nothing was validated yet."""
        return self._last_outcome

    def check(self, candidate: T) -> Outcome:
        """Evaluate *candidate* against this cell's rules without storing anything."""
        return evaluate(self._rules, candidate, self._strategy)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def value(self) -> T:
        """Current value, without any policy side effects."""
        return self._value

    @property
    def rules(self) -> tuple[Rule[T], ...]:
        return self._rules

    @property
    def policy(self) -> Policy:
        return self._policy

    def __repr__(self) -> str:
        if self._last_outcome is None:
            state = "unvalidated"
        else:
            state = "valid" if self._last_outcome.valid else "invalid"
        return f"GuardedValue({self._value!r}, rules={len(self._rules)}, {state})"

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _revalidate(self, value: T, *, trigger: str, report: bool) -> None:
        if self._policy.should_skip(value):
            logger.debug("Skipped validation on %s for %r", trigger, value)
            return
        outcome = evaluate(self._rules, value, self._strategy)
        self._last_outcome = outcome
        if report and outcome.cause is not None and self._policy.logs_verbosely():
            self._report_failure(outcome.cause, value, trigger)

    def _report_failure(self, cause: Cause, value: T, trigger: str) -> None:
        log = structlog.get_logger("valguard.cell")
        log.warning(
            "validation.failed",
            trigger=trigger,
            code=cause.code,
            origin=str(cause.origin),
            rule=cause.rule,
            message=cause.message,
        )
        if self._on_failure is not None:
            self._on_failure(cause, value)
