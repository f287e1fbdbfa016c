"""Strategy evaluator — aggregate an ordered rule sequence into one Outcome.

INVARIANT: Rule errors never propagate out of :func:`run_rule`. A
RuleViolation becomes the rule's cause; any other exception becomes a
``rule_error`` cause and is logged at DEBUG with its traceback.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from valguard.domain.outcome import (
    INSUFFICIENT_RULES_SATISFIED,
    NO_RULE_SATISFIED,
    RULE_ERROR,
    Cause,
    CauseOrigin,
    Outcome,
)
from valguard.domain.rules import Rule
from valguard.domain.strategy import Strategy, StrategyKind
from valguard.errors import RuleViolation

logger = logging.getLogger(__name__)


def run_rule[T](rule: Rule[T], value: T) -> Outcome:
    """Run a single rule behind the error boundary.

    Failures are attributed to ``rule.name``.
    """
    try:
        outcome = rule.check(value)
    except RuleViolation as exc:
        outcome = Outcome.failure(Cause(code=exc.code, message=exc.message, detail=exc.detail))
    except Exception as exc:
        logger.debug("Rule %s raised while checking %r", rule.name, value, exc_info=True)
        outcome = Outcome.failure(
            Cause(
                code=RULE_ERROR,
                message=f"{type(exc).__name__}: {exc}",
                detail={"exception": type(exc).__name__},
            )
        )
    if not isinstance(outcome, Outcome):
        outcome = Outcome.failure(
            Cause(
                code=RULE_ERROR,
                message=f"check() returned {type(outcome).__name__}, expected Outcome",
            )
        )
    return outcome.attributed_to(rule.name)


def evaluate[T](
    rules: Sequence[Rule[T]],
    value: T,
    strategy: Strategy | None = None,
) -> Outcome:
    """Aggregate *rules* over *value* under *strategy* (default ``ALL``)."""
    strategy = strategy or Strategy.all()
    if strategy.kind is StrategyKind.ANY:
        return _evaluate_any(rules, value)
    if strategy.kind is StrategyKind.AT_LEAST:
        return _evaluate_at_least(rules, value, strategy.n or 0)
    return _evaluate_all(rules, value)


def _evaluate_all[T](rules: Sequence[Rule[T]], value: T) -> Outcome:
    # Short-circuit: the first failure in declaration order is the cause.
    for rule in rules:
        outcome = run_rule(rule, value)
        if not outcome.valid:
            return outcome
    return Outcome.success()


def _evaluate_any[T](rules: Sequence[Rule[T]], value: T) -> Outcome:
    for rule in rules:
        if run_rule(rule, value).valid:
            return Outcome.success()
    return Outcome.failure(
        _aggregate_cause(
            NO_RULE_SATISFIED,
            "no rule satisfied",
            total=len(rules),
        )
    )


def _evaluate_at_least[T](rules: Sequence[Rule[T]], value: T, required: int) -> Outcome:
    satisfied = sum(1 for rule in rules if run_rule(rule, value).valid)
    if satisfied >= required:
        return Outcome.success()
    return Outcome.failure(
        _aggregate_cause(
            INSUFFICIENT_RULES_SATISFIED,
            f"insufficient rules satisfied (got {satisfied} of {required} required)",
            satisfied=satisfied,
            required=required,
            total=len(rules),
        )
    )


def _aggregate_cause(code: str, message: str, **detail: Any) -> Cause:
    return Cause(code=code, message=message, origin=CauseOrigin.AGGREGATE, detail=detail)
