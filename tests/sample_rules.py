"""Sample rules shared by the valguard test suite."""

from __future__ import annotations

import re
from dataclasses import dataclass

from valguard.domain.outcome import Outcome
from valguard.domain.rules import Rule
from valguard.errors import RuleViolation


@dataclass(frozen=True)
class PositiveRule(Rule[int]):
    """Fails with ``not_positive`` for values <= 0."""

    def check(self, value: int) -> Outcome:
        if value > 0:
            return Outcome.success()
        return Outcome.failure("not_positive", "Value must be a positive integer")


@dataclass(frozen=True)
class OddRule(Rule[int]):
    """Raises RuleViolation for even values."""

    def check(self, value: int) -> Outcome:
        if value % 2 == 0:
            raise RuleViolation("not_odd", "Value must be an odd number")
        return Outcome.success()


@dataclass(frozen=True)
class LengthRule(Rule[str]):
    min: int
    max: int

    def check(self, value: str) -> Outcome:
        if self.min <= len(value) <= self.max:
            return Outcome.success()
        return Outcome.failure("invalid_length", min=self.min, max=self.max, length=len(value))


@dataclass(frozen=True)
class PatternRule(Rule[str]):
    pattern: str

    def check(self, value: str) -> Outcome:
        if re.search(self.pattern, value):
            return Outcome.success()
        return Outcome.failure("invalid_pattern", pattern=self.pattern)


class ExplodingRule(Rule[object]):
    """Raises an unexpected exception on every check."""

    def check(self, value: object) -> Outcome:
        raise RuntimeError("boom")


class CountingRule(Rule[object]):
    """Always succeeds (or always fails) and counts its invocations."""

    def __init__(self, *, passes: bool = True) -> None:
        self.passes = passes
        self.calls = 0

    def check(self, value: object) -> Outcome:
        self.calls += 1
        if self.passes:
            return Outcome.success()
        return Outcome.failure("counted_failure")
