"""Rule ABC and the callable adapter.

A rule is an opaque unit: ``check(value) -> Outcome``. The engine never
looks inside one. Rules must be deterministic for a fixed value and must
not mutate it, so one instance can be shared across cells.

Concrete rules written as frozen dataclasses get configuration equality
for free; plain subclasses compare by identity.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from valguard.domain.outcome import Outcome


class Rule[T](ABC):
    """Abstract base class for validation rules over values of type ``T``.

    Subclasses either return ``Outcome.failure(...)`` or raise
    :class:`~valguard.errors.RuleViolation`; both end up as the same
    rule-origin cause once they pass through the evaluator.

    Usage::

        @dataclass(frozen=True)
        class LengthRule(Rule[str]):
            min: int
            max: int

            def check(self, value: str) -> Outcome:
                if not self.min <= len(value) <= self.max:
                    return Outcome.failure("invalid_length")
                return Outcome.success()
    """

    @property
    def name(self) -> str:
        """Identifier used when attributing a cause to this rule."""
        return type(self).__name__

    @abstractmethod
    def check(self, value: T) -> Outcome:
        """Check *value* and return its outcome."""
        ...

    def is_valid(self, value: T) -> bool:
        """Whether *value* passes this rule alone.

        Any exception raised by ``check`` counts as a failure. Use the
        evaluator when the cause matters.
        """
        try:
            return self.check(value).valid
        except Exception:
            return False


@dataclass(frozen=True)
class PredicateRule[T](Rule[T]):
    """Adapter turning a plain ``Callable[[T], bool]`` into a rule."""

    predicate: Callable[[T], bool]
    code: str
    message: str = ""
    label: str | None = None

    @property
    def name(self) -> str:
        if self.label:
            return self.label
        return getattr(self.predicate, "__name__", type(self).__name__)

    def check(self, value: T) -> Outcome:
        if self.predicate(value):
            return Outcome.success()
        return Outcome.failure(self.code, self.message)
