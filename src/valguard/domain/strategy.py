"""Combination strategies for aggregating rule outcomes.

``ALL`` is the default and the only strategy that surfaces a specific
rule's cause. ``ANY`` and ``AT_LEAST`` produce synthetic causes.

``AT_LEAST(n)`` is never clamped. ``n = 0`` is trivially satisfied and
``n > rule_count`` can never be satisfied; cells reject the latter at
construction via :meth:`Strategy.check_satisfiable`.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Self

from pydantic import BaseModel, model_validator

from valguard.errors import PolicyError


class StrategyKind(StrEnum):
    """How rule outcomes combine into one."""

    ALL = "all"
    ANY = "any"
    AT_LEAST = "at_least"


class Strategy(BaseModel):
    """A combination strategy, optionally parameterised by ``n``.

    Build strategies through the classmethods, which raise
    :class:`~valguard.errors.PolicyError` on malformed input. Direct
    construction (``Strategy(kind=..., n=...)``, or a mapping passed as
    ``Policy(strategy=...)``) goes through pydantic validation and raises
    :class:`pydantic.ValidationError` instead, like any other model.
    """

    model_config = {"frozen": True}

    kind: StrategyKind = StrategyKind.ALL
    n: int | None = None

    @model_validator(mode="after")
    def _check_n(self) -> Self:
        _validate_n(self.kind, self.n)
        return self

    @classmethod
    def of(cls, kind: StrategyKind | str, n: int | None = None) -> Strategy:
        """Build a strategy from its kind and optional *n*.

        Raises:
            PolicyError: If *kind* is unknown or *n* does not fit it.
        """
        try:
            kind = StrategyKind(kind)
        except ValueError:
            raise PolicyError(f"Unknown strategy kind: {kind!r}") from None
        _validate_n(kind, n)
        return cls(kind=kind, n=n)

    @classmethod
    def all(cls) -> Strategy:
        return cls(kind=StrategyKind.ALL)

    @classmethod
    def any(cls) -> Strategy:
        return cls(kind=StrategyKind.ANY)

    @classmethod
    def at_least(cls, n: int) -> Strategy:
        """Require at least *n* rules to succeed.

        Raises:
            PolicyError: If *n* is negative.
        """
        return cls.of(StrategyKind.AT_LEAST, n)

    def check_satisfiable(self, rule_count: int) -> None:
        """Reject an ``AT_LEAST(n)`` that *rule_count* rules can never meet."""
        if self.kind is StrategyKind.AT_LEAST and self.n is not None and self.n > rule_count:
            msg = f"at_least({self.n}) can never be satisfied by {rule_count} rule(s)"
            raise PolicyError(msg)

    def __str__(self) -> str:
        if self.kind is StrategyKind.AT_LEAST:
            return f"at_least({self.n})"
        return str(self.kind)


def _validate_n(kind: StrategyKind, n: int | None) -> None:
    if kind is StrategyKind.AT_LEAST:
        if n is None:
            raise PolicyError("at_least strategy requires n")
        if n < 0:
            raise PolicyError(f"at_least strategy requires n >= 0, got {n}")
    elif n is not None:
        raise PolicyError(f"{kind} strategy does not take n")
