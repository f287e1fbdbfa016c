"""Rule-set builder: flatten declared rules into an ordered tuple.

Declaration order is preserved exactly: ``ALL`` short-circuits on the
first failure in this order.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from valguard.domain.rules import Rule

type RuleDeclaration = Rule[Any] | Iterable[RuleDeclaration] | None


def rule_set(*declarations: RuleDeclaration) -> tuple[Rule[Any], ...]:
    """Flatten *declarations* into the ordered rule tuple a cell consumes.

    Nested iterables of rules are expanded in place and ``None`` entries
    are dropped, so conditional declarations read naturally::

        rules = rule_set(
            LengthRule(3, 10),
            PatternRule(r"^[a-zA-Z]+$") if strict else None,
            extra_rules,
        )

    Raises:
        TypeError: If an entry is neither a rule, an iterable, nor None.
    """
    flat: list[Rule[Any]] = []
    _collect(declarations, flat)
    return tuple(flat)


def _collect(declarations: Iterable[Any], out: list[Rule[Any]]) -> None:
    for item in declarations:
        if item is None:
            continue
        if isinstance(item, Rule):
            out.append(item)
        elif isinstance(item, (str, bytes)):
            raise TypeError(f"Expected a Rule, got {type(item).__name__}: {item!r}")
        elif isinstance(item, Iterable):
            _collect(item, out)
        else:
            raise TypeError(f"Expected a Rule, got {type(item).__name__}: {item!r}")
