"""Policy — the immutable configuration of a guarded value cell.

A Policy answers four questions for the cell: does this event trigger
validation, should this value be skipped, which strategy applies, and
should failures be surfaced. All answers are pure projections over the
frozen fields.
"""

from __future__ import annotations

from collections.abc import Iterable, Sized
from enum import StrEnum
from typing import Any

from pydantic import BaseModel

from valguard.domain.strategy import Strategy
from valguard.errors import PolicyError


class Timing(StrEnum):
    """Trigger points for automatic validation."""

    ON_READ = "on_read"
    ON_WRITE = "on_write"
    ALWAYS = "always"


class SkipCondition(StrEnum):
    """Value states for which rules are not run."""

    SKIP_ON_ABSENT = "skip_on_absent"
    SKIP_ON_DEFAULT = "skip_on_default"


class LogMode(StrEnum):
    """Diagnostic level for validation failures."""

    QUIET = "quiet"
    VERBOSE = "verbose"


PolicyOption = Timing | SkipCondition | Strategy | LogMode


class Policy(BaseModel):
    """When to validate, what to skip, how to combine, and whether to log.

    INVARIANT: never mutated after construction. Build a new cell to
    change a policy.

    Attributes:
        timing: Trigger points. Empty means no automatic revalidation.
        strategy: Combination strategy, ``None`` meaning the default ``ALL``.
        skip: Skip conditions checked against each candidate value.
        verbose: Surface failures through the log and the failure hook.
    """

    model_config = {"frozen": True}

    timing: frozenset[Timing] = frozenset({Timing.ON_WRITE})
    strategy: Strategy | None = None
    skip: frozenset[SkipCondition] = frozenset()
    verbose: bool = False

    @classmethod
    def from_options(cls, *options: PolicyOption | Iterable[PolicyOption]) -> Policy:
        """Build a policy from a flat list of option items.

        Timings and skip conditions accumulate. The first strategy wins.
        Any ``LogMode.VERBOSE`` turns verbose logging on. When no timing
        is given the default ``{ON_WRITE}`` applies.

        Raises:
            PolicyError: On an item that is not a policy option.
        """
        timing: set[Timing] = set()
        skip: set[SkipCondition] = set()
        strategy: Strategy | None = None
        verbose = False

        for option in _flatten_options(options):
            if isinstance(option, Timing):
                timing.add(option)
            elif isinstance(option, SkipCondition):
                skip.add(option)
            elif isinstance(option, Strategy):
                if strategy is None:
                    strategy = option
            elif isinstance(option, LogMode):
                verbose = verbose or option is LogMode.VERBOSE
            else:
                raise PolicyError(f"Not a policy option: {option!r}")

        return cls(
            timing=frozenset(timing) if timing else frozenset({Timing.ON_WRITE}),
            strategy=strategy,
            skip=frozenset(skip),
            verbose=verbose,
        )

    def triggers_on(self, event: Timing) -> bool:
        """Whether *event* triggers automatic validation.

        ``ALWAYS`` in the timing set enables both events. Asking about
        ``ALWAYS`` itself means asking about both events at once.
        """
        if Timing.ALWAYS in self.timing:
            return True
        if event is Timing.ALWAYS:
            return Timing.ON_READ in self.timing and Timing.ON_WRITE in self.timing
        return event in self.timing

    def should_skip(self, value: Any) -> bool:
        """Whether rules should be bypassed for *value*."""
        if SkipCondition.SKIP_ON_ABSENT in self.skip and value is None:
            return True
        if SkipCondition.SKIP_ON_DEFAULT in self.skip and _is_default(value):
            return True
        return False

    def effective_strategy(self) -> Strategy:
        return self.strategy if self.strategy is not None else Strategy.all()

    def logs_verbosely(self) -> bool:
        return self.verbose


def _flatten_options(options: Iterable[Any]) -> Iterable[Any]:
    for option in options:
        # Options are strings (StrEnum) or models, both iterable; never unpack those.
        if isinstance(option, (str, bytes, BaseModel)) or not isinstance(option, Iterable):
            yield option
        else:
            yield from _flatten_options(option)


def _is_default(value: Any) -> bool:
    """Empty sized values (``""``, ``b""``, ``[]``, ``{}``) count as default."""
    if isinstance(value, Sized):
        return len(value) == 0
    return False
