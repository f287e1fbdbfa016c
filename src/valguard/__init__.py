"""valguard: ordered rule sets, combination strategies, and guarded value cells."""

from valguard.domain.builder import rule_set
from valguard.domain.outcome import Cause, CauseOrigin, Outcome
from valguard.domain.policy import LogMode, Policy, SkipCondition, Timing
from valguard.domain.rules import PredicateRule, Rule
from valguard.domain.strategy import Strategy, StrategyKind
from valguard.engine.cell import GuardedValue
from valguard.engine.evaluator import evaluate
from valguard.errors import PolicyError, RuleViolation, ValguardError

__version__ = "0.1.0"

__all__ = [
    "Cause",
    "CauseOrigin",
    "GuardedValue",
    "LogMode",
    "Outcome",
    "Policy",
    "PolicyError",
    "PredicateRule",
    "Rule",
    "RuleViolation",
    "SkipCondition",
    "Strategy",
    "StrategyKind",
    "Timing",
    "ValguardError",
    "evaluate",
    "rule_set",
]
