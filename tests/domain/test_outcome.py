"""Tests for Outcome and Cause."""

import json

import pytest

from valguard.domain.outcome import Cause, CauseOrigin, Outcome


class TestOutcome:
    def test_success(self) -> None:
        outcome = Outcome.success()
        assert outcome.valid is True
        assert outcome.cause is None

    def test_failure_from_code(self) -> None:
        outcome = Outcome.failure("invalid_length", "too short", min=3)
        assert outcome.valid is False
        assert outcome.cause is not None
        assert outcome.cause.code == "invalid_length"
        assert outcome.cause.message == "too short"
        assert outcome.cause.detail == {"min": 3}
        assert outcome.cause.origin is CauseOrigin.RULE

    def test_failure_from_cause(self) -> None:
        cause = Cause(code="x", origin=CauseOrigin.AGGREGATE)
        assert Outcome.failure(cause).cause == cause

    def test_valid_with_cause_rejected(self) -> None:
        with pytest.raises(ValueError):
            Outcome(valid=True, cause=Cause(code="x"))

    def test_invalid_without_cause_rejected(self) -> None:
        with pytest.raises(ValueError):
            Outcome(valid=False)

    def test_equality(self) -> None:
        assert Outcome.success() == Outcome(valid=True)
        assert Outcome.failure("a") == Outcome.failure("a")
        assert Outcome.failure("a") != Outcome.failure("b")

    def test_frozen(self) -> None:
        outcome = Outcome.success()
        with pytest.raises(Exception):
            outcome.valid = False  # type: ignore[misc]

    def test_json_serialization(self) -> None:
        raw = Outcome.failure("invalid_pattern", pattern="^a$").model_dump_json()
        parsed = json.loads(raw)
        assert parsed["valid"] is False
        assert parsed["cause"]["code"] == "invalid_pattern"
        assert parsed["cause"]["origin"] == "rule"
        assert parsed["cause"]["detail"] == {"pattern": "^a$"}


class TestAttribution:
    def test_names_rule(self) -> None:
        outcome = Outcome.failure("not_odd").attributed_to("OddRule")
        assert outcome.cause is not None
        assert outcome.cause.rule == "OddRule"

    def test_keeps_existing_rule(self) -> None:
        outcome = Outcome.failure(Cause(code="x", rule="inner")).attributed_to("outer")
        assert outcome.cause is not None
        assert outcome.cause.rule == "inner"

    def test_success_untouched(self) -> None:
        assert Outcome.success().attributed_to("r") == Outcome.success()

    def test_aggregate_untouched(self) -> None:
        outcome = Outcome.failure(Cause(code="x", origin=CauseOrigin.AGGREGATE))
        attributed = outcome.attributed_to("r")
        assert attributed.cause is not None
        assert attributed.cause.rule is None


class TestCauseStr:
    def test_message_preferred(self) -> None:
        assert str(Cause(code="c", message="m")) == "m"

    def test_code_fallback(self) -> None:
        assert str(Cause(code="c")) == "c"

    def test_rule_prefix(self) -> None:
        assert str(Cause(code="c", message="m", rule="R")) == "R: m"
