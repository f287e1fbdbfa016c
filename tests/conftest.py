"""Shared pytest fixtures for valguard tests."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest
import structlog

from tests.sample_rules import LengthRule, OddRule, PatternRule, PositiveRule
from valguard.domain.rules import Rule


@pytest.fixture
def int_rules() -> tuple[Rule[int], ...]:
    """``[positive, odd]`` in declaration order."""
    return (PositiveRule(), OddRule())


@pytest.fixture
def name_rules() -> tuple[Rule[str], ...]:
    """Length in [3, 10] followed by letters only."""
    return (LengthRule(3, 10), PatternRule(r"^[a-zA-Z]+$"))


@pytest.fixture
def restore_logging() -> Generator[None]:
    """Restore root and ``valguard`` logger state and structlog defaults."""
    root = logging.getLogger()
    root_handlers = root.handlers[:]
    root_level = root.level
    vg = logging.getLogger("valguard")
    vg_handlers = vg.handlers[:]
    vg_level = vg.level
    vg_propagate = vg.propagate
    yield
    root.handlers = root_handlers
    root.setLevel(root_level)
    vg.handlers = vg_handlers
    vg.setLevel(vg_level)
    vg.propagate = vg_propagate
    structlog.reset_defaults()
