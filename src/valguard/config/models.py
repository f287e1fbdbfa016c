"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, valguard.toml only contains
overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from valguard.domain.policy import SkipCondition, Timing
from valguard.domain.strategy import StrategyKind

# --- valguard.toml sections ---


class PolicyDefaults(BaseModel):
    """[policy] section. Defaults for cells built without an explicit Policy."""

    model_config = {"frozen": True}

    timing: list[Timing] = Field(default_factory=lambda: [Timing.ON_WRITE])
    strategy: StrategyKind = StrategyKind.ALL
    at_least: int | None = None
    skip: list[SkipCondition] = Field(default_factory=list)
    verbose: bool = False


class LoggingConfig(BaseModel):
    """[logging] section."""

    model_config = {"frozen": True}

    verbose: bool = False
    log_json: bool = False


class ValguardConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    policy: PolicyDefaults = Field(default_factory=PolicyDefaults)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
