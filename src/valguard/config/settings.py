"""Unified settings — init kwargs, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs   — values passed to :meth:`ValguardSettings.load`
  2. Env vars      — ``VALGUARD_*`` prefix, ``__`` for nested sections
  3. TOML file     — ``valguard.toml`` discovered via walk-up
  4. Code defaults — baked into the section models

Uses Pydantic Settings v2 with a custom :class:`TomlSettingsSource` that
reuses the walk-up discovery from :mod:`valguard.config.discovery`.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from valguard.config.discovery import find_config, read_toml
from valguard.config.models import LoggingConfig, PolicyDefaults
from valguard.domain.policy import Policy
from valguard.domain.strategy import Strategy


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``valguard.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            self._data = read_toml(toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        """Return the full TOML data dict for Pydantic to merge."""
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class ValguardSettings(BaseSettings):
    """Process-wide defaults for policies and logging.

    Attributes:
        config_path: The TOML file the settings were read from, if any.
        policy: Defaults used by :meth:`default_policy`.
        logging: Arguments for :func:`valguard.config.logging.configure_logging`.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "VALGUARD_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    policy: PolicyDefaults = Field(default_factory=PolicyDefaults)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def load(
        cls,
        *,
        config_path: str | Path | None = None,
        start: Path | None = None,
        **overrides: Any,
    ) -> ValguardSettings:
        """Construct settings from an explicit or discovered TOML file.

        Discovers ``valguard.toml`` via walk-up from *start* unless
        *config_path* is given, and merges *overrides* as the
        highest-priority source.
        """
        toml_path: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            toml_path = find_config(start)

        _tls.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **overrides)
        finally:
            _tls.toml_path = None

    def default_policy(self) -> Policy:
        """Build the Policy described by the ``[policy]`` section.

        Raises:
            PolicyError: If ``at_least`` is missing or negative for the
                ``at_least`` strategy, or set for any other strategy.
        """
        defaults = self.policy
        strategy = Strategy.of(defaults.strategy, defaults.at_least)
        return Policy(
            timing=frozenset(defaults.timing),
            strategy=strategy,
            skip=frozenset(defaults.skip),
            verbose=defaults.verbose,
        )
