"""Config file discovery and loading.

Walk-up finder locates valguard.toml, similar to how git finds .git/.
Supports the VALGUARD_CONFIG env var as an override.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from valguard.config.models import ValguardConfig
from valguard.errors import PolicyError

CONFIG_FILENAME = "valguard.toml"
CONFIG_ENV_VAR = "VALGUARD_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for valguard.toml.

    Returns the path to the config file, or None if not found.
    Checks VALGUARD_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p
        return None

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path* as TOML.

    Raises:
        PolicyError: If the file is not valid TOML.
    """
    raw = path.read_text(encoding="utf-8")
    try:
        return tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise PolicyError(msg) from exc


def load_config(path: Path | None = None, cwd: Path | None = None) -> ValguardConfig:
    """Load and validate config from a TOML file.

    If *path* is None, uses find_config(*cwd*) to discover the file.
    Returns default ValguardConfig if no file is found.
    """
    if path is None:
        path = find_config(cwd)
    if path is None:
        return ValguardConfig()
    return ValguardConfig.model_validate(read_toml(path))
