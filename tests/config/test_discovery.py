"""Tests for config discovery and loading."""

from pathlib import Path

import pytest

from valguard.config.discovery import CONFIG_FILENAME, find_config, load_config
from valguard.config.models import ValguardConfig
from valguard.domain.policy import Timing
from valguard.domain.strategy import StrategyKind
from valguard.errors import PolicyError


@pytest.fixture(autouse=True)
def _no_env_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("VALGUARD_CONFIG", raising=False)


class TestFindConfig:
    def test_finds_in_current_dir(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("[policy]\nverbose = true\n")
        assert find_config(tmp_path) == config_file

    def test_walks_up(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("[policy]\nverbose = true\n")
        child = tmp_path / "a" / "b" / "c"
        child.mkdir(parents=True)
        assert find_config(child) == config_file

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        child = tmp_path / "empty"
        child.mkdir()
        assert find_config(child) is None

    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_file = tmp_path / "custom.toml"
        config_file.write_text("[policy]\nverbose = true\n")
        monkeypatch.setenv("VALGUARD_CONFIG", str(config_file))
        assert find_config(tmp_path) == config_file

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        monkeypatch.setenv("VALGUARD_CONFIG", str(tmp_path / "nope.toml"))
        assert find_config(tmp_path) is None


class TestLoadConfig:
    def test_loads_from_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text(
            '[policy]\ntiming = ["always"]\nstrategy = "any"\n[logging]\nlog_json = true\n'
        )
        cfg = load_config(config_file)
        assert cfg.policy.timing == [Timing.ALWAYS]
        assert cfg.policy.strategy is StrategyKind.ANY
        assert cfg.policy.verbose is False  # default
        assert cfg.logging.log_json is True

    def test_discovers_from_cwd(self, tmp_path: Path) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("[policy]\nverbose = true\n")
        assert load_config(cwd=tmp_path).policy.verbose is True

    def test_returns_defaults_when_no_file(self, tmp_path: Path) -> None:
        assert load_config(cwd=tmp_path) == ValguardConfig()

    def test_empty_file_returns_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("")
        assert load_config(config_file) == ValguardConfig()

    def test_invalid_toml(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("[policy\n")
        with pytest.raises(PolicyError, match="Invalid TOML"):
            load_config(config_file)
