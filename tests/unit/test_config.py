"""Unit tests for configuration management."""

import pytest
from pathlib import Path

from plan_backtest.config.defaults import get_default_config
from plan_backtest.config.loader import API_KEY_ENV, ConfigLoader
from plan_backtest.config.validation import ConfigValidator
from plan_backtest.errors import ConfigurationError


@pytest.fixture(autouse=True)
def no_api_key(monkeypatch):
    """Keep a developer's real API key out of the tests."""
    monkeypatch.delenv(API_KEY_ENV, raising=False)


class TestDefaultConfig:
    """Test suite for default configuration."""

    def test_default_config_creation(self) -> None:
        config = get_default_config()

        assert config.backtest.default_from == "2019-01-01"
        assert config.backtest.max_workers == 8
        assert config.provider.name == "auto"
        assert config.provider.api_key is None
        assert config.provider.granularities == ("day",)
        assert config.logging.level == "INFO"


class TestConfigLoader:
    """Test suite for configuration loader."""

    def test_config_loader_creation(self) -> None:
        loader = ConfigLoader.create()
        assert isinstance(loader.config_dir, Path)

    def test_shipped_config_file_keeps_defaults(self) -> None:
        """The repository config file only documents the defaults."""
        assert ConfigLoader.create().load() == get_default_config()

    def test_missing_config_dir_uses_defaults(self, tmp_path) -> None:
        loader = ConfigLoader.create(tmp_path / "nope")
        assert loader.load() == get_default_config()

    def test_empty_config_file(self, tmp_path) -> None:
        (tmp_path / "backtest.yaml").write_text("# nothing here\n")
        assert ConfigLoader.create(tmp_path).load() == get_default_config()

    def test_file_overrides(self, tmp_path) -> None:
        (tmp_path / "backtest.yaml").write_text(
            "backtest:\n"
            "  max_workers: 2\n"
            "provider:\n"
            "  name: synthetic\n"
            "  granularities: [hour, day]\n"
        )

        config = ConfigLoader.create(tmp_path).load()

        assert config.backtest.max_workers == 2
        assert config.backtest.default_from == "2019-01-01"
        assert config.provider.name == "synthetic"
        assert config.provider.granularities == ("hour", "day")

    def test_env_api_key(self, tmp_path, monkeypatch) -> None:
        monkeypatch.setenv(API_KEY_ENV, "secret")

        config = ConfigLoader.create(tmp_path).load()

        assert config.provider.api_key == "secret"

    def test_explicit_overrides_win(self, tmp_path, monkeypatch) -> None:
        (tmp_path / "backtest.yaml").write_text("provider:\n  name: polygon\n")
        monkeypatch.setenv(API_KEY_ENV, "from-env")

        config = ConfigLoader.create(tmp_path).load(
            {"provider": {"name": "synthetic", "api_key": "explicit"}}
        )

        assert config.provider.name == "synthetic"
        assert config.provider.api_key == "explicit"

    def test_invalid_value_raises(self, tmp_path) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader.create(tmp_path).load({"backtest": {"max_workers": 0}})

        assert exc_info.value.errors[0].field == "max_workers"

    def test_unknown_key_raises(self, tmp_path) -> None:
        (tmp_path / "backtest.yaml").write_text("provider:\n  colour: blue\n")

        with pytest.raises(ConfigurationError, match="provider.colour"):
            ConfigLoader.create(tmp_path).load()

    def test_non_mapping_file_raises(self, tmp_path) -> None:
        (tmp_path / "backtest.yaml").write_text("- just\n- a list\n")

        with pytest.raises(ConfigurationError):
            ConfigLoader.create(tmp_path).load()


class TestConfigValidator:
    """Test suite for configuration validation."""

    def test_valid_config(self) -> None:
        config = ConfigLoader.create(Path("/nonexistent")).merge_config()
        assert ConfigValidator.validate_config(config) == []

    @pytest.mark.parametrize("params,field", [
        ({"default_from": "June 2019"}, "default_from"),
        ({"max_workers": -1}, "max_workers"),
        ({"max_workers": True}, "max_workers"),
    ])
    def test_invalid_backtest_params(self, params, field) -> None:
        errors = ConfigValidator.validate_backtest_params(params)

        assert len(errors) == 1
        assert errors[0].field == field

    @pytest.mark.parametrize("params,field", [
        ({"name": "bloomberg"}, "provider.name"),
        ({"api_key": 123}, "provider.api_key"),
        ({"timeout_seconds": 0}, "provider.timeout_seconds"),
        ({"granularities": []}, "provider.granularities"),
        ({"granularities": ["day", "fortnight"]}, "provider.granularities"),
    ])
    def test_invalid_provider_params(self, params, field) -> None:
        errors = ConfigValidator.validate_provider_params(params)

        assert len(errors) == 1
        assert errors[0].field == field

    def test_invalid_logging_params(self) -> None:
        errors = ConfigValidator.validate_logging_params({"level": "LOUD", "format_json": "yes"})
        assert [e.field for e in errors] == ["logging.level", "logging.format_json"]

    def test_unknown_section(self) -> None:
        errors = ConfigValidator.validate_config({"metrics": {}})
        assert errors[0].field == "metrics"
