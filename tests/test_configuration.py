# tests/test_configuration.py
import pytest
import yaml

from navkit.shared.core import configuration
from navkit.shared.core.configuration import (
    ConfigManager,
    OverlapPolicy,
    SystemConfig,
    ValidationLevel,
    get_config,
    get_config_manager,
)
from navkit.shared.core.errors import ConfigurationError


def _write(path, data):
    path.write_text(yaml.safe_dump(data), encoding="utf-8")


def test_shipped_defaults_load():
    config = ConfigManager().get_config()

    assert config.navigation.overlap_policy is OverlapPolicy.REJECT
    assert config.navigation.restore_stack_on_teardown is False
    assert config.bus.idle_timeout == 60.0
    assert config.logging.log_file is None
    assert config.schema_version == 1


def test_missing_files_fall_back_to_model_defaults(tmp_path):
    assert ConfigManager(tmp_path).get_config() == SystemConfig()


def test_precedence_env_over_project_over_user(tmp_path, monkeypatch):
    _write(tmp_path / "user.yaml", {"bus": {"idle_timeout": 5.0}, "logging": {"level": "DEBUG"}})
    _write(tmp_path / "project.yaml", {"bus": {"idle_timeout": 7.5}})
    monkeypatch.setenv("NAVKIT_OVERLAP_POLICY", "cancel_and_replace")

    config = ConfigManager(tmp_path).get_config()

    assert config.bus.idle_timeout == 7.5
    assert config.logging.level == "DEBUG"
    assert config.navigation.overlap_policy is OverlapPolicy.CANCEL_AND_REPLACE


@pytest.mark.parametrize("raw, expected", [("true", True), ("1", True), ("on", True), ("no", False)])
def test_boolean_env_values(tmp_path, monkeypatch, raw, expected):
    monkeypatch.setenv("NAVKIT_RESTORE_STACK_ON_TEARDOWN", raw)

    config = ConfigManager(tmp_path).get_config()

    assert config.navigation.restore_stack_on_teardown is expected


def test_non_numeric_env_value_is_ignored(tmp_path, monkeypatch, caplog):
    monkeypatch.setenv("NAVKIT_BUS_IDLE_TIMEOUT", "soon")

    config = ConfigManager(tmp_path).get_config()

    assert config.bus.idle_timeout == 60.0
    assert "NAVKIT_BUS_IDLE_TIMEOUT" in caplog.text


def test_strict_validation_raises(tmp_path):
    _write(tmp_path / "project.yaml", {"navigation": {"overlap_policy": "queue"}})

    with pytest.raises(ConfigurationError) as excinfo:
        ConfigManager(tmp_path).get_config(ValidationLevel.STRICT)

    assert excinfo.value.config_key == "system"


def test_unknown_keys_are_rejected(tmp_path):
    _write(tmp_path / "user.yaml", {"navigation": {"max_sessions": 3}})

    with pytest.raises(ConfigurationError):
        ConfigManager(tmp_path).get_config()


def test_lenient_validation_uses_defaults(tmp_path):
    _write(tmp_path / "project.yaml", {"bus": {"idle_timeout": -1}})

    config = ConfigManager(tmp_path).get_config(ValidationLevel.LENIENT)

    assert config == SystemConfig()


def test_save_project_config_merges_and_reloads(tmp_path):
    _write(tmp_path / "project.yaml", {"logging": {"level": "DEBUG"}})
    manager = ConfigManager(tmp_path)
    assert manager.get_config().logging.level == "DEBUG"

    assert manager.save_project_config({"navigation": {"restore_stack_on_teardown": True}})

    config = manager.get_config()
    assert config.logging.level == "DEBUG"
    assert config.navigation.restore_stack_on_teardown is True


def test_reload_picks_up_edited_files(tmp_path):
    manager = ConfigManager(tmp_path)
    assert manager.get_config().logging.console_level == "WARNING"

    _write(tmp_path / "user.yaml", {"logging": {"console_level": "INFO"}})
    assert manager.get_config().logging.console_level == "WARNING"

    manager.reload_config()
    assert manager.get_config().logging.console_level == "INFO"


def test_global_manager_is_shared(tmp_path, monkeypatch):
    monkeypatch.setattr(configuration, "_config_manager", None)
    _write(tmp_path / "project.yaml", {"bus": {"idle_timeout": 0.5}})

    manager = get_config_manager(tmp_path)

    assert get_config_manager() is manager
    assert get_config().bus.idle_timeout == 0.5


def test_assets_refresh_interval_from_env(tmp_path, monkeypatch):
    assert ConfigManager(tmp_path).get_config().demo.assets_refresh_interval is None

    monkeypatch.setenv("NAVKIT_ASSETS_REFRESH_INTERVAL", "2.5")

    assert ConfigManager(tmp_path).get_config().demo.assets_refresh_interval == 2.5
