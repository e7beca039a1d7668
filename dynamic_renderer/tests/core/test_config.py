import pytest
import os
import yaml

from dynamic_renderer.core.config import ConfigurationManager, ConfigFileNotFoundError, InvalidYamlError, CONFIG_DIR


@pytest.fixture(scope="function")
def temp_config_files(tmp_path, monkeypatch):
    """
    Creates temporary YAML config files and points the ConfigurationManager
    singleton at them. The singleton's real state is restored afterwards.
    """
    manager = ConfigurationManager()
    saved_config, saved_env = manager._config, manager._current_env
    manager._config = {}
    manager._current_env = ""

    monkeypatch.setattr(ConfigurationManager, "CONFIG_DIR", str(tmp_path))

    dev_config_content = {
        "server": {"port": 3001, "allowed_origins": "*"},
        "renderer": {"wait_until": "load", "settle_delay_ms": 3000},
        "launch_args": ["--no-sandbox", "--disable-gpu"],
    }
    prod_config_content = {
        "server": {"port": 8080, "allowed_origins": "https://edge.example.com"},
        "renderer": {"wait_until": "domcontentloaded"},
    }
    with open(os.path.join(tmp_path, "development.yaml"), "w") as f:
        yaml.dump(dev_config_content, f)
    with open(os.path.join(tmp_path, "production.yaml"), "w") as f:
        yaml.dump(prod_config_content, f)
    with open(os.path.join(tmp_path, "invalid.yaml"), "w") as f:
        f.write("server: {port: 3001, allowed_origins: '*'")  # Missing closing brace
    with open(os.path.join(tmp_path, "not_dict.yaml"), "w") as f:
        yaml.dump(["list", "instead", "of", "dict"], f)

    yield str(tmp_path)

    manager._config = saved_config
    manager._current_env = saved_env


def test_load_development_config_default(temp_config_files, monkeypatch):
    """APP_ENV not set: development is loaded."""
    monkeypatch.delenv("APP_ENV", raising=False)

    config_manager = ConfigurationManager()
    config_manager.load_config()

    assert config_manager.current_environment == "development"
    assert config_manager.get("server.port") == 3001
    assert config_manager.get("renderer.settle_delay_ms") == 3000
    assert config_manager.get("non_existent_key") is None
    assert config_manager.get("non_existent_key", "default_val") == "default_val"


def test_load_production_config_env_var(temp_config_files, monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")

    config_manager = ConfigurationManager()
    config_manager.load_config()

    assert config_manager.current_environment == "production"
    assert config_manager.get("server.allowed_origins") == "https://edge.example.com"
    assert config_manager.get("renderer.wait_until") == "domcontentloaded"


def test_load_config_explicit_env_param(temp_config_files, monkeypatch):
    monkeypatch.setenv("APP_ENV", "development")

    config_manager = ConfigurationManager()
    config_manager.load_config(env="production")

    assert config_manager.current_environment == "production"
    assert config_manager.get("server.port") == 8080


def test_get_nested_and_missing_values(temp_config_files):
    config_manager = ConfigurationManager()
    config_manager.load_config("development")

    assert config_manager.get("renderer") == {"wait_until": "load", "settle_delay_ms": 3000}
    assert config_manager.get("launch_args") == ["--no-sandbox", "--disable-gpu"]
    assert config_manager.get("server.port.too_deep") is None
    assert config_manager.get("renderer.poll_interval_ms", 500) == 500
    assert config_manager.get("completely.made.up.path", "fallback") == "fallback"


def test_reload_config(temp_config_files, monkeypatch):
    monkeypatch.setenv("APP_ENV", "development")
    config_manager = ConfigurationManager()
    config_manager.load_config()
    assert config_manager.get("server.port") == 3001

    with open(os.path.join(temp_config_files, "development.yaml"), "w") as f:
        yaml.dump({"server": {"port": 4000}}, f)

    config_manager.reload_config()
    assert config_manager.get("server.port") == 4000

    config_manager.reload_config(env="production")
    assert config_manager.current_environment == "production"
    assert config_manager.get("server.port") == 8080


def test_config_file_not_found_error(temp_config_files, monkeypatch):
    monkeypatch.setenv("APP_ENV", "staging")
    config_manager = ConfigurationManager()

    with pytest.raises(ConfigFileNotFoundError) as excinfo:
        config_manager.load_config()
    assert "Configuration file not found for environment 'staging'" in str(excinfo.value)
    assert "staging.yaml" in str(excinfo.value)


def test_invalid_yaml_error(temp_config_files, monkeypatch):
    monkeypatch.setenv("APP_ENV", "invalid")
    config_manager = ConfigurationManager()

    with pytest.raises(InvalidYamlError) as excinfo:
        config_manager.load_config()
    assert "Error parsing YAML" in str(excinfo.value)
    assert "invalid.yaml" in str(excinfo.value)


def test_yaml_not_dict_error(temp_config_files, monkeypatch):
    monkeypatch.setenv("APP_ENV", "not_dict")
    config_manager = ConfigurationManager()

    with pytest.raises(InvalidYamlError) as excinfo:
        config_manager.load_config()
    assert "does not contain a valid YAML dictionary" in str(excinfo.value)


def test_singleton_behavior(temp_config_files):
    config_manager1 = ConfigurationManager()
    config_manager1.load_config("development")

    config_manager2 = ConfigurationManager()

    assert config_manager1 is config_manager2
    assert config_manager2.get("server.port") == 3001

    config_manager2.load_config("production")
    assert config_manager1.get("server.port") == 8080
    assert config_manager1.current_environment == "production"


@pytest.mark.parametrize("env", ["development", "production"])
def test_shipped_config_files_are_complete(env):
    """The packaged YAML files carry every section the service reads."""
    with open(os.path.join(CONFIG_DIR, f"{env}.yaml")) as f:
        shipped = yaml.safe_load(f)

    assert set(shipped) >= {"logging", "server", "renderer"}
    assert shipped["renderer"]["navigation_timeout_ms"] == 60000
    assert shipped["renderer"]["wait_until"] in ("load", "domcontentloaded")
    assert "--disable-dev-shm-usage" in shipped["renderer"]["launch_args"]
