"""Tests for configuration loading."""

from pathlib import Path

import pytest

from inu.config import (
    DOGBIN_SERVER_URL,
    ConfigValidationError,
    InuConfig,
    ServerConfig,
    create_default_config,
    load_config,
)


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Empty directory standing in for ~/.inu."""
    path = tmp_path / "inu"
    path.mkdir()
    return path


class TestLoadConfig:
    """Tests for load_config() precedence."""

    def test_defaults(self, config_dir):
        config = load_config(config_dir / "missing.yaml", environ={}, config_dir=config_dir)

        assert config.server == ServerConfig(server=DOGBIN_SERVER_URL, api_key=None)
        assert config.timeout is None

    def test_yaml_values(self, config_dir):
        path = config_dir / "config.yaml"
        path.write_text('server: "http://localhost:8082"\napi_key: "abc"\ntimeout: 2.5\n')

        config = load_config(path, environ={}, config_dir=config_dir)

        assert config.server.server == "http://localhost:8082"
        assert config.server.api_key == "abc"
        assert config.timeout == 2.5

    def test_legacy_files_override_yaml(self, config_dir):
        path = config_dir / "config.yaml"
        path.write_text('server: "from-yaml"\napi_key: "yaml-key"\n')
        (config_dir / "server").write_text("hastebin.com\n")
        (config_dir / "key").write_text("  file-key \n")

        config = load_config(path, environ={}, config_dir=config_dir)

        assert config.server.server == "hastebin.com"
        assert config.server.api_key == "file-key"

    def test_environment_overrides_files(self, config_dir):
        (config_dir / "server").write_text("hastebin.com")
        environ = {
            "DOGBIN_SERVER": "http://env:90",
            "DOGBIN_KEY": " env-key ",
            "DOGBIN_TIMEOUT": "10",
        }

        config = load_config(config_dir / "missing.yaml", environ=environ, config_dir=config_dir)

        assert config.server.server == "http://env:90"
        assert config.server.api_key == "env-key"
        assert config.timeout == 10.0

    def test_blank_key_means_no_key(self, config_dir):
        (config_dir / "key").write_text("   \n")

        config = load_config(config_dir / "missing.yaml", environ={}, config_dir=config_dir)

        assert config.server.api_key is None

    def test_invalid_yaml(self, config_dir):
        path = config_dir / "config.yaml"
        path.write_text("server: [unclosed\n")

        with pytest.raises(ConfigValidationError):
            load_config(path, environ={}, config_dir=config_dir)

    def test_non_mapping_yaml(self, config_dir):
        path = config_dir / "config.yaml"
        path.write_text("- just\n- a list\n")

        with pytest.raises(ConfigValidationError):
            load_config(path, environ={}, config_dir=config_dir)

    def test_invalid_timeout(self, config_dir):
        with pytest.raises(ConfigValidationError):
            load_config(
                config_dir / "missing.yaml",
                environ={"DOGBIN_TIMEOUT": "soon"},
                config_dir=config_dir,
            )

    def test_default_config_round_trip(self, config_dir):
        """The generated template loads to the defaults."""
        path = config_dir / "nested" / "config.yaml"
        create_default_config(path)

        config = load_config(path, environ={}, config_dir=config_dir)

        assert config.server == ServerConfig()
        assert config.timeout is None


class TestInuConfig:
    """Tests for InuConfig helpers."""

    def test_with_overrides(self):
        config = InuConfig(server=ServerConfig(server="a", api_key="k"), timeout=3)

        updated = config.with_overrides(server="b", api_key=" new ")

        assert updated.server == ServerConfig(server="b", api_key="new")
        assert updated.timeout == 3
        # Original untouched
        assert config.server.server == "a"

    def test_with_overrides_ignores_none(self):
        config = InuConfig(server=ServerConfig(server="a", api_key="k"))

        assert config.with_overrides() == config

    def test_server_config_is_frozen(self):
        with pytest.raises(AttributeError):
            ServerConfig().server = "other"

    def test_validate(self):
        assert InuConfig().validate() == []
        assert InuConfig(server=ServerConfig(server=" ")).validate() == ["server is required"]
        assert InuConfig(timeout=0).validate() == ["timeout must be positive"]
