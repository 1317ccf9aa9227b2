"""Tests for configuration handling."""

from pathlib import Path

from bao_cli.config import Config, ConfigModel, get_config, load_config, save_config
from bao_cli.utils.datetime import DISPLAY_DATETIME_FORMAT, INPUT_DATETIME_FORMAT


class TestConfigModel:
    """Test the configuration model."""

    def test_defaults(self, isolated_home):
        config = ConfigModel()
        assert config.data_dir == str(isolated_home)
        assert config.input_datetime_format == INPUT_DATETIME_FORMAT
        assert config.display_datetime_format == DISPLAY_DATETIME_FORMAT
        assert Path(config.data_dir).is_dir()

    def test_yaml_round_trip(self, config):
        config.no_color = True
        config.display_datetime_format = "%d %b %Y, %I:%M %p"
        restored = ConfigModel.from_yaml(config.to_yaml())
        assert restored == config

    def test_unknown_keys_ignored(self, isolated_home):
        restored = ConfigModel.from_yaml(f"data_dir: {isolated_home}\ntheme: dark\n")
        assert restored.data_dir == str(isolated_home)

    def test_absolute_data_file(self, config, tmp_path):
        config.data_file = str(tmp_path / "elsewhere.md")
        assert config.get_data_path() == tmp_path / "elsewhere.md"


class TestConfigManager:
    """Test loading and saving configuration files."""

    def test_creates_default_file(self, isolated_home):
        config = get_config()
        assert config.get_config_path().exists()
        assert get_config() is config

    def test_load_existing_file(self, tmp_path, isolated_home):
        path = tmp_path / "custom.yaml"
        save_config(ConfigModel(data_dir=str(isolated_home), show_banner=False), path)
        Config._instance = None
        assert load_config(path).show_banner is False

    def test_broken_file_uses_defaults(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("- just\n- a list\n")
        config = load_config(path)
        assert config.show_banner is True

    def test_reload(self, tmp_path, isolated_home):
        path = tmp_path / "custom.yaml"
        first = load_config(path)
        assert Config.reload(path) is not first
