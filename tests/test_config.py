"""Tests for configuration loading."""

from mytodos.config import Config, ConfigModel, load_config, reset_config, save_config


class TestConfig:

    def teardown_method(self):
        reset_config()

    def test_defaults(self, tmp_path):
        config = ConfigModel(data_dir=str(tmp_path))

        assert config.api_url == "http://localhost:5160/api/tasks"
        assert config.port == 5160
        assert config.cors_origins == ["http://localhost:3000"]
        assert config.confirm_deletion is True
        assert config.get_cache_path() == tmp_path / "local_storage.json"

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "config.yaml"
        config = ConfigModel(data_dir=str(tmp_path), api_url="http://example.test/tasks", confirm_deletion=False)

        save_config(config, path)
        loaded = load_config(path)

        assert loaded.api_url == "http://example.test/tasks"
        assert loaded.confirm_deletion is False
        assert Config.get() is loaded

    def test_unknown_keys_ignored(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("port: 9000\nshiny_feature: true\n", encoding="utf-8")

        loaded = load_config(path)

        assert loaded.port == 9000
        assert not hasattr(loaded, "shiny_feature")

    def test_broken_file_falls_back_to_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("port: [unclosed\n", encoding="utf-8")

        loaded = load_config(path)

        assert loaded.port == 5160

    def test_data_dir_from_environment(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MYTODOS_DATA_DIR", str(tmp_path / "env"))

        assert ConfigModel().data_dir == str(tmp_path / "env")
