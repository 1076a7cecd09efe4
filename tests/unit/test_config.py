"""
Tests for configuration loading.
"""

import pytest
from ogpreview.config import Config, FetchConfig, MonitoringConfig, find_config_file
from pydantic import ValidationError


@pytest.mark.unit
class TestConfigDefaults:
    def test_defaults(self):
        config = Config()

        assert config.project_name == "OGPreview"
        assert config.extraction.keep_self_closing_tags is False
        assert config.fetch.timeout == 30.0
        assert config.fetch.max_retries == 2
        assert config.fetch.max_document_bytes == 5_000_000
        assert config.monitoring.log_level == "INFO"
        assert config.monitoring.log_file is None

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("OGPREVIEW_FETCH__TIMEOUT", "12.5")
        monkeypatch.setenv("OGPREVIEW_EXTRACTION__KEEP_SELF_CLOSING_TAGS", "true")

        config = Config()

        assert config.fetch.timeout == 12.5
        assert config.extraction.keep_self_closing_tags is True

    @pytest.mark.parametrize(
        "overrides",
        [{"timeout": 0}, {"max_document_bytes": -1}, {"max_retries": -1}, {"backoff_base_seconds": -0.1}],
    )
    def test_invalid_fetch_settings_rejected(self, overrides):
        with pytest.raises(ValidationError):
            FetchConfig(**overrides)

    def test_log_file_parent_created(self, tmp_path):
        log_file = tmp_path / "logs" / "nested" / "ogpreview.log"

        config = MonitoringConfig(log_file=log_file)

        assert config.log_file == str(log_file)
        assert log_file.parent.is_dir()


@pytest.mark.unit
class TestConfigFiles:
    def test_from_yaml(self, tmp_path):
        path = tmp_path / "ogpreview.yaml"
        path.write_text(
            "extraction:\n  keep_self_closing_tags: true\nfetch:\n  user_agent: TestBot/1.0\n  max_retries: 0\n",
            encoding="utf-8",
        )

        config = Config.from_yaml(path)

        assert config.extraction.keep_self_closing_tags is True
        assert config.fetch.user_agent == "TestBot/1.0"
        assert config.fetch.max_retries == 0

    def test_empty_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "ogpreview.yaml"
        path.write_text("", encoding="utf-8")

        assert Config.from_yaml(path).fetch.timeout == 30.0

    def test_missing_yaml_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            Config.from_yaml(tmp_path / "absent.yaml")

    def test_find_and_load_config_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert find_config_file() is None
        assert Config.load().fetch.max_retries == 2

        (tmp_path / "ogpreview.yml").write_text("fetch:\n  max_retries: 5\n", encoding="utf-8")

        assert find_config_file() == tmp_path / "ogpreview.yml"
        assert Config.load().fetch.max_retries == 5
