"""Unit tests for the persisted JSON settings store."""

import json

from configs.config_store import ANTHROPIC, GITHUB, ConfigStore
from utils.change_models import GitHubSettings


class TestConfigStore:
    """Test cases for ConfigStore."""

    def test_missing_file_loads_empty(self, tmp_path):
        store = ConfigStore(str(tmp_path / ".pr-generator.json"))

        assert store.load() == {}
        assert store.github_settings() is None
        assert store.anthropic_api_key() is None

    def test_set_persists_and_merges(self, tmp_path):
        path = tmp_path / ".pr-generator.json"
        store = ConfigStore(str(path))
        store.load()

        store.set(GITHUB, {"token": "t1", "owner": "acme"})
        store.set(GITHUB, {"repo": "web", "owner": None})

        on_disk = json.loads(path.read_text(encoding="utf-8"))
        assert on_disk == {GITHUB: {"token": "t1", "owner": "acme", "repo": "web"}}
        assert store.get(GITHUB, "owner") == "acme"

    def test_round_trip_through_new_instance(self, tmp_path):
        path = str(tmp_path / ".pr-generator.json")
        first = ConfigStore(path)
        first.set_anthropic_api_key("sk-ant-123")
        first.set_github_settings(GitHubSettings(token="t", owner="o", repo="r", base_branch="develop"))

        second = ConfigStore(path)
        second.load()

        assert second.anthropic_api_key() == "sk-ant-123"
        settings = second.github_settings()
        assert settings.base_branch == "develop"
        assert settings.head_branch == "current"
        assert second.get(GITHUB, "baseBranch") == "develop"

    def test_github_settings_defaults_for_missing_branches(self, tmp_path):
        path = tmp_path / ".pr-generator.json"
        path.write_text(json.dumps({GITHUB: {"token": "t", "owner": "o", "repo": "r"}}), encoding="utf-8")
        store = ConfigStore(str(path))
        store.load()

        settings = store.github_settings()

        assert settings.base_branch == "main"
        assert settings.head_branch == "current"

    def test_incomplete_github_config(self, tmp_path):
        path = tmp_path / ".pr-generator.json"
        path.write_text(json.dumps({GITHUB: {"token": "t", "owner": "o"}}), encoding="utf-8")
        store = ConfigStore(str(path))
        store.load()

        assert not store.has_complete_github_config()
        assert store.github_settings() is None

    def test_corrupt_file_is_treated_as_empty(self, tmp_path):
        path = tmp_path / ".pr-generator.json"
        path.write_text("{not json", encoding="utf-8")
        store = ConfigStore(str(path))

        assert store.load() == {}

    def test_non_object_file_is_treated_as_empty(self, tmp_path):
        path = tmp_path / ".pr-generator.json"
        path.write_text("[1, 2]", encoding="utf-8")

        assert ConfigStore(str(path)).load() == {}

    def test_wrong_type_sections_are_treated_as_empty(self, tmp_path):
        path = tmp_path / ".pr-generator.json"
        path.write_text(json.dumps({ANTHROPIC: "oops", GITHUB: ["x"], "other": 1}), encoding="utf-8")
        store = ConfigStore(str(path))

        assert store.load() == {"other": 1}
        assert store.anthropic_api_key() is None
        assert not store.has_complete_github_config()
        assert store.github_settings() is None

    def test_set_replaces_wrong_type_section(self, tmp_path):
        path = tmp_path / ".pr-generator.json"
        path.write_text(json.dumps({ANTHROPIC: "oops"}), encoding="utf-8")
        store = ConfigStore(str(path))
        store.load()

        store.set_anthropic_api_key("sk-ant-123")

        assert json.loads(path.read_text(encoding="utf-8")) == {ANTHROPIC: {"apiKey": "sk-ant-123"}}

    def test_clear_removes_file(self, tmp_path):
        path = tmp_path / ".pr-generator.json"
        store = ConfigStore(str(path))
        store.set(ANTHROPIC, {"apiKey": "k"})
        assert path.exists()

        store.clear()

        assert not path.exists()
        assert store.get(ANTHROPIC) == {}

    def test_default_path_is_in_working_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)

        assert ConfigStore().path == tmp_path / ".pr-generator.json"

    def test_save_leaves_no_temp_files(self, tmp_path):
        store = ConfigStore(str(tmp_path / ".pr-generator.json"))
        store.set(ANTHROPIC, {"apiKey": "k"})

        assert [p.name for p in tmp_path.iterdir()] == [".pr-generator.json"]
