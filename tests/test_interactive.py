"""Tests for the interactive settings flows."""

from unittest.mock import Mock

import utils.interactive as interactive
from configs.config_store import ConfigStore
from utils.change_models import GitHubSettings


def _patch_prompts(monkeypatch, answers, confirms=()):
    prompt = Mock()
    prompt.ask.side_effect = list(answers)
    confirm = Mock()
    confirm.ask.side_effect = list(confirms)
    monkeypatch.setattr(interactive, "Prompt", prompt)
    monkeypatch.setattr(interactive, "Confirm", confirm)
    return prompt, confirm


class TestMaskSecret:
    def test_long_value_shows_ends(self):
        assert interactive.mask_secret("ghp_1234567890abcd") == "ghp_...abcd"

    def test_short_value_fully_masked(self):
        assert interactive.mask_secret("abc") == "****"

    def test_missing_value(self):
        assert "not set" in interactive.mask_secret(None)


class TestPromptGithubSettings:
    def test_head_default_comes_from_branch_lookup(self, monkeypatch):
        prompt, _ = _patch_prompts(monkeypatch, ["tok", "acme", "web", "main", "feature/x"])

        settings = interactive.prompt_github_settings(None, lambda: "feature/x")

        assert settings == GitHubSettings(token="tok", owner="acme", repo="web", base_branch="main", head_branch="feature/x")
        assert prompt.ask.call_args_list[-1].kwargs["default"] == "feature/x"

    def test_required_answer_is_asked_again(self, monkeypatch):
        prompt, _ = _patch_prompts(monkeypatch, ["", "tok", "acme", "web", "main", "current"])

        settings = interactive.prompt_github_settings()

        assert settings.token == "tok"
        assert prompt.ask.call_count == 6

    def test_stored_token_is_not_shown_as_default(self, monkeypatch):
        prompt, _ = _patch_prompts(monkeypatch, ["tok", "acme", "web", "main", "current"])
        current = GitHubSettings(token="secret-token", owner="acme", repo="web")

        interactive.prompt_github_settings(current)

        token_call = prompt.ask.call_args_list[0]
        assert token_call.kwargs["password"] is True
        assert token_call.kwargs["show_default"] is False


class TestRunConfigFlow:
    """Test cases for the configuration menu."""

    def test_set_api_key_then_exit(self, tmp_path, monkeypatch):
        _patch_prompts(monkeypatch, ["2", "sk-ant-new", "4"])
        store = ConfigStore(str(tmp_path / ".pr-generator.json"))

        interactive.run_config_flow(store)

        assert ConfigStore(str(store.path)).load()["anthropic"] == {"apiKey": "sk-ant-new"}

    def test_clear_after_confirmation(self, tmp_path, monkeypatch):
        _patch_prompts(monkeypatch, ["3", "4"], confirms=[True])
        store = ConfigStore(str(tmp_path / ".pr-generator.json"))
        store.set_anthropic_api_key("k")

        interactive.run_config_flow(store)

        assert not store.path.exists()

    def test_clear_declined_keeps_file(self, tmp_path, monkeypatch):
        _patch_prompts(monkeypatch, ["3", "4"], confirms=[False])
        store = ConfigStore(str(tmp_path / ".pr-generator.json"))
        store.set_anthropic_api_key("k")

        interactive.run_config_flow(store)

        assert store.path.exists()
