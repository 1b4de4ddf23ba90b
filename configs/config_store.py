#!/usr/bin/env python3
"""Persisted local settings (GitHub target and cached Anthropic key).

Stored as JSON in the working directory:

    {"github": {"token", "owner", "repo", "baseBranch", "headBranch"},
     "anthropic": {"apiKey"}}

A missing file means "no stored config". Writes are atomic (temp file +
replace); concurrent writers are not guarded against.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional

from configs.config import Config
from utils.change_models import GitHubSettings

logger = logging.getLogger(__name__)

GITHUB = "github"
ANTHROPIC = "anthropic"


class ConfigStore:
    def __init__(self, path: Optional[str] = None) -> None:
        self.path = Path(path) if path else Path.cwd() / Config.CONFIG_FILENAME
        self._data: Dict[str, Any] = {}

    def load(self) -> Dict[str, Any]:
        """Read the file; return {} when it is absent or unreadable."""
        self._data = {}
        if not self.path.exists():
            return self._data
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to load config file {self.path}: {e}")
            return self._data
        if not isinstance(raw, dict):
            logger.warning(f"Ignoring config file {self.path}: top-level value is not an object")
            return self._data
        for section in (GITHUB, ANTHROPIC):
            if section in raw and not isinstance(raw[section], dict):
                logger.warning(f"Ignoring '{section}' section in {self.path}: value is not an object")
                del raw[section]
        self._data = raw
        return self._data

    def get(self, section: str, key: Optional[str] = None) -> Any:
        values = self._data.get(section)
        if not isinstance(values, dict):
            values = {}
        if key is None:
            return dict(values)
        return values.get(key)

    def set(self, section: str, values: Dict[str, Any]) -> None:
        merged = self.get(section)
        merged.update({k: v for k, v in values.items() if v is not None})
        self._data[section] = merged
        self.save()

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=".tmp_", suffix=".json")
        with os.fdopen(tmp_fd, "w", encoding="utf-8") as f:
            json.dump(self._data, f, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, self.path)
        logger.debug(f"Saved config to {self.path}")

    def clear(self) -> None:
        self._data = {}
        if self.path.exists():
            self.path.unlink()

    # ---- typed accessors ----
    def github_settings(self) -> Optional[GitHubSettings]:
        if not self.has_complete_github_config():
            return None
        gh = self.get(GITHUB)
        return GitHubSettings(
            token=gh["token"],
            owner=gh["owner"],
            repo=gh["repo"],
            base_branch=gh.get("baseBranch") or Config.DEFAULT_BASE_BRANCH,
            head_branch=gh.get("headBranch") or Config.CURRENT_BRANCH_SENTINEL,
        )

    def set_github_settings(self, settings: GitHubSettings) -> None:
        self.set(GITHUB, {
            "token": settings.token,
            "owner": settings.owner,
            "repo": settings.repo,
            "baseBranch": settings.base_branch,
            "headBranch": settings.head_branch,
        })

    def has_complete_github_config(self) -> bool:
        gh = self.get(GITHUB)
        return bool(gh.get("token") and gh.get("owner") and gh.get("repo"))

    def anthropic_api_key(self) -> Optional[str]:
        return self.get(ANTHROPIC, "apiKey")

    def set_anthropic_api_key(self, api_key: str) -> None:
        self.set(ANTHROPIC, {"apiKey": api_key})
