#!/usr/bin/env python3
"""Publish a generated description as a GitHub pull request.

Creates a new pull request, or updates the title/body of the open one whose
head matches ``owner:head_branch``. Failures never escape ``publish``: they are
reported through PublishResult.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Callable, Dict, List, Optional, Tuple

import requests

from configs.config import Config
from utils.change_models import GitHubSettings, PublishResult

logger = logging.getLogger(__name__)

_HEADING_PREFIX = re.compile(r"^#+\s*")


class GithubPublishError(Exception):
    def __init__(self, message: str, code: str = "UNKNOWN"):
        super().__init__(message)
        self.code = code


def split_title_body(description: str) -> Tuple[str, str]:
    """Split a description into (title, body).

    The title is the first line with leading heading markers stripped; the
    body is the remaining text, trimmed.
    """
    lines = description.split("\n")
    title = _HEADING_PREFIX.sub("", lines[0].strip()).strip()
    body = "\n".join(lines[1:]).strip()
    return title, body


class GithubPublisher:
    def __init__(
        self,
        settings: GitHubSettings,
        *,
        branch_resolver: Optional[Callable[[], str]] = None,
        session: Optional[requests.Session] = None,
        timeout_s: Optional[int] = None,
    ):
        github_config = Config.get_github_config()
        self.settings = settings
        self.branch_resolver = branch_resolver
        self.base_url = github_config["base_url"]
        self.timeout_s = timeout_s or github_config["timeout_s"]
        self.session = session or requests.Session()
        self.session.headers.update({
            'Authorization': f'token {settings.token}',
            'Accept': 'application/vnd.github+json',
            'User-Agent': 'pr-gen/1.0',
        })

    # -------- Public API --------
    def publish(self, description: str) -> PublishResult:
        try:
            title, body = split_title_body(description)
            if not title:
                raise GithubPublishError("Description has no title line", code="VALIDATION")
            head = self.resolve_head_branch()
            owner, repo = self.settings.owner, self.settings.repo

            existing = self.find_open_pull_request(head)
            if existing:
                number = existing["number"]
                logger.info(f"Updating existing PR {owner}/{repo}#{number}")
                data = self.update_pull_request(number, title, body)
                url = data.get("html_url") or existing.get("html_url")
            else:
                logger.info(f"Creating PR {owner}/{repo}: {head} -> {self.settings.base_branch}")
                data = self.create_pull_request(title, body, self.settings.base_branch, head)
                url = data.get("html_url")
            return PublishResult(success=True, url=url)
        except GithubPublishError as e:
            logger.warning(f"Publish failed ({e.code}): {e}")
            return PublishResult(success=False, error=str(e))
        except Exception as e:
            logger.warning(f"Publish failed: {e}")
            return PublishResult(success=False, error=str(e) or "Unknown error occurred")

    def resolve_head_branch(self) -> str:
        head = self.settings.head_branch
        if head and head != Config.CURRENT_BRANCH_SENTINEL:
            return head
        if not self.branch_resolver:
            raise GithubPublishError("Head branch is 'current' but no branch resolver is available", code="VALIDATION")
        return self.branch_resolver()

    def find_open_pull_request(self, head: str) -> Optional[Dict[str, Any]]:
        url = f"{self.base_url}/repos/{self.settings.owner}/{self.settings.repo}/pulls"
        params = {"state": "open", "head": f"{self.settings.owner}:{head}"}
        data = self._request("GET", url, params=params)
        pulls: List[Dict[str, Any]] = data if isinstance(data, list) else []
        return pulls[0] if pulls else None

    def create_pull_request(self, title: str, body: str, base: str, head: str) -> Dict[str, Any]:
        url = f"{self.base_url}/repos/{self.settings.owner}/{self.settings.repo}/pulls"
        payload = {"title": title, "body": body, "base": base, "head": head}
        return self._request("POST", url, payload=payload)

    def update_pull_request(self, number: int, title: str, body: str) -> Dict[str, Any]:
        url = f"{self.base_url}/repos/{self.settings.owner}/{self.settings.repo}/pulls/{number}"
        return self._request("PATCH", url, payload={"title": title, "body": body})

    def close(self) -> None:
        if self.session:
            self.session.close()

    # -------- HTTP helpers --------
    def _request(self, method: str, url: str, *, params: Optional[Dict[str, Any]] = None,
                 payload: Optional[Dict[str, Any]] = None) -> Any:
        try:
            r = self.session.request(method, url, params=params, json=payload, timeout=self.timeout_s)
        except requests.Timeout:
            raise GithubPublishError("Timeout contacting GitHub", code="TIMEOUT")
        except requests.RequestException as e:
            raise GithubPublishError(f"Network error contacting GitHub: {e}", code="NETWORK")

        sc = r.status_code
        if sc in (401, 403):
            raise GithubPublishError(f"Unauthorized (HTTP {sc}): check your GitHub token and its scopes", code="UNAUTHORIZED")
        if sc == 404:
            raise GithubPublishError(f"Repository {self.settings.owner}/{self.settings.repo} not found", code="NOT_FOUND")
        if sc == 422:
            raise GithubPublishError(f"Validation failed: {self._error_message(r)}", code="VALIDATION")
        if sc == 429:
            raise GithubPublishError("Rate limited", code="RATE_LIMIT")
        if sc >= 500:
            raise GithubPublishError(f"GitHub server error: HTTP {sc}", code="NETWORK")
        if sc >= 400:
            raise GithubPublishError(f"GitHub API error: HTTP {sc}")
        try:
            return r.json()
        except ValueError as e:
            raise GithubPublishError(f"Invalid JSON from GitHub: {e}", code="BAD_RESPONSE")

    @staticmethod
    def _error_message(r: requests.Response) -> str:
        try:
            data = r.json()
        except ValueError:
            return (r.text or "")[:200]
        if isinstance(data, dict):
            errors = data.get("errors") or []
            details = "; ".join(str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors)
            return f"{data.get('message', '')} {details}".strip()
        return str(data)[:200]
