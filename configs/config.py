import os
from typing import Dict, Any, List, Tuple


def _csv(value: str) -> List[str]:
	return [item.strip() for item in value.split(",") if item.strip()]


class Config:
	"""Configuration for the PR description generator."""

	# Anthropic Messages API
	ANTHROPIC_API_URL = os.getenv("ANTHROPIC_BASE_URL", "https://api.anthropic.com").rstrip('/')
	ANTHROPIC_MODEL = os.getenv("ANTHROPIC_MODEL", "claude-3-5-sonnet-20241022")
	PR_MAX_TOKENS = int(os.getenv("PR_MAX_TOKENS", "4000"))
	DIAGRAM_MAX_TOKENS = int(os.getenv("DIAGRAM_MAX_TOKENS", "2000"))

	# GitHub REST configuration
	GITHUB_API_URL = os.getenv("GITHUB_API_URL", "https://api.github.com").rstrip('/')
	HTTP_TIMEOUT_S = int(os.getenv("HTTP_TIMEOUT_S", "60"))

	# Change set budgets
	MAX_FILES = int(os.getenv("PR_GEN_MAX_FILES", "50"))
	PROMPT_DIFF_CHARS = 1000
	DIAGRAM_DIFF_CHARS = 500
	GIT_EXCLUDE_PATHSPECS: Tuple[str, ...] = (
		":!node_modules",
		":!dist",
		":!*.lock",
		":!package-lock.json",
		":!bun.lock",
	)

	# Classifier: extensions for which a "server" substring marks a backend file
	SERVER_FILE_EXTENSIONS: Tuple[str, ...] = tuple(_csv(os.getenv("PR_GEN_SERVER_EXTENSIONS", ".js,.ts")))

	# Local persisted settings
	CONFIG_FILENAME = os.getenv("PR_GEN_CONFIG_FILE", ".pr-generator.json")
	DEFAULT_BASE_BRANCH = "main"
	CURRENT_BRANCH_SENTINEL = "current"

	@classmethod
	def get_anthropic_config(cls) -> Dict[str, Any]:
		"""Get Anthropic Messages API configuration."""
		return {
			"base_url": cls.ANTHROPIC_API_URL,
			"model": cls.ANTHROPIC_MODEL,
			"timeout_s": cls.HTTP_TIMEOUT_S,
		}

	@classmethod
	def get_github_config(cls) -> Dict[str, Any]:
		"""Get GitHub REST client configuration."""
		return {
			"base_url": cls.GITHUB_API_URL,
			"timeout_s": cls.HTTP_TIMEOUT_S,
		}
