#!/usr/bin/env python3
from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Sequence

from configs.config import Config
from utils.change_models import ChangeSet, ChangedFile

PROMPTS_DIR = Path(__file__).resolve().parent / "prompts"
TRUNCATION_MARKER = "..."

API_CHANGES_REQUEST = (
	"\nIf backend API endpoints were modified, please include a section documenting the API changes "
	"with method, path, and description of what changed.\n"
)


def _render_template(template: str, mapping: Dict[str, str]) -> str:
	text = template
	for key, value in mapping.items():
		text = text.replace(f"{{{{ {key} }}}}", value)
	return text


def _load_template(name: str) -> str:
	with open(PROMPTS_DIR / name, "r", encoding="utf-8") as f:
		return f.read()


def truncate_diff(diff: str, limit: int) -> str:
	"""Keep exactly the first ``limit`` characters, marking the cut with an ellipsis."""
	diff = diff or ""
	if len(diff) > limit:
		return diff[:limit] + TRUNCATION_MARKER
	return diff


def render_file_details(files: Sequence[ChangedFile], *, diff_chars: int = Config.PROMPT_DIFF_CHARS) -> str:
	blocks: List[str] = []
	for f in files:
		blocks.append(
			f"File: {f.path} ({f.status})\n"
			f"Additions: {f.additions}, Deletions: {f.deletions}\n"
			f"Diff:\n"
			f"{truncate_diff(f.diff, diff_chars)}"
		)
	return "\n\n".join(blocks)


def build_pr_prompt(changes: ChangeSet, backend: Sequence[str], frontend: Sequence[str]) -> str:
	"""Build the description prompt for a change set and its classification.

	The backend/frontend lines and the API documentation request only appear
	when the corresponding list is non-empty.
	"""
	mapping = {
		"branch_name": changes.branch_name,
		"base_branch": changes.base_branch,
		"summary": changes.summary,
		"backend_info": f"Backend API endpoints modified: {', '.join(backend)}" if backend else "",
		"frontend_info": f"Frontend components modified: {', '.join(frontend)}" if frontend else "",
		"api_changes_request": API_CHANGES_REQUEST if backend else "",
		# diff text is substituted last so placeholders inside diffs survive
		"file_details": render_file_details(changes.files),
	}
	return _render_template(_load_template("pr_description.prompt"), mapping)


def build_diagram_prompt(changes: ChangeSet, backend: Sequence[str]) -> str:
	"""Build the sequence-diagram prompt from the backend-classified files only."""
	entries: List[str] = []
	for path in backend:
		f = changes.find(path)
		diff = f.diff if f else ""
		additions = f.additions if f else 0
		deletions = f.deletions if f else 0
		entries.append(
			f"- {path} (+{additions}, -{deletions})\n"
			f"  Diff: {truncate_diff(diff, Config.DIAGRAM_DIFF_CHARS)}"
		)
	return _render_template(_load_template("sequence_diagram.prompt"), {"endpoint_details": "\n".join(entries)})
