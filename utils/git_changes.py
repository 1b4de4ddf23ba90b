#!/usr/bin/env python3
"""Local change set retrieval through the git CLI.

Collects per-file statistics, statuses, diffs and base-revision content
between a base branch and HEAD, applies the exclusion pathspecs and the file
cap, and returns a ChangeSet. Raises GitChangesError with typed codes.
"""

import logging
import subprocess
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from configs.config import Config
from utils.change_models import ChangeSet, ChangedFile

logger = logging.getLogger(__name__)

GitRunner = Callable[[List[str]], Tuple[int, str, str]]

STATUS_CODES = {
    "M": "modified",
    "A": "added",
    "D": "deleted",
    "R": "renamed",
}


class GitChangesError(Exception):
    def __init__(self, message: str, code: str = "UNKNOWN", *, cause: Optional[Exception] = None):
        super().__init__(message)
        self.code = code
        self.cause = cause


def run_git_command(command: List[str], cwd: Optional[str] = None) -> Tuple[int, str, str]:
    """Run a git command and return (returncode, stdout, stderr).

    Output is decoded as UTF-8 with undecodable bytes replaced.

    Raises:
        GitChangesError: If the git executable cannot be found
    """
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
            cwd=cwd,
        )
    except FileNotFoundError as e:
        raise GitChangesError(
            "Failed to get git changes: git command not found. Is Git installed and in your PATH?",
            code="GIT_MISSING",
            cause=e,
        )
    return result.returncode, result.stdout, result.stderr.strip()


def _code_from_stderr(stderr: str) -> str:
    low = stderr.lower()
    if "not a git repository" in low:
        return "NOT_A_REPO"
    if "unknown revision" in low or "bad revision" in low or "ambiguous argument" in low or "invalid object name" in low:
        return "BAD_REF"
    return "UNKNOWN"


def parse_numstat(output: str) -> List[Tuple[str, int, int, Optional[str]]]:
    """Parse ``git diff --numstat -z`` output.

    Returns (path, additions, deletions, previous_path) tuples. Binary files
    report ``-`` counts and come back as 0/0.
    """
    entries: List[Tuple[str, int, int, Optional[str]]] = []
    tokens = output.split("\0")
    i = 0
    while i < len(tokens):
        tok = tokens[i]
        if not tok.strip():
            i += 1
            continue
        parts = tok.lstrip("\n").split("\t")
        if len(parts) < 3:
            i += 1
            continue
        adds = int(parts[0]) if parts[0].isdigit() else 0
        dels = int(parts[1]) if parts[1].isdigit() else 0
        if parts[2]:
            entries.append((parts[2], adds, dels, None))
            i += 1
        else:
            # rename: the old and new paths follow as separate tokens
            if i + 2 >= len(tokens):
                break
            entries.append((tokens[i + 2], adds, dels, tokens[i + 1]))
            i += 3
    return entries


def parse_name_status(output: str) -> Dict[str, str]:
    """Parse ``git diff --name-status -z`` output into {path: status}."""
    statuses: Dict[str, str] = {}
    tokens = output.split("\0")
    i = 0
    while i < len(tokens):
        code = tokens[i].strip()
        if not code:
            i += 1
            continue
        letter = code[0]
        if letter in ("R", "C"):
            if i + 2 >= len(tokens):
                break
            statuses[tokens[i + 2]] = "renamed" if letter == "R" else "added"
            i += 3
        else:
            if i + 1 >= len(tokens):
                break
            statuses[tokens[i + 1]] = STATUS_CODES.get(letter, "modified")
            i += 2
    return statuses


def format_summary(processed: int, total: int, additions: int, deletions: int) -> str:
    if total > processed:
        return (
            f"Changes in {processed} files (showing first {processed} of {total}): "
            f"{additions} additions, {deletions} deletions"
        )
    return f"Changes in {processed} files: {additions} additions, {deletions} deletions"


def build_change_set(
    files: Sequence[ChangedFile],
    branch_name: str,
    base_branch: str,
    *,
    max_files: int = Config.MAX_FILES,
) -> ChangeSet:
    """Cap ``files`` to ``max_files`` and attach the aggregate summary."""
    total = len(files)
    kept = list(files[:max_files])
    if total > max_files:
        logger.warning(
            f"Found {total} changed files, but only processing first {max_files} to avoid token limits"
        )
    summary = format_summary(
        len(kept),
        total,
        sum(f.additions for f in files),
        sum(f.deletions for f in files),
    )
    return ChangeSet(
        files=kept,
        summary=summary,
        branch_name=branch_name,
        base_branch=base_branch,
        total_files=total,
        truncated=total > max_files,
    )


class GitChangeRetriever:
    """Reads the change set of the current branch against a base branch."""

    def __init__(self, cwd: Optional[str] = None, runner: Optional[GitRunner] = None,
                 exclude_pathspecs: Sequence[str] = Config.GIT_EXCLUDE_PATHSPECS,
                 max_files: int = Config.MAX_FILES) -> None:
        self.cwd = cwd
        self._runner = runner or (lambda command: run_git_command(command, cwd=self.cwd))
        self.exclude_pathspecs = list(exclude_pathspecs)
        self.max_files = max_files

    def _git(self, *args: str) -> str:
        command = ["git", *args]
        returncode, stdout, stderr = self._runner(command)
        if returncode != 0:
            raise GitChangesError(
                f"Failed to get git changes: {stderr or 'git ' + ' '.join(args) + ' exited with ' + str(returncode)}",
                code=_code_from_stderr(stderr),
            )
        return stdout

    def current_branch(self) -> str:
        branch = self._git("rev-parse", "--abbrev-ref", "HEAD").strip()
        if not branch:
            raise GitChangesError("Failed to get git changes: could not determine current branch")
        return branch

    def show_file(self, revision: str, path: str) -> Optional[str]:
        """Return file content at ``revision``, or None if it did not exist there."""
        returncode, stdout, stderr = self._runner(["git", "show", f"{revision}:{path}"])
        if returncode != 0:
            logger.debug(f"No content for {path} at {revision}: {stderr}")
            return None
        return stdout

    def get_changes(self, base_branch: str = Config.DEFAULT_BASE_BRANCH) -> ChangeSet:
        """Collect the change set between ``base_branch`` and HEAD.

        Raises:
            GitChangesError: If any git call fails
        """
        try:
            branch_name = self.current_branch()
            rev_range = f"{base_branch}...HEAD"
            logger.info(f"Collecting changes for {branch_name} against {base_branch}")

            numstat = parse_numstat(self._git("diff", "--numstat", "-z", rev_range, "--", ".", *self.exclude_pathspecs))
            statuses = parse_name_status(self._git("diff", "--name-status", "-z", rev_range, "--", ".", *self.exclude_pathspecs))

            eligible = [entry for entry in numstat if entry[1] > 0 or entry[2] > 0]
            files: List[ChangedFile] = []
            for path, additions, deletions, previous_path in eligible[: self.max_files]:
                diff = self._git("diff", rev_range, "--", path)
                files.append(ChangedFile(
                    path=path,
                    status=statuses.get(path, "renamed" if previous_path else "modified"),
                    additions=additions,
                    deletions=deletions,
                    diff=diff,
                    content=self.show_file(base_branch, previous_path or path),
                ))

            # totals and the cap message are computed over every eligible file
            placeholders = [
                ChangedFile(path=path, additions=adds, deletions=dels)
                for path, adds, dels, _ in eligible[self.max_files:]
            ]
            change_set = build_change_set(files + placeholders, branch_name, base_branch, max_files=self.max_files)
            logger.debug(f"✓ {change_set.summary}")
            return change_set
        except GitChangesError:
            raise
        except Exception as e:
            raise GitChangesError(f"Failed to get git changes: {e}", cause=e)
