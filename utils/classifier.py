#!/usr/bin/env python3
"""Path heuristics that sort changed files into backend and frontend buckets.

Rules are a fixed table of (predicate, category) pairs evaluated in order.
Matching is case-sensitive substring containment on the literal path; the
two buckets are independent, so a file may land in both or neither.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Sequence, Tuple

from configs.config import Config
from utils.change_models import ChangedFile

BACKEND = "backend"
FRONTEND = "frontend"

BACKEND_DIR_MARKERS = ("/api/", "/routes/", "/controllers/", "/endpoints/")
FRONTEND_DIR_MARKERS = ("/components/", "/pages/", "/hooks/", "/utils/")
FRONTEND_EXTENSIONS = (".jsx", ".tsx", ".vue", ".svelte")

Predicate = Callable[[str], bool]


def _contains(marker: str) -> Predicate:
    return lambda path: marker in path


def _endswith(ext: str) -> Predicate:
    return lambda path: path.endswith(ext)


def _server_file(ext: str) -> Predicate:
    return lambda path: path.endswith(ext) and "server" in path


def build_rules(server_extensions: Iterable[str] = Config.SERVER_FILE_EXTENSIONS) -> List[Tuple[Predicate, str]]:
    rules: List[Tuple[Predicate, str]] = []
    rules.extend((_contains(m), BACKEND) for m in BACKEND_DIR_MARKERS)
    rules.extend((_server_file(ext), BACKEND) for ext in server_extensions)
    rules.extend((_contains(m), FRONTEND) for m in FRONTEND_DIR_MARKERS)
    rules.extend((_endswith(ext), FRONTEND) for ext in FRONTEND_EXTENSIONS)
    return rules


RULES = build_rules()


@dataclass(frozen=True)
class Classification:
    backend: List[str] = field(default_factory=list)
    frontend: List[str] = field(default_factory=list)


def categories_for(path: str, rules: Sequence[Tuple[Predicate, str]] = RULES) -> List[str]:
    """Return the categories matched by ``path``, in rule-table order, without repeats."""
    found: List[str] = []
    for predicate, category in rules:
        if category not in found and predicate(path):
            found.append(category)
    return found


def _paths_in(files: Iterable[ChangedFile], category: str, rules: Sequence[Tuple[Predicate, str]]) -> List[str]:
    return [f.path for f in files if category in categories_for(f.path, rules)]


def detect_backend_endpoints(files: Iterable[ChangedFile], rules: Sequence[Tuple[Predicate, str]] = RULES) -> List[str]:
    return _paths_in(files, BACKEND, rules)


def detect_frontend_changes(files: Iterable[ChangedFile], rules: Sequence[Tuple[Predicate, str]] = RULES) -> List[str]:
    return _paths_in(files, FRONTEND, rules)


def classify(files: Sequence[ChangedFile], rules: Sequence[Tuple[Predicate, str]] = RULES) -> Classification:
    return Classification(
        backend=detect_backend_endpoints(files, rules),
        frontend=detect_frontend_changes(files, rules),
    )
