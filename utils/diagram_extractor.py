#!/usr/bin/env python3
"""Pull a Mermaid diagram body out of free-form model output.

Two independent extractors are tried in order:

1. ``FencedBlockExtractor`` looks for a fence opened with the language tag
   (```` ```mermaid ````) and closed by a bare fence at the start of a line.
2. ``KeywordLineExtractor`` scans line by line, starts capturing at the first
   line containing the diagram keyword and stops at a bare closing fence.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

logger = logging.getLogger(__name__)

FENCE = "```"
DIAGRAM_LANGUAGE = "mermaid"
DIAGRAM_KEYWORD = "sequenceDiagram"


class FenceState(str, Enum):
    SEARCHING = "searching"
    FOUND = "found"


class ScanState(str, Enum):
    SEARCHING = "searching"
    CAPTURING = "capturing"
    DONE = "done"


class FencedBlockExtractor:
    def __init__(self, language: str = DIAGRAM_LANGUAGE) -> None:
        self.opener = f"{FENCE}{language}\n"
        self.closer = f"\n{FENCE}"
        self.state = FenceState.SEARCHING

    def extract(self, text: str) -> Optional[str]:
        self.state = FenceState.SEARCHING
        start = text.find(self.opener)
        if start == -1:
            return None
        body_start = start + len(self.opener)
        end = text.find(self.closer, body_start)
        if end == -1:
            return None
        self.state = FenceState.FOUND
        return text[body_start:end]


class KeywordLineExtractor:
    def __init__(self, keyword: str = DIAGRAM_KEYWORD) -> None:
        self.keyword = keyword
        self.state = ScanState.SEARCHING

    def extract(self, text: str) -> Optional[str]:
        self.state = ScanState.SEARCHING
        captured: List[str] = []
        for line in text.split("\n"):
            if self.state is ScanState.SEARCHING:
                if self.keyword in line:
                    self.state = ScanState.CAPTURING
                    captured.append(line)
            elif self.state is ScanState.CAPTURING:
                if line.strip() == FENCE:
                    self.state = ScanState.DONE
                    break
                captured.append(line)
        if not captured:
            return None
        return "\n".join(captured)


def extract_diagram(text: str) -> Optional[str]:
    """Return the diagram body, or None when the text holds no diagram."""
    if not text:
        return None
    fenced = FencedBlockExtractor().extract(text)
    if fenced is not None:
        return fenced
    logger.debug("No fenced mermaid block found, falling back to keyword scan")
    return KeywordLineExtractor().extract(text)
