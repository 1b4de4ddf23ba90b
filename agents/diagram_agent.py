#!/usr/bin/env python3
"""Sequence-diagram requester for backend endpoint changes.

Diagram generation is best-effort: every failure is logged as a warning and
reported as "no diagram" so the description run always continues.
"""

import logging
from typing import Optional, Sequence

from clients.anthropic_client import AnthropicClient
from configs.config import Config
from utils.change_models import ChangeSet
from utils.diagram_extractor import extract_diagram
from utils.prompt_builder import build_diagram_prompt

logger = logging.getLogger(__name__)


class DiagramRequester:
	"""Asks the model for a Mermaid sequence diagram of the modified endpoints."""

	def __init__(self, client: AnthropicClient, max_tokens: int = Config.DIAGRAM_MAX_TOKENS):
		self.client = client
		self.max_tokens = max_tokens

	def request(self, changes: ChangeSet, backend_endpoints: Sequence[str]) -> Optional[str]:
		"""Return the diagram body, or None when none could be produced.

		Args:
			changes: Change set the endpoints were classified from
			backend_endpoints: Paths classified as backend endpoint files

		Returns:
			Mermaid diagram text without fences, or None
		"""
		if not backend_endpoints:
			return None

		try:
			prompt = build_diagram_prompt(changes, backend_endpoints)
			logger.info(f"Requesting API sequence diagram for {len(backend_endpoints)} endpoint file(s)")
			content = self.client.create_message(prompt, max_tokens=self.max_tokens)
			first = content[0]
			if getattr(first, "type", None) != "text":
				logger.warning(f"Diagram response was not text (type={getattr(first, 'type', None)}); skipping diagram")
				return None
			diagram = extract_diagram(first.text or "")
		except Exception as e:
			logger.warning(f"Failed to generate diagram: {e}")
			return None

		if diagram is None:
			logger.warning("Diagram response did not contain a sequence diagram")
		return diagram
