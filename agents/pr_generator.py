#!/usr/bin/env python3
"""Pull request description generator.

Classifies a change set, renders the description prompt, asks the model for
the Markdown text and optionally appends an API sequence diagram.
"""

import logging
from typing import Optional

from agents.diagram_agent import DiagramRequester
from clients.anthropic_client import AnthropicClient, AnthropicError
from configs.config import Config
from utils.change_models import ChangeSet
from utils.classifier import classify
from utils.prompt_builder import build_pr_prompt

logger = logging.getLogger(__name__)

DIAGRAM_SECTION_TEMPLATE = "\n\n## API Changes Diagram\n\n```mermaid\n{diagram}\n```"


class GenerationError(Exception):
	"""Raised when the description could not be generated; fatal to the run."""
	def __init__(self, message: str, code: str = "UNKNOWN") -> None:
		super().__init__(message)
		self.code = code


def append_diagram(description: str, diagram: Optional[str]) -> str:
	if not diagram:
		return description
	return description + DIAGRAM_SECTION_TEMPLATE.format(diagram=diagram)


class PRGenerator:
	"""Generates PR descriptions from change sets."""

	def __init__(
		self,
		client: AnthropicClient,
		diagram_requester: Optional[DiagramRequester] = None,
		max_tokens: int = Config.PR_MAX_TOKENS,
	):
		"""Initialize the generator.

		Args:
			client: Text-generation client shared by the description and diagram calls
			diagram_requester: Optional requester; one is built on the same client if None
			max_tokens: Output budget for the description call
		"""
		self.client = client
		self.diagram_requester = diagram_requester or DiagramRequester(client)
		self.max_tokens = max_tokens

	def generate(self, changes: ChangeSet, generate_diagram: bool = True) -> str:
		"""Generate the Markdown description for a change set.

		Raises:
			GenerationError: If the model call fails or returns a non-text part
		"""
		classification = classify(changes.files)
		logger.info(
			f"Classified {len(changes.files)} files: backend={len(classification.backend)}, "
			f"frontend={len(classification.frontend)}"
		)
		prompt = build_pr_prompt(changes, classification.backend, classification.frontend)

		try:
			content = self.client.create_message(prompt, max_tokens=self.max_tokens)
			first = content[0]
			if getattr(first, "type", None) != "text":
				raise GenerationError("Unexpected response type from Anthropic API", code="BAD_RESPONSE")
			description = first.text or ""
		except GenerationError as e:
			raise GenerationError(f"Failed to generate PR description: {e}", code=e.code) from e
		except AnthropicError as e:
			raise GenerationError(f"Failed to generate PR description: {e}", code=e.code) from e
		except Exception as e:
			raise GenerationError(f"Failed to generate PR description: {e}") from e

		logger.debug(f"✓ Generated description ({len(description)} chars)")

		if generate_diagram and classification.backend:
			diagram = self.diagram_requester.request(changes, classification.backend)
			description = append_diagram(description, diagram)
		return description
