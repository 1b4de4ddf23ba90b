#!/usr/bin/env python3
from __future__ import annotations

import logging
from typing import Any, List, Optional

import anthropic

from configs.config import Config

logger = logging.getLogger(__name__)


class AnthropicError(Exception):
	"""Typed error with a lightweight `.code` used by callers to pick a user message."""
	def __init__(self, message: str, code: str = "UNKNOWN") -> None:
		super().__init__(message)
		self.code = code


def _code_for_status(status: int) -> str:
	if status in (401, 403):
		return "UNAUTHORIZED"
	if status == 429:
		return "RATE_LIMIT"
	if status in (408, 504):
		return "TIMEOUT"
	if status >= 500:
		return "NETWORK"
	return "UNKNOWN"


class AnthropicClient:
	"""Client for the Anthropic Messages API.

	Single request/response, no retries: a failed call is reported to the
	caller, who decides whether it is fatal.
	"""

	def __init__(
		self,
		api_key: str,
		model: Optional[str] = None,
		timeout_s: Optional[int] = None,
		sdk_client: Optional[anthropic.Anthropic] = None,
	) -> None:
		if not api_key:
			raise AnthropicError("Anthropic API key is required", code="UNAUTHORIZED")
		cfg = Config.get_anthropic_config()
		self.model = model or cfg["model"]
		self.timeout_s = int(timeout_s if timeout_s is not None else cfg["timeout_s"])
		self._sdk = sdk_client or anthropic.Anthropic(
			api_key=api_key,
			base_url=cfg["base_url"],
			timeout=self.timeout_s,
			max_retries=0,
		)

	def create_message(self, prompt: str, max_tokens: int = Config.PR_MAX_TOKENS) -> List[Any]:
		"""Send one user message and return the response content blocks.

		Each block has a ``type``; text blocks carry ``text``.
		"""
		logger.debug(f"messages.create model={self.model} max_tokens={max_tokens} prompt_len={len(prompt)}")
		try:
			message = self._sdk.messages.create(
				model=self.model,
				max_tokens=max_tokens,
				messages=[{"role": "user", "content": prompt}],
			)
		except anthropic.APITimeoutError as e:
			raise AnthropicError(f"Request to Anthropic API timed out: {e}", code="TIMEOUT") from e
		except anthropic.APIConnectionError as e:
			raise AnthropicError(f"Network error contacting Anthropic API: {e}", code="NETWORK") from e
		except (anthropic.AuthenticationError, anthropic.PermissionDeniedError) as e:
			raise AnthropicError(f"Anthropic API error: HTTP {e.status_code}: {e.message}", code="UNAUTHORIZED") from e
		except anthropic.RateLimitError as e:
			raise AnthropicError(f"Anthropic API error: HTTP {e.status_code}: {e.message}", code="RATE_LIMIT") from e
		except anthropic.APIStatusError as e:
			raise AnthropicError(
				f"Anthropic API error: HTTP {e.status_code}: {e.message}",
				code=_code_for_status(e.status_code),
			) from e
		except anthropic.APIResponseValidationError as e:
			raise AnthropicError(f"Invalid response from Anthropic API: {e.message}", code="BAD_RESPONSE") from e
		except anthropic.APIError as e:
			raise AnthropicError(f"Anthropic API error: {e.message}") from e

		content = list(getattr(message, "content", None) or [])
		if not content:
			raise AnthropicError("Missing content in Anthropic API response", code="BAD_RESPONSE")
		logger.debug(f"✓ Received {len(content)} content block(s), stop_reason={getattr(message, 'stop_reason', None)}")
		return content

	def close(self) -> None:
		self._sdk.close()


__all__ = ["AnthropicClient", "AnthropicError"]
