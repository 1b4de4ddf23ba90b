"""Unit tests for the Anthropic Messages API client."""

from unittest.mock import Mock

import anthropic
import httpx
import pytest
from anthropic.types import TextBlock

from clients.anthropic_client import AnthropicClient, AnthropicError

REQUEST = httpx.Request("POST", "https://api.anthropic.com/v1/messages")


def _status_error(cls, status_code, message):
    return cls(message, response=httpx.Response(status_code, request=REQUEST), body=None)


class TestAnthropicClient:
    """Test cases for AnthropicClient."""

    def setup_method(self):
        self.sdk = Mock()

    def test_requires_api_key(self):
        with pytest.raises(AnthropicError) as exc_info:
            AnthropicClient("", sdk_client=self.sdk)

        assert exc_info.value.code == "UNAUTHORIZED"

    def test_builds_sdk_client_without_retries(self, monkeypatch):
        sdk_cls = Mock()
        monkeypatch.setattr(anthropic, "Anthropic", sdk_cls)

        AnthropicClient("sk-ant-test", timeout_s=30)

        kwargs = sdk_cls.call_args.kwargs
        assert kwargs["api_key"] == "sk-ant-test"
        assert kwargs["timeout"] == 30
        assert kwargs["max_retries"] == 0

    def test_create_message_sends_single_user_turn(self):
        content = [TextBlock(type="text", text="# Title")]
        self.sdk.messages.create.return_value = Mock(content=content, stop_reason="end_turn")
        client = AnthropicClient("sk-ant-test", model="claude-3-5-sonnet-20241022", sdk_client=self.sdk)

        result = client.create_message("describe this", max_tokens=4000)

        assert result == content
        self.sdk.messages.create.assert_called_once_with(
            model="claude-3-5-sonnet-20241022",
            max_tokens=4000,
            messages=[{"role": "user", "content": "describe this"}],
        )

    def test_rate_limit_error(self):
        self.sdk.messages.create.side_effect = _status_error(anthropic.RateLimitError, 429, "slow down")

        with pytest.raises(AnthropicError) as exc_info:
            AnthropicClient("k", sdk_client=self.sdk).create_message("p")

        assert exc_info.value.code == "RATE_LIMIT"
        assert str(exc_info.value) == "Anthropic API error: HTTP 429: slow down"

    def test_authentication_error(self):
        self.sdk.messages.create.side_effect = _status_error(anthropic.AuthenticationError, 401, "invalid x-api-key")

        with pytest.raises(AnthropicError) as exc_info:
            AnthropicClient("k", sdk_client=self.sdk).create_message("p")

        assert exc_info.value.code == "UNAUTHORIZED"
        assert "invalid x-api-key" in str(exc_info.value)

    def test_server_error_maps_to_network(self):
        self.sdk.messages.create.side_effect = _status_error(anthropic.InternalServerError, 529, "overloaded")

        with pytest.raises(AnthropicError) as exc_info:
            AnthropicClient("k", sdk_client=self.sdk).create_message("p")

        assert exc_info.value.code == "NETWORK"

    def test_timeout(self):
        self.sdk.messages.create.side_effect = anthropic.APITimeoutError(request=REQUEST)

        with pytest.raises(AnthropicError) as exc_info:
            AnthropicClient("k", sdk_client=self.sdk).create_message("p")

        assert exc_info.value.code == "TIMEOUT"

    def test_connection_error(self):
        self.sdk.messages.create.side_effect = anthropic.APIConnectionError(request=REQUEST)

        with pytest.raises(AnthropicError) as exc_info:
            AnthropicClient("k", sdk_client=self.sdk).create_message("p")

        assert exc_info.value.code == "NETWORK"

    def test_empty_content_is_bad_response(self):
        self.sdk.messages.create.return_value = Mock(content=[], stop_reason="end_turn")

        with pytest.raises(AnthropicError) as exc_info:
            AnthropicClient("k", sdk_client=self.sdk).create_message("p")

        assert exc_info.value.code == "BAD_RESPONSE"

    def test_close_closes_sdk_client(self):
        AnthropicClient("k", sdk_client=self.sdk).close()

        self.sdk.close.assert_called_once()
