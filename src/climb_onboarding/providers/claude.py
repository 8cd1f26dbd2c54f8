"""
Claude (Anthropic) provider

Uses the anthropic SDK, including its tools API.
"""

import logging
import os
from typing import Optional

from .base import (
    ModelProvider, ModelResponse, AuthenticationError, TokenUsage,
    ToolCall, ToolDefinition, classify_error,
)
from .tools import to_anthropic_tool

logger = logging.getLogger(__name__)


class ClaudeProvider(ModelProvider):
    """
    Anthropic Claude provider.

    API key comes from the constructor or ANTHROPIC_API_KEY.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        default_model: str = "claude-sonnet-4-20250514",
    ):
        self._api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        self._default_model = default_model
        self._client = None

    def _get_client(self):
        """Create the async client on first use."""
        if self._client is None:
            if not self._api_key:
                raise AuthenticationError(
                    "No Anthropic API key provided. Set ANTHROPIC_API_KEY or pass api_key to constructor."
                )
            import anthropic
            self._client = anthropic.AsyncAnthropic(api_key=self._api_key)
        return self._client

    @property
    def name(self) -> str:
        return "claude"

    @property
    def default_model(self) -> str:
        return self._default_model

    @property
    def supports_tools(self) -> bool:
        return True

    def _request(self, prompt, system, model, max_tokens, temperature) -> dict:
        request = {
            "model": model or self._default_model,
            "max_tokens": max_tokens,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            request["system"] = system
        if temperature is not None:
            # Claude accepts 0-1 only
            request["temperature"] = min(1.0, max(0.0, temperature))
        return request

    def _to_response(self, response) -> ModelResponse:
        content = ""
        tool_calls = []
        for block in response.content:
            if getattr(block, "type", None) == "tool_use":
                tool_calls.append(ToolCall(name=block.name, arguments=block.input))
            elif hasattr(block, "text"):
                content += block.text

        return ModelResponse(
            content=content,
            model=response.model,
            provider=self.name,
            usage=TokenUsage(
                input_tokens=response.usage.input_tokens,
                output_tokens=response.usage.output_tokens,
            ),
            tool_calls=tool_calls,
        )

    async def _create(self, request: dict) -> ModelResponse:
        client = self._get_client()
        try:
            response = await client.messages.create(**request)
        except Exception as e:
            raise classify_error("Claude", e) from e
        return self._to_response(response)

    async def generate(
        self,
        prompt: str,
        *,
        system: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: int = 2048,
        temperature: float = 0.7,
        **kwargs
    ) -> ModelResponse:
        request = self._request(prompt, system, model, max_tokens, temperature)
        logger.debug("claude request model=%s", request["model"])
        return await self._create(request)

    async def generate_with_tool(
        self,
        prompt: str,
        tool: ToolDefinition,
        *,
        system: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: int = 2048,
        temperature: float = 0.7,
        **kwargs
    ) -> ModelResponse:
        request = self._request(prompt, system, model, max_tokens, temperature)
        request["tools"] = [to_anthropic_tool(tool)]
        request["tool_choice"] = {"type": "tool", "name": tool.name}
        logger.debug("claude tool request model=%s tool=%s", request["model"], tool.name)
        return await self._create(request)
