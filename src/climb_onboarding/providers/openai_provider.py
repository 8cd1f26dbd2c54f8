"""
OpenAI provider

Uses the openai SDK's chat completions API. A custom base_url makes it
work with any OpenAI-compatible endpoint.
"""

import json
import logging
import os
from typing import Optional

from .base import (
    ModelProvider, ModelResponse, AuthenticationError, TokenUsage,
    ToolCall, ToolDefinition, classify_error,
)
from .tools import to_openai_tool

logger = logging.getLogger(__name__)


class OpenAIProvider(ModelProvider):
    """
    OpenAI chat completions provider.

    API key is read from:
    1. Constructor argument
    2. OPENAI_API_KEY environment variable
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        default_model: str = "gpt-4o-mini",
        base_url: Optional[str] = None,
    ):
        self._api_key = api_key or os.getenv("OPENAI_API_KEY")
        self._default_model = default_model
        self._base_url = base_url or os.getenv("OPENAI_BASE_URL")
        self._client = None

    def _get_client(self):
        if self._client is None:
            if not self._api_key:
                raise AuthenticationError(
                    "No OpenAI API key provided. Set OPENAI_API_KEY or pass api_key to constructor."
                )
            from openai import AsyncOpenAI
            self._client = AsyncOpenAI(api_key=self._api_key, base_url=self._base_url)
        return self._client

    @property
    def name(self) -> str:
        return "openai"

    @property
    def default_model(self) -> str:
        return self._default_model

    @property
    def supports_tools(self) -> bool:
        return True

    @staticmethod
    def _messages(prompt: str, system: Optional[str]) -> list:
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})
        return messages

    def _to_response(self, response) -> ModelResponse:
        content = ""
        tool_calls = []

        if response.choices and response.choices[0].message:
            msg = response.choices[0].message
            content = msg.content or ""

            for tc in msg.tool_calls or []:
                try:
                    args = json.loads(tc.function.arguments)
                except json.JSONDecodeError:
                    logger.warning("Unparseable tool arguments from %s", tc.function.name)
                    args = {"raw": tc.function.arguments}
                tool_calls.append(ToolCall(name=tc.function.name, arguments=args))

        usage = TokenUsage()
        if response.usage:
            usage = TokenUsage(
                input_tokens=response.usage.prompt_tokens,
                output_tokens=response.usage.completion_tokens,
            )

        return ModelResponse(
            content=content,
            model=response.model,
            provider=self.name,
            usage=usage,
            tool_calls=tool_calls,
        )

    async def _create(self, request: dict) -> ModelResponse:
        client = self._get_client()
        try:
            response = await client.chat.completions.create(**request)
        except Exception as e:
            raise classify_error("OpenAI", e) from e
        return self._to_response(response)

    def _request(self, prompt, system, model, max_tokens, temperature) -> dict:
        return {
            "model": model or self._default_model,
            "messages": self._messages(prompt, system),
            "max_tokens": max_tokens,
            "temperature": temperature,
        }

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
        return await self._create(self._request(prompt, system, model, max_tokens, temperature))

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
        request["tools"] = [to_openai_tool(tool)]
        request["tool_choice"] = {"type": "function", "function": {"name": tool.name}}
        return await self._create(request)
