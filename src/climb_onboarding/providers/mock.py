"""
Mock provider for testing

Returns canned quest JSON without making API calls. Output is
deterministic so tests can assert on it.
"""

import asyncio
import json
from dataclasses import dataclass
from typing import Optional, Callable

from .base import ModelProvider, ModelResponse, ProviderError, TokenUsage, ToolCall, ToolDefinition


MOCK_QUESTS = [
    {
        "title": "Read one chapter and write three questions",
        "pattern": "read_note_q",
        "minutes": 25,
        "difficulty": 0.4,
        "deliverable": "Chapter notes with three open questions",
        "criteria": ["Notes cover the main idea", "Three questions written"],
        "steps": ["Read", "Note", "Ask"],
        "tags": ["reading"],
    },
    {
        "title": "Build a tiny example",
        "pattern": "build_micro",
        "minutes": 35,
        "difficulty": 0.6,
        "deliverable": "A working example you can show",
        "criteria": ["It runs"],
    },
    {
        "title": "Drill the key terms",
        "pattern": "flashcards",
        "minutes": 20,
        "difficulty": 0.3,
        "deliverable": "Ten flashcards reviewed twice",
        "criteria": ["Ten cards made"],
    },
]


def mock_quest_payload(count: int = 3) -> dict:
    """Canned quests, repeated as needed to reach `count`."""
    quests = [dict(MOCK_QUESTS[i % len(MOCK_QUESTS)]) for i in range(count)]
    return {"quests": quests}


@dataclass
class MockProvider(ModelProvider):
    """
    Mock provider for testing.

    Can be configured with a fixed response, a response generator, or to
    fail every call. With tools_enabled it also answers tool calls with
    the same payload.
    """

    _name: str = "mock"
    _default_model: str = "mock-model-v1"
    fixed_response: Optional[str] = None
    response_generator: Optional[Callable[[str], str]] = None
    delay_seconds: float = 0.0
    fail: bool = False
    tools_enabled: bool = False
    token_count: int = 100

    @property
    def name(self) -> str:
        return self._name

    @property
    def default_model(self) -> str:
        return self._default_model

    @property
    def supports_tools(self) -> bool:
        return self.tools_enabled

    async def _content(self, prompt: str) -> str:
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)
        if self.fail:
            raise ProviderError("Simulated mock provider failure")

        if self.fixed_response is not None:
            return self.fixed_response
        if self.response_generator is not None:
            return self.response_generator(prompt)
        return json.dumps(mock_quest_payload(), indent=2)

    def _usage(self, prompt: str) -> TokenUsage:
        return TokenUsage(input_tokens=len(prompt.split()) * 2, output_tokens=self.token_count)

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
        content = await self._content(prompt)
        return ModelResponse(
            content=content,
            model=model or self._default_model,
            provider=self.name,
            usage=self._usage(prompt),
        )

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
        if not self.tools_enabled:
            return await super().generate_with_tool(prompt, tool, system=system, model=model)

        content = await self._content(prompt)
        try:
            arguments = json.loads(content)
        except json.JSONDecodeError:
            arguments = None
        if not isinstance(arguments, dict):
            # Behaves like a model that answered in prose instead of calling the tool
            return ModelResponse(
                content=content,
                model=model or self._default_model,
                provider=self.name,
                usage=self._usage(prompt),
            )

        return ModelResponse(
            content="",
            model=model or self._default_model,
            provider=self.name,
            usage=self._usage(prompt),
            tool_calls=[ToolCall(name=tool.name, arguments=arguments)],
        )
