"""
Tests for AI model providers.
"""

import json
from types import SimpleNamespace

import pytest

from climb_onboarding.providers import (
    AuthenticationError,
    ClaudeProvider,
    MockProvider,
    ModelResponse,
    OpenAIProvider,
    ProviderError,
    QUEST_TOOL,
    RateLimitError,
    ToolCallError,
    TokenUsage,
    ToolCall,
    get_provider,
    quest_tool,
    to_anthropic_tool,
    to_openai_tool,
)
from climb_onboarding.providers.base import classify_error
from climb_onboarding.providers.mock import MOCK_QUESTS, mock_quest_payload
from climb_onboarding.quests.schema import Pattern


class TestMockProvider:
    """Tests for MockProvider."""

    @pytest.mark.asyncio
    async def test_basic_generate(self):
        provider = MockProvider(fixed_response="Hello, world!")
        response = await provider.generate("Test prompt")

        assert response.content == "Hello, world!"
        assert response.provider == "mock"
        assert response.model == "mock-model-v1"

    @pytest.mark.asyncio
    async def test_default_is_quest_json(self):
        """Without configuration the mock returns canned quests."""
        response = await MockProvider().generate("Create quests")
        assert json.loads(response.content) == {"quests": MOCK_QUESTS}

    @pytest.mark.asyncio
    async def test_deterministic(self):
        provider = MockProvider()
        first = await provider.generate("x")
        second = await provider.generate("x")
        assert first.content == second.content

    @pytest.mark.asyncio
    async def test_custom_response_generator(self):
        provider = MockProvider(response_generator=lambda p: f"Response to: {p}")
        response = await provider.generate("Hello")
        assert response.content == "Response to: Hello"

    @pytest.mark.asyncio
    async def test_simulated_failure(self):
        with pytest.raises(ProviderError):
            await MockProvider(fail=True).generate("Test")

    @pytest.mark.asyncio
    async def test_tools_disabled(self):
        """Without tools_enabled, tool calls are refused."""
        provider = MockProvider()
        assert not provider.supports_tools
        with pytest.raises(ToolCallError):
            await provider.generate_with_tool("Test", QUEST_TOOL)

    @pytest.mark.asyncio
    async def test_tool_call(self):
        provider = MockProvider(tools_enabled=True)
        response = await provider.generate_with_tool("Test", QUEST_TOOL)

        arguments = response.tool_arguments(QUEST_TOOL.name)
        assert arguments["quests"][0]["pattern"] == "read_note_q"

    def test_payload_count(self):
        assert len(mock_quest_payload(5)["quests"]) == 5


class TestModelResponse:
    """Tests for ModelResponse."""

    def test_default_usage(self):
        response = ModelResponse(content="", model="m", provider="p")
        assert response.usage.to_dict() == {"input_tokens": 0, "output_tokens": 0}

    def test_usage_adds_up(self):
        total = TokenUsage(10, 5) + TokenUsage(3, 2)
        assert total == TokenUsage(input_tokens=13, output_tokens=7)

    def test_tool_arguments(self):
        call = ToolCall(name="propose_quests", arguments={"quests": []})
        response = ModelResponse(content="", model="m", provider="p", tool_calls=[call])
        assert response.tool_arguments("propose_quests") == {"quests": []}
        assert response.tool_arguments("other") is None


class TestClassifyError:
    """Tests for SDK error translation."""

    def test_rate_limit(self):
        assert isinstance(classify_error("Claude", Exception("Error 429")), RateLimitError)

    def test_auth(self):
        assert isinstance(classify_error("OpenAI", Exception("Invalid API key")), AuthenticationError)

    def test_generic(self):
        error = classify_error("OpenAI", Exception("boom"))
        assert type(error) is ProviderError
        assert "boom" in str(error)


class TestClaudeProvider:
    """Tests for ClaudeProvider without network access."""

    @pytest.mark.asyncio
    async def test_missing_key(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        with pytest.raises(AuthenticationError):
            await ClaudeProvider().generate("hi")

    def test_response_parsing(self):
        raw = SimpleNamespace(
            model="claude-test",
            usage=SimpleNamespace(input_tokens=12, output_tokens=34),
            content=[
                SimpleNamespace(type="text", text="Here are your quests."),
                SimpleNamespace(type="tool_use", name="propose_quests", input={"quests": []}),
            ],
        )
        response = ClaudeProvider(api_key="test")._to_response(raw)

        assert response.content == "Here are your quests."
        assert response.tool_arguments("propose_quests") == {"quests": []}
        assert response.usage == TokenUsage(input_tokens=12, output_tokens=34)

    @pytest.mark.asyncio
    async def test_forced_tool_request(self):
        seen = {}

        async def create(**request):
            seen.update(request)
            return SimpleNamespace(
                model="claude-test",
                usage=SimpleNamespace(input_tokens=1, output_tokens=2),
                content=[SimpleNamespace(type="tool_use", name="propose_quests", input={"quests": []})],
            )

        provider = ClaudeProvider(api_key="test")
        provider._client = SimpleNamespace(messages=SimpleNamespace(create=create))
        response = await provider.generate_with_tool("Plan my day", quest_tool(20, 40), system="Be brief")

        assert seen["tool_choice"] == {"type": "tool", "name": "propose_quests"}
        assert seen["tools"][0]["input_schema"]["properties"]["quests"]["items"]["properties"]["minutes"]["maximum"] == 40
        assert seen["system"] == "Be brief"
        assert response.tool_arguments("propose_quests") == {"quests": []}

    @pytest.mark.asyncio
    async def test_sdk_errors_are_translated(self):
        async def create(**request):
            raise RuntimeError("Error code: 429 - rate limit")

        provider = ClaudeProvider(api_key="test")
        provider._client = SimpleNamespace(messages=SimpleNamespace(create=create))
        with pytest.raises(RateLimitError):
            await provider.generate("hi")

    def test_properties(self):
        provider = ClaudeProvider(api_key="test")
        assert provider.name == "claude"
        assert provider.supports_tools


class TestOpenAIProvider:
    """Tests for OpenAIProvider without network access."""

    @pytest.mark.asyncio
    async def test_missing_key(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        with pytest.raises(AuthenticationError):
            await OpenAIProvider().generate("hi")

    @pytest.mark.asyncio
    async def test_forced_tool_request(self):
        seen = {}

        async def create(**request):
            seen.update(request)
            return SimpleNamespace(model="gpt-test", usage=None, choices=[])

        provider = OpenAIProvider(api_key="test")
        provider._client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
        response = await provider.generate_with_tool("Plan my day", QUEST_TOOL, system="Be brief")

        assert seen["tool_choice"] == {"type": "function", "function": {"name": "propose_quests"}}
        assert seen["messages"][0] == {"role": "system", "content": "Be brief"}
        assert response.tool_arguments("propose_quests") is None

    @pytest.mark.asyncio
    async def test_sdk_errors_are_translated(self):
        async def create(**request):
            raise RuntimeError("Incorrect API key provided")

        provider = OpenAIProvider(api_key="test")
        provider._client = SimpleNamespace(chat=SimpleNamespace(completions=SimpleNamespace(create=create)))
        with pytest.raises(AuthenticationError):
            await provider.generate("hi")

    def test_response_parsing(self):
        tool_call = SimpleNamespace(
            function=SimpleNamespace(name="propose_quests", arguments='{"quests": [{"title": "x"}]}')
        )
        raw = SimpleNamespace(
            model="gpt-test",
            usage=SimpleNamespace(prompt_tokens=7, completion_tokens=3),
            choices=[SimpleNamespace(message=SimpleNamespace(content=None, tool_calls=[tool_call]))],
        )
        response = OpenAIProvider(api_key="test")._to_response(raw)

        assert response.content == ""
        assert response.tool_calls[0].arguments == {"quests": [{"title": "x"}]}
        assert response.usage.input_tokens == 7

    def test_bad_tool_arguments(self):
        tool_call = SimpleNamespace(function=SimpleNamespace(name="propose_quests", arguments="{oops"))
        raw = SimpleNamespace(
            model="gpt-test",
            usage=None,
            choices=[SimpleNamespace(message=SimpleNamespace(content="", tool_calls=[tool_call]))],
        )
        response = OpenAIProvider(api_key="test")._to_response(raw)
        assert response.tool_calls[0].arguments == {"raw": "{oops"}
        assert response.usage == TokenUsage()


class TestTools:
    """Tests for tool definitions and converters."""

    def test_quest_tool_patterns(self):
        schema = QUEST_TOOL.parameters["properties"]["quests"]["items"]["properties"]["pattern"]
        assert set(schema["enum"]) == Pattern.values()

    def test_quest_tool_time_box(self):
        """The minutes bounds follow the configured constraints."""
        items = quest_tool(10, 60).parameters["properties"]["quests"]["items"]
        assert items["properties"]["minutes"]["minimum"] == 10
        assert items["properties"]["minutes"]["maximum"] == 60

        default = QUEST_TOOL.parameters["properties"]["quests"]["items"]["properties"]["minutes"]
        assert (default["minimum"], default["maximum"]) == (15, 45)

    def test_quest_tool_tags(self):
        items = QUEST_TOOL.parameters["properties"]["quests"]["items"]
        assert items["properties"]["tags"]["type"] == "array"
        assert "tags" not in items["required"]

    def test_anthropic_format(self):
        tool = to_anthropic_tool(QUEST_TOOL)
        assert tool["name"] == "propose_quests"
        assert tool["input_schema"] is QUEST_TOOL.parameters

    def test_openai_format(self):
        tool = to_openai_tool(QUEST_TOOL)
        assert tool["type"] == "function"
        assert tool["function"]["parameters"] is QUEST_TOOL.parameters


class TestGetProvider:
    """Tests for the provider factory."""

    def test_known(self):
        assert isinstance(get_provider("mock"), MockProvider)
        assert isinstance(get_provider("openai", api_key="k"), OpenAIProvider)
        assert isinstance(get_provider("claude", api_key="k"), ClaudeProvider)

    def test_unknown(self):
        with pytest.raises(ValueError, match="Unknown provider"):
            get_provider("cloudflare")
