"""
Model provider interface

The quest generator needs two things from a model: a plain completion
(for the JSON prompt) and, where the API has it, a forced call to the
quest tool. ModelProvider covers exactly those.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional


class ProviderError(Exception):
    """A model call failed."""


class RateLimitError(ProviderError):
    pass


class AuthenticationError(ProviderError):
    pass


class ToolCallError(ProviderError):
    """The provider can't do tool calls."""


@dataclass(frozen=True)
class TokenUsage:
    input_tokens: int = 0
    output_tokens: int = 0

    def __add__(self, other: "TokenUsage") -> "TokenUsage":
        return TokenUsage(
            input_tokens=self.input_tokens + other.input_tokens,
            output_tokens=self.output_tokens + other.output_tokens,
        )

    def to_dict(self) -> dict:
        return {"input_tokens": self.input_tokens, "output_tokens": self.output_tokens}


@dataclass(frozen=True)
class ToolDefinition:
    """A function the model is asked to call, with a JSON Schema for its arguments."""
    name: str
    description: str
    parameters: dict


@dataclass(frozen=True)
class ToolCall:
    name: str
    arguments: dict


@dataclass
class ModelResponse:
    """What came back from one model call."""
    content: str
    model: str
    provider: str
    usage: TokenUsage = field(default_factory=TokenUsage)
    tool_calls: list[ToolCall] = field(default_factory=list)

    def tool_arguments(self, name: str) -> Optional[dict]:
        """Arguments of the first call to `name`, or None if the model didn't call it."""
        for call in self.tool_calls:
            if call.name == name:
                return call.arguments
        return None


def classify_error(provider: str, error: Exception) -> ProviderError:
    """
    Map an SDK exception onto the ProviderError hierarchy.

    The anthropic and openai SDKs raise different types, so the message
    text decides.
    """
    text = str(error).lower()
    if "rate limit" in text or "429" in text:
        return RateLimitError(f"{provider} rate limit exceeded: {error}")
    if "auth" in text or "401" in text or "api key" in text:
        return AuthenticationError(f"{provider} authentication failed: {error}")
    return ProviderError(f"{provider} API error: {error}")


class ModelProvider(ABC):
    """A model backend the quest generator can talk to."""

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def default_model(self) -> str:
        pass

    @property
    def supports_tools(self) -> bool:
        return False

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        *,
        system: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: int = 2048,
        temperature: float = 0.7,
        **kwargs: Any
    ) -> ModelResponse:
        """
        Send one prompt and return the text reply.

        Raises:
            ProviderError: On API errors (RateLimitError, AuthenticationError)
        """
        pass

    async def generate_with_tool(
        self,
        prompt: str,
        tool: ToolDefinition,
        *,
        system: Optional[str] = None,
        model: Optional[str] = None,
        max_tokens: int = 2048,
        temperature: float = 0.7,
        **kwargs: Any
    ) -> ModelResponse:
        """
        Send one prompt and require the model to answer by calling `tool`.

        Models may still reply in prose; callers check tool_arguments().

        Raises:
            ToolCallError: If the provider has no tool calling
        """
        raise ToolCallError(f"{self.name} provider does not support tool calling")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(model={self.default_model!r})"
