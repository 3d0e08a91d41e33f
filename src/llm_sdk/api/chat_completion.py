# src/llm_sdk/api/chat_completion.py

import json
from collections.abc import Sequence
from enum import Enum
from typing import Any, ClassVar, Literal

from pydantic import BaseModel, Field, field_validator

from llm_sdk.errors import DecodeError

from .base import RequestBuilder, WireModel, WireRequest, WireResponse


class Role(str, Enum):
    """Message role in a conversation."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class FunctionCall(WireResponse):
    name: str
    arguments: str  # JSON-encoded, exactly as the model produced it


class ToolCall(WireResponse):
    """Tool call emitted by the model.

    ``function.name`` refers to a ``ToolDefinition`` by name only.
    """

    id: str
    type: Literal["function"] = "function"
    function: FunctionCall

    def parse_arguments(self) -> dict[str, Any]:
        """Decode the JSON arguments string.

        Raises:
            DecodeError: if the model produced malformed JSON.
        """
        try:
            arguments = json.loads(self.function.arguments)
        except json.JSONDecodeError as e:
            raise DecodeError(
                f"Tool call {self.id} has malformed arguments: {e}",
                body=self.function.arguments.encode(),
            ) from e
        if not isinstance(arguments, dict):
            raise DecodeError(
                f"Tool call {self.id} arguments are not a JSON object",
                body=self.function.arguments.encode(),
            )
        return arguments


class ChatCompletionMessage(WireModel):
    """A single message in the conversation sent to the model."""

    role: Role
    content: str | None = None
    name: str | None = None
    tool_calls: list[ToolCall] | None = None  # assistant only
    tool_call_id: str | None = None  # Required when role=TOOL

    @field_validator("name")
    @classmethod
    def empty_name_is_absent(cls, value: str | None) -> str | None:
        return value or None

    @classmethod
    def system(cls, content: str, name: str | None = None) -> "ChatCompletionMessage":
        return cls(role=Role.SYSTEM, content=content, name=name)

    @classmethod
    def user(cls, content: str, name: str | None = None) -> "ChatCompletionMessage":
        return cls(role=Role.USER, content=content, name=name)

    @classmethod
    def assistant(
        cls,
        content: str | None,
        name: str | None = None,
        tool_calls: list[ToolCall] | None = None,
    ) -> "ChatCompletionMessage":
        return cls(
            role=Role.ASSISTANT, content=content, name=name, tool_calls=tool_calls
        )

    @classmethod
    def tool(cls, content: str, tool_call_id: str) -> "ChatCompletionMessage":
        return cls(role=Role.TOOL, content=content, tool_call_id=tool_call_id)


class FunctionDefinition(WireModel):
    name: str
    description: str | None = None
    parameters: dict[str, Any] | None = None  # JSON Schema


class ToolDefinition(WireModel):
    """A function the model may call."""

    type: Literal["function"] = "function"
    function: FunctionDefinition

    @classmethod
    def new(
        cls,
        name: str,
        parameters: dict[str, Any],
        description: str | None = None,
    ) -> "ToolDefinition":
        return cls(
            function=FunctionDefinition(
                name=name, description=description, parameters=parameters
            )
        )

    @classmethod
    def from_model(
        cls, name: str, description: str, input_schema: "type[BaseModel]"
    ) -> "ToolDefinition":
        """Build a definition whose parameters are a pydantic model's JSON schema."""
        return cls.new(name, input_schema.model_json_schema(), description)

    @property
    def name(self) -> str:
        return self.function.name


class ToolChoiceMode(str, Enum):
    NONE = "none"
    AUTO = "auto"
    REQUIRED = "required"


class NamedFunction(WireModel):
    name: str


class NamedToolChoice(WireModel):
    """Forces the model to call one specific function."""

    type: Literal["function"] = "function"
    function: NamedFunction


class ResponseFormatType(str, Enum):
    TEXT = "text"
    JSON_OBJECT = "json_object"


class ResponseFormat(WireModel):
    type: ResponseFormatType


class ChatCompletionRequest(WireRequest):
    operation: ClassVar[str] = "chat_completion"
    path: ClassVar[str] = "/chat/completions"

    messages: list[ChatCompletionMessage] = Field(min_length=1)
    model: str = "gpt-4o"
    frequency_penalty: float | None = None
    presence_penalty: float | None = None
    max_tokens: int | None = None
    n: int | None = None
    response_format: ResponseFormat | None = None
    seed: int | None = None
    stop: list[str] | None = None
    temperature: float | None = None
    top_p: float | None = None
    tools: list[ToolDefinition] | None = None
    tool_choice: ToolChoiceMode | NamedToolChoice | None = None
    user: str | None = None

    @classmethod
    def new(
        cls, messages: Sequence[ChatCompletionMessage]
    ) -> "ChatCompletionRequest":
        """New chat completion request from a message list, defaults elsewhere."""
        return ChatCompletionRequestBuilder(messages).build()


class ChatCompletionRequestBuilder(RequestBuilder[ChatCompletionRequest]):
    """Fluent builder for ``ChatCompletionRequest``.

    Example:
        >>> req = (
        ...     ChatCompletionRequestBuilder([ChatCompletionMessage.user("Hi")])
        ...     .model("gpt-4o-mini")
        ...     .temperature(0.2)
        ...     .stop("\\n\\n")
        ...     .build()
        ... )
    """

    request_type = ChatCompletionRequest

    def __init__(self, messages: Sequence[ChatCompletionMessage]) -> None:
        super().__init__(messages=list(messages))

    def messages(
        self, *messages: ChatCompletionMessage
    ) -> "ChatCompletionRequestBuilder":
        return self._extend("messages", messages)

    def model(self, model: str) -> "ChatCompletionRequestBuilder":
        return self._set("model", model)

    def frequency_penalty(self, value: float) -> "ChatCompletionRequestBuilder":
        return self._set("frequency_penalty", value)

    def presence_penalty(self, value: float) -> "ChatCompletionRequestBuilder":
        return self._set("presence_penalty", value)

    def max_tokens(self, value: int) -> "ChatCompletionRequestBuilder":
        return self._set("max_tokens", value)

    def n(self, value: int) -> "ChatCompletionRequestBuilder":
        return self._set("n", value)

    def response_format(
        self, value: ResponseFormatType
    ) -> "ChatCompletionRequestBuilder":
        return self._set("response_format", ResponseFormat(type=value))

    def seed(self, value: int) -> "ChatCompletionRequestBuilder":
        return self._set("seed", value)

    def stop(self, *sequences: str) -> "ChatCompletionRequestBuilder":
        return self._extend("stop", sequences)

    def replace_stop(self, sequences: Sequence[str]) -> "ChatCompletionRequestBuilder":
        return self._set("stop", list(sequences))

    def temperature(self, value: float) -> "ChatCompletionRequestBuilder":
        return self._set("temperature", value)

    def top_p(self, value: float) -> "ChatCompletionRequestBuilder":
        return self._set("top_p", value)

    def tools(self, *tools: ToolDefinition) -> "ChatCompletionRequestBuilder":
        return self._extend("tools", tools)

    def replace_tools(
        self, tools: Sequence[ToolDefinition]
    ) -> "ChatCompletionRequestBuilder":
        return self._set("tools", list(tools))

    def tool_choice(self, mode: ToolChoiceMode) -> "ChatCompletionRequestBuilder":
        return self._set("tool_choice", mode)

    def tool_choice_function(self, name: str) -> "ChatCompletionRequestBuilder":
        return self._set(
            "tool_choice", NamedToolChoice(function=NamedFunction(name=name))
        )

    def user(self, user: str) -> "ChatCompletionRequestBuilder":
        return self._set("user", user)


class ResponseMessage(WireResponse):
    role: Role = Role.ASSISTANT
    content: str | None = None
    tool_calls: list[ToolCall] | None = None

    def to_message(self) -> ChatCompletionMessage:
        """Convert to a request message, for appending to the conversation."""
        return ChatCompletionMessage(
            role=self.role, content=self.content, tool_calls=self.tool_calls
        )


class ChatCompletionChoice(WireResponse):
    index: int
    message: ResponseMessage
    finish_reason: str | None = None


class ChatCompletionUsage(WireResponse):
    """Token usage for a completion."""

    prompt_tokens: int
    completion_tokens: int = 0
    total_tokens: int


class ChatCompletionResponse(WireResponse):
    id: str
    object: str = "chat.completion"
    created: int
    model: str
    system_fingerprint: str | None = None
    choices: list[ChatCompletionChoice]
    usage: ChatCompletionUsage

    @property
    def message(self) -> ResponseMessage | None:
        """Message of the first choice, if any."""
        return self.choices[0].message if self.choices else None
