"""Typed async client for OpenAI-compatible HTTP APIs.

Design principles:
- Typed in, typed out: requests are validated pydantic models
- Omission, not null: absent optional fields never reach the wire
- Transport only: one exchange per call, no retries
- Three failure kinds: TransportError, HttpError, DecodeError

Example:
    >>> from llm_sdk import ChatCompletionMessage, ChatCompletionRequest, LLMSdk
    >>>
    >>> sdk = LLMSdk("https://api.openai.com/v1", api_key)
    >>> req = ChatCompletionRequest.new([ChatCompletionMessage.user("Hello!")])
    >>> res = await sdk.chat_completion(req)
    >>> print(res.message.content)
"""

# Schema types and builders
from .api import (
    AudioResponseFormat,
    ChatCompletionMessage,
    ChatCompletionRequest,
    ChatCompletionRequestBuilder,
    ChatCompletionResponse,
    CreateImageRequest,
    CreateImageRequestBuilder,
    CreateImageResponse,
    EmbeddingRequest,
    EmbeddingRequestBuilder,
    EmbeddingResponse,
    Request,
    Response,
    Role,
    SpeechRequest,
    SpeechRequestBuilder,
    ToolCall,
    ToolDefinition,
    TranscriptionRequest,
    TranscriptionRequestBuilder,
    TranscriptionResponse,
    TranslationRequest,
    TranslationRequestBuilder,
    TranslationResponse,
)

# Transport
from .client import LLMSdk
from .config import DEFAULT_BASE_URL, ClientConfig

# Errors
from .errors import DecodeError, HttpError, SdkError, TransportError
from .factory import create_client

# Observability
from .observability import MetricsHook, NoOpMetricsHook

__all__ = [
    # Schema types and builders
    "AudioResponseFormat",
    "ChatCompletionMessage",
    "ChatCompletionRequest",
    "ChatCompletionRequestBuilder",
    "ChatCompletionResponse",
    "CreateImageRequest",
    "CreateImageRequestBuilder",
    "CreateImageResponse",
    "EmbeddingRequest",
    "EmbeddingRequestBuilder",
    "EmbeddingResponse",
    "Request",
    "Response",
    "Role",
    "SpeechRequest",
    "SpeechRequestBuilder",
    "ToolCall",
    "ToolDefinition",
    "TranscriptionRequest",
    "TranscriptionRequestBuilder",
    "TranscriptionResponse",
    "TranslationRequest",
    "TranslationRequestBuilder",
    "TranslationResponse",
    # Transport
    "DEFAULT_BASE_URL",
    "ClientConfig",
    "LLMSdk",
    "create_client",
    # Errors
    "DecodeError",
    "HttpError",
    "SdkError",
    "TransportError",
    # Observability
    "MetricsHook",
    "NoOpMetricsHook",
]
