# src/llm_sdk/api/__init__.py

"""Schema types and request builders, one module per operation."""

from .base import FilePart, JsonBody, MultipartBody, RequestBody
from .chat_completion import (
    ChatCompletionChoice,
    ChatCompletionMessage,
    ChatCompletionRequest,
    ChatCompletionRequestBuilder,
    ChatCompletionResponse,
    ChatCompletionUsage,
    FunctionCall,
    ResponseFormatType,
    ResponseMessage,
    Role,
    ToolCall,
    ToolChoiceMode,
    ToolDefinition,
)
from .create_image import (
    CreateImageRequest,
    CreateImageRequestBuilder,
    CreateImageResponse,
    ImageObject,
    ImageQuality,
    ImageResponseFormat,
    ImageSize,
    ImageStyle,
)
from .embedding import (
    EmbeddingData,
    EmbeddingEncodingFormat,
    EmbeddingRequest,
    EmbeddingRequestBuilder,
    EmbeddingResponse,
    EmbeddingUsage,
)
from .speech import (
    SpeechModel,
    SpeechRequest,
    SpeechRequestBuilder,
    SpeechResponseFormat,
    SpeechVoice,
)
from .whisper import (
    AudioResponseFormat,
    TranscriptionRequest,
    TranscriptionRequestBuilder,
    TranscriptionResponse,
    TranslationRequest,
    TranslationRequestBuilder,
    TranslationResponse,
)

# Closed set of operations
Request = (
    ChatCompletionRequest
    | EmbeddingRequest
    | TranscriptionRequest
    | TranslationRequest
    | SpeechRequest
    | CreateImageRequest
)
# Speech returns raw audio bytes
Response = (
    ChatCompletionResponse
    | EmbeddingResponse
    | TranscriptionResponse
    | TranslationResponse
    | bytes
    | CreateImageResponse
)

__all__ = [
    # Unions
    "Request",
    "Response",
    # Bodies
    "FilePart",
    "JsonBody",
    "MultipartBody",
    "RequestBody",
    # Chat completion
    "ChatCompletionChoice",
    "ChatCompletionMessage",
    "ChatCompletionRequest",
    "ChatCompletionRequestBuilder",
    "ChatCompletionResponse",
    "ChatCompletionUsage",
    "FunctionCall",
    "ResponseFormatType",
    "ResponseMessage",
    "Role",
    "ToolCall",
    "ToolChoiceMode",
    "ToolDefinition",
    # Embedding
    "EmbeddingData",
    "EmbeddingEncodingFormat",
    "EmbeddingRequest",
    "EmbeddingRequestBuilder",
    "EmbeddingResponse",
    "EmbeddingUsage",
    # Transcription / translation
    "AudioResponseFormat",
    "TranscriptionRequest",
    "TranscriptionRequestBuilder",
    "TranscriptionResponse",
    "TranslationRequest",
    "TranslationRequestBuilder",
    "TranslationResponse",
    # Speech
    "SpeechModel",
    "SpeechRequest",
    "SpeechRequestBuilder",
    "SpeechResponseFormat",
    "SpeechVoice",
    # Image creation
    "CreateImageRequest",
    "CreateImageRequestBuilder",
    "CreateImageResponse",
    "ImageObject",
    "ImageQuality",
    "ImageResponseFormat",
    "ImageSize",
    "ImageStyle",
]
