# src/llm_sdk/api/embedding.py

import base64
import struct
from enum import Enum
from typing import ClassVar

from llm_sdk.errors import DecodeError

from .base import RequestBuilder, WireRequest, WireResponse


class EmbeddingEncodingFormat(str, Enum):
    FLOAT = "float"
    BASE64 = "base64"


class EmbeddingRequest(WireRequest):
    operation: ClassVar[str] = "embedding"
    path: ClassVar[str] = "/embeddings"

    # A single string or a batch; token-array inputs are not supported
    input: str | list[str]
    model: str = "text-embedding-ada-002"
    encoding_format: EmbeddingEncodingFormat | None = None
    dimensions: int | None = None
    user: str | None = None

    @classmethod
    def new(cls, input: str | list[str]) -> "EmbeddingRequest":
        """New embedding request for one text or a batch of texts."""
        return EmbeddingRequestBuilder(input).build()


class EmbeddingRequestBuilder(RequestBuilder[EmbeddingRequest]):
    request_type = EmbeddingRequest

    def __init__(self, input: str | list[str]) -> None:
        super().__init__(input=input)

    def model(self, model: str) -> "EmbeddingRequestBuilder":
        return self._set("model", model)

    def encoding_format(
        self, value: EmbeddingEncodingFormat
    ) -> "EmbeddingRequestBuilder":
        return self._set("encoding_format", value)

    def dimensions(self, value: int) -> "EmbeddingRequestBuilder":
        return self._set("dimensions", value)

    def user(self, user: str) -> "EmbeddingRequestBuilder":
        return self._set("user", user)


class EmbeddingData(WireResponse):
    index: int
    # list of floats, or a base64 string when encoding_format=base64
    embedding: list[float] | str
    object: str = "embedding"

    def vector(self) -> list[float]:
        """Embedding as floats, unpacking the base64 form if needed.

        Raises:
            DecodeError: if the base64 payload is not a float32 array.
        """
        if isinstance(self.embedding, list):
            return self.embedding
        try:
            raw = base64.b64decode(self.embedding, validate=True)
            return list(struct.unpack(f"<{len(raw) // 4}f", raw))
        except (ValueError, struct.error) as e:
            raise DecodeError(
                f"Embedding {self.index} is not a base64 float32 array: {e}",
                body=self.embedding.encode(),
            ) from e


class EmbeddingUsage(WireResponse):
    prompt_tokens: int
    total_tokens: int


class EmbeddingResponse(WireResponse):
    object: str = "list"
    data: list[EmbeddingData]
    model: str
    usage: EmbeddingUsage
