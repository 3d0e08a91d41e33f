# src/llm_sdk/api/create_image.py

import base64
import binascii
from enum import Enum
from typing import ClassVar

from llm_sdk.errors import DecodeError

from .base import RequestBuilder, WireRequest, WireResponse


class ImageQuality(str, Enum):
    STANDARD = "standard"
    HD = "hd"


class ImageResponseFormat(str, Enum):
    URL = "url"
    B64_JSON = "b64_json"


class ImageSize(str, Enum):
    LARGE = "1024x1024"
    LARGE_WIDE = "1792x1024"
    LARGE_TALL = "1024x1792"


class ImageStyle(str, Enum):
    VIVID = "vivid"
    NATURAL = "natural"


class CreateImageRequest(WireRequest):
    operation: ClassVar[str] = "create_image"
    path: ClassVar[str] = "/images/generations"

    prompt: str
    model: str = "dall-e-3"
    n: int | None = None
    quality: ImageQuality | None = None
    response_format: ImageResponseFormat | None = None
    size: ImageSize | None = None
    style: ImageStyle | None = None
    user: str | None = None

    @classmethod
    def new(cls, prompt: str) -> "CreateImageRequest":
        """New image request from a prompt string."""
        return CreateImageRequestBuilder(prompt).build()


class CreateImageRequestBuilder(RequestBuilder[CreateImageRequest]):
    request_type = CreateImageRequest

    def __init__(self, prompt: str) -> None:
        super().__init__(prompt=prompt)

    def model(self, model: str) -> "CreateImageRequestBuilder":
        return self._set("model", model)

    def n(self, value: int) -> "CreateImageRequestBuilder":
        return self._set("n", value)

    def quality(self, value: ImageQuality) -> "CreateImageRequestBuilder":
        return self._set("quality", value)

    def response_format(
        self, value: ImageResponseFormat
    ) -> "CreateImageRequestBuilder":
        return self._set("response_format", value)

    def size(self, value: ImageSize) -> "CreateImageRequestBuilder":
        return self._set("size", value)

    def style(self, value: ImageStyle) -> "CreateImageRequestBuilder":
        return self._set("style", value)

    def user(self, user: str) -> "CreateImageRequestBuilder":
        return self._set("user", user)


class ImageObject(WireResponse):
    b64_json: str | None = None  # response_format=b64_json
    url: str | None = None  # response_format=url (default)
    revised_prompt: str | None = None

    def image_bytes(self) -> bytes:
        """Decode the inline image.

        Raises:
            DecodeError: if the image was returned by URL or is not valid base64.
        """
        if self.b64_json is None:
            raise DecodeError("Image has no inline data; fetch it from its url")
        try:
            return base64.b64decode(self.b64_json, validate=True)
        except binascii.Error as e:
            raise DecodeError(
                f"Image data is not valid base64: {e}", body=self.b64_json.encode()
            ) from e


class CreateImageResponse(WireResponse):
    created: int
    data: list[ImageObject]
