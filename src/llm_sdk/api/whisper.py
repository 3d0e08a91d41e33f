# src/llm_sdk/api/whisper.py

"""Speech-to-text: transcription and translation.

Both are sent as multipart form data. The audio occupies the ``file`` part
and every scalar parameter is a sibling text part named by its wire key.
"""

import mimetypes
from enum import Enum
from typing import Any, ClassVar, TypeVar

from .base import FilePart, MultipartBody, RequestBuilder, WireRequest, WireResponse

DEFAULT_AUDIO_FILENAME = "audio.mp3"


class AudioResponseFormat(str, Enum):
    JSON = "json"
    TEXT = "text"
    SRT = "srt"
    VERBOSE_JSON = "verbose_json"
    VTT = "vtt"

    @property
    def is_json(self) -> bool:
        return self in (AudioResponseFormat.JSON, AudioResponseFormat.VERBOSE_JSON)


class _AudioRequest(WireRequest):
    file: bytes
    filename: str = DEFAULT_AUDIO_FILENAME  # part metadata, not a form field
    model: str = "whisper-1"
    prompt: str | None = None
    response_format: AudioResponseFormat = AudioResponseFormat.JSON
    temperature: float | None = None

    def to_wire(self) -> dict[str, Any]:
        """Scalar form fields; the audio travels as a separate file part."""
        return self.model_dump(
            mode="json", exclude_none=True, exclude={"file", "filename"}
        )

    def encode(self) -> MultipartBody:
        content_type = (
            mimetypes.guess_type(self.filename)[0] or "application/octet-stream"
        )
        return MultipartBody(
            fields={key: str(value) for key, value in self.to_wire().items()},
            files={"file": FilePart(self.filename, self.file, content_type)},
        )


class TranscriptionRequest(_AudioRequest):
    operation: ClassVar[str] = "transcription"
    path: ClassVar[str] = "/audio/transcriptions"

    language: str | None = None  # ISO-639-1

    @classmethod
    def new(cls, file: bytes) -> "TranscriptionRequest":
        """New transcription request for raw audio bytes."""
        return TranscriptionRequestBuilder(file).build()


class TranslationRequest(_AudioRequest):
    """Translate audio into English text. Takes no ``language``."""

    operation: ClassVar[str] = "translation"
    path: ClassVar[str] = "/audio/translations"

    @classmethod
    def new(cls, file: bytes) -> "TranslationRequest":
        """New translation request for raw audio bytes."""
        return TranslationRequestBuilder(file).build()


AB = TypeVar("AB", bound="_AudioRequestBuilder")


class _AudioRequestBuilder(RequestBuilder[Any]):
    def __init__(self, file: bytes) -> None:
        super().__init__(file=file)

    def filename(self: AB, filename: str) -> AB:
        return self._set("filename", filename)

    def model(self: AB, model: str) -> AB:
        return self._set("model", model)

    def prompt(self: AB, prompt: str) -> AB:
        return self._set("prompt", prompt)

    def response_format(self: AB, value: AudioResponseFormat) -> AB:
        return self._set("response_format", value)

    def temperature(self: AB, value: float) -> AB:
        return self._set("temperature", value)


class TranscriptionRequestBuilder(_AudioRequestBuilder):
    request_type = TranscriptionRequest

    def language(self, language: str) -> "TranscriptionRequestBuilder":
        return self._set("language", language)


class TranslationRequestBuilder(_AudioRequestBuilder):
    request_type = TranslationRequest


class _AudioTextResponse(WireResponse):
    text: str
    # verbose_json only
    language: str | None = None
    duration: float | None = None
    segments: list[dict[str, Any]] | None = None


class TranscriptionResponse(_AudioTextResponse):
    pass


class TranslationResponse(_AudioTextResponse):
    pass
