# src/llm_sdk/api/speech.py

from enum import Enum
from typing import ClassVar

from .base import RequestBuilder, WireRequest


class SpeechModel(str, Enum):
    TTS_1 = "tts-1"
    TTS_1_HD = "tts-1-hd"


class SpeechVoice(str, Enum):
    ALLOY = "alloy"
    ECHO = "echo"
    FABLE = "fable"
    ONYX = "onyx"
    NOVA = "nova"
    SHIMMER = "shimmer"


class SpeechResponseFormat(str, Enum):
    MP3 = "mp3"
    OPUS = "opus"
    AAC = "aac"
    FLAC = "flac"


class SpeechRequest(WireRequest):
    """Text-to-speech. The input is text, so the body is JSON.

    The response is raw audio bytes in ``response_format``.
    """

    operation: ClassVar[str] = "speech"
    path: ClassVar[str] = "/audio/speech"

    input: str
    model: SpeechModel = SpeechModel.TTS_1
    voice: SpeechVoice = SpeechVoice.NOVA
    response_format: SpeechResponseFormat = SpeechResponseFormat.MP3
    speed: float | None = None  # 0.25 to 4.0

    @classmethod
    def new(cls, input: str) -> "SpeechRequest":
        """New speech request for a text to read aloud."""
        return SpeechRequestBuilder(input).build()


class SpeechRequestBuilder(RequestBuilder[SpeechRequest]):
    request_type = SpeechRequest

    def __init__(self, input: str) -> None:
        super().__init__(input=input)

    def model(self, model: SpeechModel) -> "SpeechRequestBuilder":
        return self._set("model", model)

    def voice(self, voice: SpeechVoice) -> "SpeechRequestBuilder":
        return self._set("voice", voice)

    def response_format(self, value: SpeechResponseFormat) -> "SpeechRequestBuilder":
        return self._set("response_format", value)

    def speed(self, value: float) -> "SpeechRequestBuilder":
        return self._set("speed", value)
