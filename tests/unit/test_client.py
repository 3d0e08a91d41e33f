# tests/unit/test_client.py

import asyncio
import json
import logging
from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest

from llm_sdk.api import (
    AudioResponseFormat,
    ChatCompletionMessage,
    ChatCompletionRequest,
    CreateImageRequest,
    EmbeddingRequest,
    SpeechRequest,
    TranscriptionRequest,
    TranscriptionRequestBuilder,
    TranslationRequest,
)
from llm_sdk.client import LLMSdk
from llm_sdk.errors import DecodeError, HttpError, TransportError
from llm_sdk.observability import names

BASE_URL = "https://llm.test/v1"
AUDIO = b"ID3fake-mp3-bytes"

MakeSdk = Callable[..., LLMSdk]


def _embedding_echo(text: str) -> dict[str, Any]:
    """Embedding response that carries the request input back as the model name."""
    return {
        "object": "list",
        "data": [{"object": "embedding", "index": 0, "embedding": [0.1, 0.2]}],
        "model": text,
        "usage": {"prompt_tokens": 3, "total_tokens": 3},
    }


class TestChatCompletion:
    @pytest.mark.asyncio
    async def test_posts_json_with_bearer(
        self, make_sdk: MakeSdk, chat_response_payload: dict[str, Any]
    ) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=chat_response_payload)

        sdk = make_sdk(handler)
        req = ChatCompletionRequest.new(
            [
                ChatCompletionMessage.system("You are helpful", ""),
                ChatCompletionMessage.user("Hi", "user1"),
            ]
        )

        res = await sdk.chat_completion(req)

        assert res.message is not None
        assert res.message.content == "Hello! How can I help?"
        request = seen[0]
        assert request.method == "POST"
        assert str(request.url) == f"{BASE_URL}/chat/completions"
        assert request.headers["authorization"] == "Bearer test-key"
        assert request.headers["content-type"] == "application/json"
        assert json.loads(request.content) == req.to_wire()

    @pytest.mark.asyncio
    async def test_trailing_slash_in_base_url(
        self, make_sdk: MakeSdk, chat_response_payload: dict[str, Any]
    ) -> None:
        urls: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            urls.append(str(request.url))
            return httpx.Response(200, json=chat_response_payload)

        sdk = make_sdk(handler, base_url=BASE_URL + "/")
        await sdk.chat_completion(
            ChatCompletionRequest.new([ChatCompletionMessage.user("Hi")])
        )

        assert urls == [f"{BASE_URL}/chat/completions"]

    @pytest.mark.asyncio
    async def test_empty_api_key_sends_no_authorization(
        self, make_sdk: MakeSdk, chat_response_payload: dict[str, Any]
    ) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=chat_response_payload)

        sdk = make_sdk(handler, api_key="")
        await sdk.chat_completion(
            ChatCompletionRequest.new([ChatCompletionMessage.user("Hi")])
        )

        assert "authorization" not in seen[0].headers

    @pytest.mark.asyncio
    async def test_http_error_is_raised_once_without_retry(
        self, make_sdk: MakeSdk
    ) -> None:
        calls = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal calls
            calls += 1
            return httpx.Response(
                401,
                json={
                    "error": {
                        "message": "invalid api key",
                        "type": "invalid_request_error",
                        "code": "invalid_api_key",
                    }
                },
            )

        sdk = make_sdk(handler)

        with pytest.raises(HttpError) as exc_info:
            await sdk.chat_completion(
                ChatCompletionRequest.new([ChatCompletionMessage.user("Hi")])
            )

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "invalid api key"
        assert exc_info.value.operation == "chat_completion"
        assert calls == 1

    @pytest.mark.asyncio
    async def test_non_json_success_is_decode_error(self, make_sdk: MakeSdk) -> None:
        sdk = make_sdk(lambda request: httpx.Response(200, content=b"<html>oops"))

        with pytest.raises(DecodeError) as exc_info:
            await sdk.chat_completion(
                ChatCompletionRequest.new([ChatCompletionMessage.user("Hi")])
            )

        assert exc_info.value.body == b"<html>oops"


class TestTransportFailures:
    @pytest.mark.asyncio
    async def test_connection_error_is_transport_error(self, make_sdk: MakeSdk) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        sdk = make_sdk(handler)

        with pytest.raises(TransportError) as exc_info:
            await sdk.embedding(EmbeddingRequest.new("hello"))

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert exc_info.value.operation == "embedding"

    @pytest.mark.asyncio
    async def test_timeout_is_transport_error(self, make_sdk: MakeSdk) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        sdk = make_sdk(handler)

        with pytest.raises(TransportError):
            await sdk.speech(SpeechRequest.new("hello"))

    @pytest.mark.asyncio
    async def test_malformed_base_url_fails_on_first_use(self) -> None:
        sdk = LLMSdk("not a url", "test-key")
        try:
            with pytest.raises(TransportError):
                await sdk.embedding(EmbeddingRequest.new("hello"))
        finally:
            await sdk.aclose()


class TestEmbedding:
    @pytest.mark.asyncio
    async def test_embedding(self, make_sdk: MakeSdk) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/v1/embeddings"
            body = json.loads(request.content)
            return httpx.Response(200, json=_embedding_echo(body["input"]))

        sdk = make_sdk(handler)

        res = await sdk.embedding(EmbeddingRequest.new("hello"))

        assert res.model == "hello"
        assert res.data[0].embedding == [0.1, 0.2]

    @pytest.mark.asyncio
    async def test_concurrent_calls_do_not_cross_talk(self, make_sdk: MakeSdk) -> None:
        async def handler(request: httpx.Request) -> httpx.Response:
            text = json.loads(request.content)["input"]
            # Finish the first request last so responses interleave
            await asyncio.sleep(0.05 if text == "first" else 0)
            return httpx.Response(200, json=_embedding_echo(text))

        sdk = make_sdk(handler)

        first, second = await asyncio.gather(
            sdk.embedding(EmbeddingRequest.new("first")),
            sdk.embedding(EmbeddingRequest.new("second")),
        )

        assert first.model == "first"
        assert second.model == "second"


class TestAudio:
    @pytest.mark.asyncio
    async def test_transcription_is_multipart(self, make_sdk: MakeSdk) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"text": "The quick brown fox."})

        sdk = make_sdk(handler)
        req = (
            TranscriptionRequestBuilder(AUDIO)
            .filename("speech.mp3")
            .language("en")
            .build()
        )

        res = await sdk.transcription(req)

        assert res.text == "The quick brown fox."
        request = seen[0]
        assert str(request.url) == f"{BASE_URL}/audio/transcriptions"
        assert request.headers["authorization"] == "Bearer test-key"
        assert request.headers["content-type"].startswith("multipart/form-data")
        content = request.content
        assert b'name="file"; filename="speech.mp3"' in content
        assert AUDIO in content
        assert b'name="model"\r\n\r\nwhisper-1' in content
        assert b'name="response_format"\r\n\r\njson' in content
        assert b'name="language"\r\n\r\nen' in content
        assert b'name="prompt"' not in content

    @pytest.mark.asyncio
    async def test_transcription_text_format_returns_raw_body(
        self, make_sdk: MakeSdk
    ) -> None:
        vtt = "WEBVTT\n\n00:00:00.000 --> 00:00:02.800\nThe quick brown fox.\n\n"
        sdk = make_sdk(lambda request: httpx.Response(200, text=vtt))
        req = (
            TranscriptionRequestBuilder(AUDIO)
            .response_format(AudioResponseFormat.VTT)
            .build()
        )

        res = await sdk.transcription(req)

        assert res.text == vtt

    @pytest.mark.asyncio
    async def test_translation(self, make_sdk: MakeSdk) -> None:
        urls: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            urls.append(str(request.url))
            assert b'name="language"' not in request.content
            return httpx.Response(
                200, json={"text": "The red scarf.", "task": "translate"}
            )

        sdk = make_sdk(handler)

        res = await sdk.translation(TranslationRequest.new(AUDIO))

        assert res.text == "The red scarf."
        assert urls == [f"{BASE_URL}/audio/translations"]

    @pytest.mark.asyncio
    async def test_speech_returns_audio_bytes(self, make_sdk: MakeSdk) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200, content=b"\xff\xfbaudio", headers={"content-type": "audio/mpeg"}
            )

        sdk = make_sdk(handler)

        audio = await sdk.speech(SpeechRequest.new("Hello"))

        assert audio == b"\xff\xfbaudio"
        assert str(seen[0].url) == f"{BASE_URL}/audio/speech"
        assert seen[0].headers["content-type"] == "application/json"
        assert json.loads(seen[0].content)["input"] == "Hello"

    @pytest.mark.asyncio
    async def test_transcription_error(self, make_sdk: MakeSdk) -> None:
        sdk = make_sdk(
            lambda request: httpx.Response(
                400,
                json={
                    "error": {
                        "message": "Invalid file format.",
                        "type": "invalid_request_error",
                        "param": "file",
                        "code": None,
                    }
                },
            )
        )

        with pytest.raises(HttpError) as exc_info:
            await sdk.transcription(TranscriptionRequest.new(AUDIO))

        assert exc_info.value.param == "file"
        assert exc_info.value.code is None


class TestCreateImage:
    @pytest.mark.asyncio
    async def test_create_image(self, make_sdk: MakeSdk) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={
                    "created": 1700000000,
                    "data": [{"url": "https://images.test/1.png"}],
                },
            )

        sdk = make_sdk(handler)

        res = await sdk.create_image(CreateImageRequest.new("draw a cute caterpillar"))

        assert res.data[0].url == "https://images.test/1.png"
        assert str(seen[0].url) == f"{BASE_URL}/images/generations"
        assert json.loads(seen[0].content) == {
            "prompt": "draw a cute caterpillar",
            "model": "dall-e-3",
        }


class TestMetrics:
    @pytest.mark.asyncio
    async def test_metrics_hook_called(
        self, make_sdk: MakeSdk, chat_response_payload: dict[str, Any]
    ) -> None:
        metrics_hook = MagicMock()
        sdk = make_sdk(
            lambda request: httpx.Response(200, json=chat_response_payload),
            metrics_hook=metrics_hook,
        )

        await sdk.chat_completion(
            ChatCompletionRequest.new([ChatCompletionMessage.user("Hi")])
        )

        metrics_hook.record_latency.assert_called_once()
        call_args = metrics_hook.record_latency.call_args
        assert call_args[0][0] == names.SDK_REQUEST_DURATION
        assert call_args[0][1] >= 0
        metrics_hook.increment.assert_any_call(
            names.SDK_TOKENS_TOTAL, 18, labels={"operation": "chat_completion"}
        )
        metrics_hook.increment.assert_any_call(
            names.SDK_REQUESTS_TOTAL, labels={"operation": "chat_completion"}
        )

    @pytest.mark.asyncio
    async def test_error_kind_recorded(self, make_sdk: MakeSdk) -> None:
        metrics_hook = MagicMock()
        sdk = make_sdk(
            lambda request: httpx.Response(500, content=b"upstream exploded"),
            metrics_hook=metrics_hook,
        )

        with pytest.raises(DecodeError):
            await sdk.create_image(CreateImageRequest.new("a lighthouse"))

        metrics_hook.increment.assert_any_call(
            names.SDK_ERRORS_TOTAL,
            labels={"operation": "create_image", "kind": "decode"},
        )

    @pytest.mark.asyncio
    async def test_usage_logged(
        self,
        make_sdk: MakeSdk,
        chat_response_payload: dict[str, Any],
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        sdk = make_sdk(lambda request: httpx.Response(200, json=chat_response_payload))

        with caplog.at_level(logging.INFO, logger="llm_sdk.client"):
            await sdk.chat_completion(
                ChatCompletionRequest.new([ChatCompletionMessage.user("Hi")])
            )

        assert (
            "chat_completion usage: tokens=18 (prompt=10, completion=8)"
            in caplog.messages
        )


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_context_manager_closes_http_client(self) -> None:
        http_client = httpx.AsyncClient(
            transport=httpx.MockTransport(lambda request: httpx.Response(200))
        )

        async with LLMSdk("https://llm.test/v1", "test-key", http_client=http_client):
            assert not http_client.is_closed

        assert http_client.is_closed
