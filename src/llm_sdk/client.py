# src/llm_sdk/client.py

import logging
from collections.abc import Callable
from time import monotonic
from typing import Any, TypeVar

import httpx

from llm_sdk import decoder
from llm_sdk.api import (
    ChatCompletionRequest,
    ChatCompletionResponse,
    CreateImageRequest,
    CreateImageResponse,
    EmbeddingRequest,
    EmbeddingResponse,
    JsonBody,
    SpeechRequest,
    TranscriptionRequest,
    TranscriptionResponse,
    TranslationRequest,
    TranslationResponse,
)
from llm_sdk.api.base import WireRequest
from llm_sdk.config import ClientConfig
from llm_sdk.errors import DecodeError, HttpError, SdkError, TransportError
from llm_sdk.observability import names
from llm_sdk.observability.base import MetricsHook, NoOpMetricsHook

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LLMSdk:
    """Transport client for an OpenAI-compatible HTTP API.

    Holds an immutable (base URL, API key) pair. One coroutine per
    operation; each is a single request/response exchange with no retries.
    Safe to share between concurrent tasks.

    Example:
        >>> async with LLMSdk("https://api.openai.com/v1", api_key) as sdk:
        ...     res = await sdk.chat_completion(
        ...         ChatCompletionRequest.new([ChatCompletionMessage.user("Hi")])
        ...     )
        ...     print(res.message.content)
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> None:
        self._base_url = base_url
        self._api_key = api_key
        self._http = http_client or httpx.AsyncClient(timeout=timeout)
        self.metrics_hook = metrics_hook
        logger.info(
            "Initialized LLMSdk with base_url=%s, timeout=%s", base_url, timeout
        )

    @classmethod
    def from_config(
        cls,
        config: ClientConfig,
        *,
        http_client: httpx.AsyncClient | None = None,
        metrics_hook: MetricsHook = NoOpMetricsHook(),
    ) -> "LLMSdk":
        return cls(
            config.base_url,
            config.api_key,
            timeout=config.timeout,
            http_client=http_client,
            metrics_hook=metrics_hook,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "LLMSdk":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    async def chat_completion(
        self, req: ChatCompletionRequest
    ) -> ChatCompletionResponse:
        response = await self._execute(
            req,
            lambda status, body: decoder.decode_json(
                status, body, ChatCompletionResponse, operation=req.operation
            ),
        )
        self._record_usage(
            req.operation,
            response.usage.prompt_tokens,
            response.usage.completion_tokens,
            response.usage.total_tokens,
        )
        return response

    async def embedding(self, req: EmbeddingRequest) -> EmbeddingResponse:
        response = await self._execute(
            req,
            lambda status, body: decoder.decode_json(
                status, body, EmbeddingResponse, operation=req.operation
            ),
        )
        self._record_usage(
            req.operation,
            response.usage.prompt_tokens,
            0,
            response.usage.total_tokens,
        )
        return response

    async def transcription(self, req: TranscriptionRequest) -> TranscriptionResponse:
        # text, srt and vtt bodies are the transcript itself
        decode = (
            decoder.decode_json if req.response_format.is_json else decoder.decode_text
        )
        return await self._execute(
            req,
            lambda status, body: decode(
                status, body, TranscriptionResponse, operation=req.operation
            ),
        )

    async def translation(self, req: TranslationRequest) -> TranslationResponse:
        # text, srt and vtt bodies are the transcript itself
        decode = (
            decoder.decode_json if req.response_format.is_json else decoder.decode_text
        )
        return await self._execute(
            req,
            lambda status, body: decode(
                status, body, TranslationResponse, operation=req.operation
            ),
        )

    async def speech(self, req: SpeechRequest) -> bytes:
        return await self._execute(
            req,
            lambda status, body: decoder.decode_bytes(
                status, body, operation=req.operation
            ),
        )

    async def create_image(self, req: CreateImageRequest) -> CreateImageResponse:
        return await self._execute(
            req,
            lambda status, body: decoder.decode_json(
                status, body, CreateImageResponse, operation=req.operation
            ),
        )

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def endpoint_url(self, req: WireRequest) -> str:
        return self._base_url.rstrip("/") + req.path

    def _headers(self) -> dict[str, str]:
        # Content-Type is set by httpx to match the body encoding
        if not self._api_key:
            return {}
        return {"Authorization": f"Bearer {self._api_key}"}

    async def _send(self, req: WireRequest) -> httpx.Response:
        """Encode and send a request. Network failures become TransportError."""
        url = self.endpoint_url(req)
        body = req.encode()
        headers = self._headers()

        try:
            if isinstance(body, JsonBody):
                logger.debug("POST %s (%s, json)", url, req.operation)
                return await self._http.post(url, json=body.payload, headers=headers)

            logger.debug(
                "POST %s (%s, multipart: fields=%s, files=%s)",
                url,
                req.operation,
                sorted(body.fields),
                sorted(body.files),
            )
            files = {
                name: (part.filename, part.content, part.content_type)
                for name, part in body.files.items()
            }
            return await self._http.post(
                url, data=body.fields, files=files, headers=headers
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning("%s transport failure for %s: %r", req.operation, url, e)
            raise TransportError(
                f"{req.operation} request to {url} failed: {e}",
                operation=req.operation,
            ) from e

    async def _execute(
        self, req: WireRequest, decode: Callable[[int, bytes], T]
    ) -> T:
        start = monotonic()
        labels = {"operation": req.operation}
        try:
            raw = await self._send(req)
            result = decode(raw.status_code, raw.content)
        except SdkError as e:
            self.metrics_hook.increment(
                names.SDK_ERRORS_TOTAL,
                labels={**labels, "kind": _error_kind(e)},
            )
            raise
        finally:
            elapsed_ms = 1000 * (monotonic() - start)
            self.metrics_hook.record_latency(
                names.SDK_REQUEST_DURATION, elapsed_ms, labels=labels
            )
            self.metrics_hook.increment(names.SDK_REQUESTS_TOTAL, labels=labels)

        logger.info(
            "%s completed: status=%d, latency=%.0fms",
            req.operation,
            raw.status_code,
            elapsed_ms,
        )
        return result

    def _record_usage(
        self, operation: str, prompt: int, completion: int, total: int
    ) -> None:
        logger.info(
            "%s usage: tokens=%d (prompt=%d, completion=%d)",
            operation,
            total,
            prompt,
            completion,
        )
        labels = {"operation": operation}
        self.metrics_hook.increment(names.SDK_TOKENS_PROMPT, prompt, labels=labels)
        self.metrics_hook.increment(
            names.SDK_TOKENS_COMPLETION, completion, labels=labels
        )
        self.metrics_hook.increment(names.SDK_TOKENS_TOTAL, total, labels=labels)


def _error_kind(e: SdkError) -> str:
    if isinstance(e, TransportError):
        return "transport"
    if isinstance(e, HttpError):
        return "http"
    if isinstance(e, DecodeError):
        return "decode"
    return "unknown"
