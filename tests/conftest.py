from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

import httpx
import pytest
import pytest_asyncio

from llm_sdk.client import LLMSdk

BASE_URL = "https://llm.test/v1"

Handler = Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]]


@pytest_asyncio.fixture
async def make_sdk() -> AsyncIterator[Callable[..., LLMSdk]]:
    """Build LLMSdk instances whose HTTP exchanges are served by ``handler``.

    Every SDK built here is closed at teardown.
    """
    built: list[LLMSdk] = []

    def _make(handler: Handler, api_key: str = "test-key", **kwargs: Any) -> LLMSdk:
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        sdk = LLMSdk(
            kwargs.pop("base_url", BASE_URL),
            api_key,
            http_client=http_client,
            **kwargs,
        )
        built.append(sdk)
        return sdk

    yield _make
    for sdk in built:
        await sdk.aclose()


@pytest.fixture
def chat_response_payload() -> dict[str, Any]:
    return {
        "id": "chatcmpl-123",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gpt-4o-2024-08-06",
        "system_fingerprint": "fp_abc",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": "Hello! How can I help?"},
                "logprobs": None,
                "finish_reason": "stop",
            }
        ],
        "usage": {"prompt_tokens": 10, "completion_tokens": 8, "total_tokens": 18},
    }
