# src/llm_sdk/factory.py

from llm_sdk.observability.base import MetricsHook, NoOpMetricsHook

from .client import LLMSdk
from .config import ClientConfig


def create_client(
    config: ClientConfig,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> LLMSdk:
    """Create a transport client from config.

    Args:
        config: Base URL, API key and optional timeout.
        metrics_hook: Optional metrics hook for observability.

    Returns:
        Configured LLMSdk. Close it with ``await client.aclose()``.

    Example:
        >>> config = ClientConfig(api_key="sk-...")
        >>> client = create_client(config)
        >>> response = await client.embedding(EmbeddingRequest.new("hello"))
    """
    return LLMSdk.from_config(config, metrics_hook=metrics_hook)
