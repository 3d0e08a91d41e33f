# src/llm_sdk/config.py

from dataclasses import dataclass

DEFAULT_BASE_URL = "https://api.openai.com/v1"


@dataclass(frozen=True)
class ClientConfig:
    """Configuration for the transport client.

    Immutable. Explicit. No magic defaults from environment.
    """

    api_key: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float | None = None  # None disables timeouts; a deployment concern
