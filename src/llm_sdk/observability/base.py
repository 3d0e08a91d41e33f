# src/llm_sdk/observability/base.py

from typing import Protocol


class MetricsHook(Protocol):
    """Sink for per-request client metrics.

    The client calls it once per exchange, whatever the outcome:
    - ``record_latency`` with the full exchange duration
    - ``increment`` for the request counter, the error counter (on failure)
      and token usage (chat completion and embedding)

    Labels always carry ``operation``; error counters add ``kind``.
    Implementations must not raise.
    """

    def record_latency(
        self,
        name: str,
        value_ms: float,
        labels: dict[str, str] | None = None,
    ) -> None: ...

    def increment(
        self,
        name: str,
        value: int = 1,
        labels: dict[str, str] | None = None,
    ) -> None: ...


class NoOpMetricsHook:
    """Default hook: discards everything."""

    def record_latency(
        self, name: str, value_ms: float, labels: dict[str, str] | None = None
    ) -> None:
        pass

    def increment(
        self, name: str, value: int = 1, labels: dict[str, str] | None = None
    ) -> None:
        pass
