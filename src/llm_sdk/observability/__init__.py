"""Metrics seam for llm-sdk. Plug in any backend by implementing MetricsHook."""

from . import names
from .base import MetricsHook, NoOpMetricsHook

__all__ = [
    "MetricsHook",
    "NoOpMetricsHook",
    "names",
]
