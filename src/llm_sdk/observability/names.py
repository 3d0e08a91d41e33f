# src/llm_sdk/observability/names.py

"""Standard metric names for llm-sdk observability.

Use these constants instead of hardcoded strings for consistency
across the codebase.

Note: All duration metrics are in milliseconds by convention.
Every metric is labelled with ``operation`` (chat_completion, embedding, ...).
"""

# ============================================================================
# Request Metrics
# ============================================================================

# Duration (full exchange: encode, send, receive, decode)
SDK_REQUEST_DURATION = "llm_sdk_request_duration"

# Counters
SDK_REQUESTS_TOTAL = "llm_sdk_requests_total"
# Additionally labelled with ``kind``: transport, http, decode
SDK_ERRORS_TOTAL = "llm_sdk_errors_total"


# ============================================================================
# Token Usage Metrics
# ============================================================================

# Counters (monotonic over time for cost/rate tracking)
SDK_TOKENS_PROMPT = "llm_sdk_tokens_prompt"
SDK_TOKENS_COMPLETION = "llm_sdk_tokens_completion"
SDK_TOKENS_TOTAL = "llm_sdk_tokens_total"
