# src/llm_sdk/errors.py

"""Exception hierarchy for llm-sdk.

Every failure of a client call surfaces as exactly one of three kinds:

- ``TransportError``: the HTTP exchange never completed (DNS, connect,
  timeout, reset, malformed URL).
- ``HttpError``: the server answered with a non-success status and a
  parseable error envelope.
- ``DecodeError``: the body did not match the expected shape, on either the
  success or the error path.

Callers can catch ``SdkError`` to handle all three at once.
"""

from __future__ import annotations


class SdkError(Exception):
    """Base exception for all llm-sdk call failures."""

    def __init__(self, message: str, *, operation: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.operation = operation


class TransportError(SdkError):
    """The request could not be sent or the response could not be received.

    The underlying ``httpx`` exception is chained as ``__cause__``.
    """


class HttpError(SdkError):
    """Server returned a non-success status with a provider error envelope."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        code: str | None = None,
        type: str | None = None,
        param: str | None = None,
        body: bytes = b"",
        operation: str | None = None,
    ) -> None:
        super().__init__(message, operation=operation)
        self.status_code = status_code
        self.code = code
        self.type = type
        self.param = param
        self.body = body

    def __str__(self) -> str:
        code_note = f" [{self.code}]" if self.code else ""
        return f"HTTP {self.status_code}{code_note}: {self.message}"


class DecodeError(SdkError):
    """Response body did not match the expected shape.

    Carries the raw body (and status code, when one was received) for
    diagnostics.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: bytes = b"",
        operation: str | None = None,
    ) -> None:
        super().__init__(message, operation=operation)
        self.status_code = status_code
        self.body = body
