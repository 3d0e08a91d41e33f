# src/llm_sdk/decoder.py

"""Response decoding and error mapping.

Pure functions of ``(status, body)``. Network failures never reach this
module; the client classifies them as ``TransportError`` first.

Classification:
- 2xx: decode the body as the operation's success shape, or ``DecodeError``.
- otherwise: decode the provider error envelope into ``HttpError``; if the
  body is not an envelope, ``DecodeError`` with the status and raw body.
"""

import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from llm_sdk.errors import DecodeError, HttpError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

_PREVIEW_CHARS = 200


class ErrorDetail(BaseModel):
    message: str
    type: str | None = None
    param: str | None = None
    code: str | int | None = None


class ErrorEnvelope(BaseModel):
    """``{"error": {"message": ..., "type": ..., "param": ..., "code": ...}}``"""

    error: ErrorDetail


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def _preview(body: bytes) -> str:
    text = body[:_PREVIEW_CHARS].decode("utf-8", errors="replace")
    return text + ("..." if len(body) > _PREVIEW_CHARS else "")


def raise_for_error(
    status_code: int, body: bytes, *, operation: str | None = None
) -> None:
    """Raise the typed error for a non-success status; return on 2xx.

    Raises:
        HttpError: status outside 2xx with a parseable error envelope.
        DecodeError: status outside 2xx with any other body.
    """
    if is_success(status_code):
        return

    try:
        envelope = ErrorEnvelope.model_validate_json(body)
    except ValidationError as e:
        logger.warning(
            "%s failed with HTTP %d and an unrecognized error body: %s",
            operation or "request",
            status_code,
            _preview(body),
        )
        raise DecodeError(
            f"HTTP {status_code} with unrecognized error body: {_preview(body)}",
            status_code=status_code,
            body=body,
            operation=operation,
        ) from e

    detail = envelope.error
    logger.warning(
        "%s failed with HTTP %d: %s",
        operation or "request",
        status_code,
        detail.message,
    )
    raise HttpError(
        detail.message,
        status_code=status_code,
        code=str(detail.code) if detail.code is not None else None,
        type=detail.type,
        param=detail.param,
        body=body,
        operation=operation,
    )


def decode_json(
    status_code: int,
    body: bytes,
    model: type[M],
    *,
    operation: str | None = None,
) -> M:
    """Decode a JSON success body into ``model``.

    Unknown fields are ignored; missing required fields or malformed JSON
    yield ``DecodeError`` carrying the raw body.
    """
    raise_for_error(status_code, body, operation=operation)
    try:
        return model.model_validate_json(body)
    except ValidationError as e:
        logger.warning(
            "%s returned a body that is not a %s: %s",
            operation or "request",
            model.__name__,
            _preview(body),
        )
        raise DecodeError(
            f"Response is not a valid {model.__name__}: {e.error_count()} error(s), "
            f"first: {_first_error(e)}",
            status_code=status_code,
            body=body,
            operation=operation,
        ) from e


def decode_text(
    status_code: int,
    body: bytes,
    model: type[M],
    *,
    operation: str | None = None,
) -> M:
    """Wrap a plain-text success body (srt, vtt, text) as ``model(text=...)``."""
    raise_for_error(status_code, body, operation=operation)
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(
            "Response body is not valid UTF-8 text",
            status_code=status_code,
            body=body,
            operation=operation,
        ) from e
    return model.model_validate({"text": text})


def decode_bytes(
    status_code: int, body: bytes, *, operation: str | None = None
) -> bytes:
    """Return a binary success body unchanged."""
    raise_for_error(status_code, body, operation=operation)
    return body


def _first_error(e: ValidationError) -> str:
    err: dict[str, Any] = dict(e.errors()[0])
    loc = ".".join(str(part) for part in err.get("loc", ())) or "<root>"
    return f"{loc}: {err.get('msg')}"
