# src/llm_sdk/api/base.py

"""Wire-level building blocks shared by every operation.

Request models forbid unknown fields so a typo fails at build time.
Response models ignore unknown fields so new provider fields never break
decoding. Absent optional fields are omitted from the payload, never sent
as null.
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True)
class JsonBody:
    """Body sent as ``application/json``."""

    payload: dict[str, Any]


@dataclass(frozen=True)
class FilePart:
    """Binary part of a multipart body."""

    filename: str
    content: bytes
    content_type: str


@dataclass(frozen=True)
class MultipartBody:
    """Body sent as ``multipart/form-data``.

    Scalar parameters go in ``fields``; binary payloads go in ``files``.
    Keys are the wire part names.
    """

    fields: dict[str, str]
    files: dict[str, FilePart] = field(default_factory=dict)


RequestBody = JsonBody | MultipartBody


class WireModel(BaseModel):
    """Outbound schema type. Unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid")

    def to_wire(self) -> dict[str, Any]:
        """Canonical wire encoding: wire keys, JSON types, absent fields omitted."""
        return self.model_dump(mode="json", exclude_none=True)


class WireRequest(WireModel):
    """Top-level request for one operation."""

    operation: ClassVar[str]
    path: ClassVar[str]

    def encode(self) -> RequestBody:
        return JsonBody(self.to_wire())


class WireResponse(BaseModel):
    """Inbound schema type. Unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore")


R = TypeVar("R", bound=WireRequest)
B = TypeVar("B", bound="RequestBuilder[Any]")


class RequestBuilder(Generic[R]):
    """Collects fields for a request and validates them on ``build()``.

    Setters mutate the builder and return it, so calls chain in any order.
    Scalar setters overwrite; list setters append.
    """

    request_type: type[R]

    def __init__(self, **required: Any) -> None:
        self._fields: dict[str, Any] = dict(required)

    def _set(self: B, name: str, value: Any) -> B:
        self._fields[name] = value
        return self

    def _extend(self: B, name: str, values: Any) -> B:
        self._fields[name] = [*self._fields.get(name, []), *values]
        return self

    def build(self) -> R:
        """Validate the collected fields.

        Raises:
            pydantic.ValidationError: if a field is missing or malformed.
        """
        return self.request_type(**self._fields)
