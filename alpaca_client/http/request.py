"""Immutable request descriptions.

Endpoint functions describe a call with a RequestBuilder; HttpClient
executes the resulting RequestDescriptor. Descriptors never change after
build() and carry the authentication headers with them.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from urllib.parse import quote

KEY_ID_HEADER = "APCA-API-KEY-ID"
SECRET_KEY_HEADER = "APCA-API-SECRET-KEY"
CONTENT_TYPE_HEADER = "Content-Type"
APPLICATION_JSON = "application/json"


class HttpMethod(str, Enum):
    """HTTP methods used by the REST API."""

    GET = "GET"
    POST = "POST"
    DELETE = "DELETE"


def _frozen(mapping: Mapping[str, str] | None = None) -> Mapping[str, str]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class RequestDescriptor:
    """One HTTP call: method, path segments, query, body and headers."""

    method: HttpMethod
    segments: tuple[str, ...]
    params: Mapping[str, str] = field(default_factory=_frozen)
    body: bytes | None = None
    headers: Mapping[str, str] = field(default_factory=_frozen)

    @property
    def path(self) -> str:
        """Relative URL path with each segment percent-encoded."""
        return "/" + "/".join(quote(s, safe=":") for s in self.segments)


class RequestBuilder:
    """Fluent builder for RequestDescriptor."""

    def __init__(
        self,
        method: HttpMethod,
        *segments: str,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self._method = method
        self._segments = tuple(s.strip("/") for s in segments)
        self._params: dict[str, str] = {}
        self._body: bytes | None = None
        self._headers = dict(headers or {})

    def add_query_param(self, name: str, value: str) -> RequestBuilder:
        self._params[name] = value
        return self

    def set_body(self, body: str | bytes) -> RequestBuilder:
        self._body = body.encode("utf-8") if isinstance(body, str) else body
        return self

    def build(self) -> RequestDescriptor:
        return RequestDescriptor(
            method=self._method,
            segments=self._segments,
            params=_frozen(self._params),
            body=self._body,
            headers=_frozen(self._headers),
        )


def auth_headers(key_id: str, secret_key: str) -> dict[str, str]:
    """The fixed header set attached to every request."""
    return {
        KEY_ID_HEADER: key_id,
        SECRET_KEY_HEADER: secret_key,
        CONTENT_TYPE_HEADER: APPLICATION_JSON,
    }
