"""Response transformers: raw HTTP response -> typed value or typed error.

All transformers share one status classification step. ValueTransformer
decodes a single model class, GenericTransformer decodes an explicit type
descriptor such as ``list[Asset]`` or ``dict[str, list[Bar]]`` (a bare
class carries no element type for containers), and NoContentTransformer
accepts an empty body for operations like cancel.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from functools import lru_cache
from typing import Any, Generic, TypeVar

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError

from alpaca_client.errors import (
    APIError,
    AuthenticationError,
    EntityNotFoundError,
    ForbiddenError,
    InternalError,
    RateLimitError,
    UnprocessableError,
)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)

# Status code -> error class. Anything else outside 2xx is InternalError.
STATUS_ERRORS: dict[int, type[APIError]] = {
    401: AuthenticationError,
    403: ForbiddenError,
    404: EntityNotFoundError,
    422: UnprocessableError,
    429: RateLimitError,
}


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def _error_payload(response: httpx.Response) -> dict[str, Any] | None:
    """Best-effort parse of an error body like {"code": ..., "message": ...}."""
    if not response.content:
        return None
    try:
        payload = response.json()
    except (ValueError, UnicodeDecodeError):
        return None
    return payload if isinstance(payload, dict) else None


def raise_for_status(response: httpx.Response) -> None:
    """Raise the typed APIError for a non-2xx response."""
    status = response.status_code
    if is_success(status):
        return
    error_cls = STATUS_ERRORS.get(status, InternalError)
    raise error_cls(status, response.reason_phrase, _error_payload(response))


@lru_cache(maxsize=None)
def _adapter(descriptor: Any) -> TypeAdapter[Any]:
    return TypeAdapter(descriptor)


class Transformer(ABC, Generic[T]):
    """Turns an httpx.Response into T or raises an APIError."""

    def transform(self, response: httpx.Response) -> T:
        raise_for_status(response)
        try:
            return self._decode(response.content)
        except (ValidationError, ValueError, UnicodeDecodeError) as e:
            raise InternalError(
                response.status_code,
                f"Unable to decode response body: {e}",
            ) from e

    @abstractmethod
    def _decode(self, body: bytes) -> T:
        """Decode a success body."""


class ValueTransformer(Transformer[M]):
    """Decodes the body into one model instance."""

    def __init__(self, model: type[M]) -> None:
        self.model = model

    def _decode(self, body: bytes) -> M:
        return self.model.model_validate_json(body)

    def __repr__(self) -> str:
        return f"ValueTransformer({self.model.__name__})"


class GenericTransformer(Transformer[T]):
    """Decodes the body into the shape described by ``descriptor``."""

    def __init__(self, descriptor: Any) -> None:
        self.descriptor = descriptor

    def _decode(self, body: bytes) -> T:
        result: T = _adapter(self.descriptor).validate_json(body)
        return result

    def __repr__(self) -> str:
        return f"GenericTransformer({self.descriptor!r})"


class NoContentTransformer(Transformer[None]):
    """Success with an empty (or ignored) body decodes to None."""

    def _decode(self, body: bytes) -> None:
        return None
