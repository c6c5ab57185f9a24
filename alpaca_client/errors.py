"""Client error hierarchy.

Every failure surfaced by the library inherits from AlpacaError, so callers
can handle the whole taxonomy at one boundary. HTTP-level failures inherit
from APIError and keep the original status code, reason phrase and the
parsed failure payload (when the body carried one).
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any


class AlpacaError(Exception):
    """Base exception for all client errors."""


class CredentialsError(AlpacaError):
    """API key id or secret key is missing from the configuration."""


class APIError(AlpacaError):
    """A request completed with a non-success outcome.

    ``payload`` holds the decoded JSON error body (typically
    ``{"code": ..., "message": ...}``) or None when the body was empty
    or not JSON. ``status_code`` is 0 when no HTTP response was received.
    """

    def __init__(
        self,
        status_code: int,
        reason: str,
        payload: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        self.reason = reason
        self.payload = payload
        super().__init__(f"API error {status_code}: {reason}")

    @property
    def message(self) -> str:
        """Server-provided message, falling back to the reason phrase."""
        if self.payload and isinstance(self.payload.get("message"), str):
            return self.payload["message"]
        return self.reason


class AuthenticationError(APIError):
    """Invalid or missing API credentials (HTTP 401)."""


class ForbiddenError(APIError):
    """Request refused (HTTP 403), e.g. insufficient buying power."""


class EntityNotFoundError(APIError):
    """Requested entity does not exist (HTTP 404)."""


class UnprocessableError(APIError):
    """Parameters were malformed or not accepted (HTTP 422)."""


class RateLimitError(APIError):
    """Too many requests (HTTP 429)."""


class InternalError(APIError):
    """Any other failure: unexpected status, transport fault, decode error."""

    @classmethod
    def wrap(cls, exc: BaseException) -> InternalError:
        """Wrap a non-HTTP failure, keeping it as the cause."""
        err = cls(0, f"{type(exc).__name__}: {exc}")
        err.__cause__ = exc
        return err


class StreamDecodeError(AlpacaError):
    """A stream frame could not be decoded into a known envelope."""


class SubscriptionError(AlpacaError):
    """The stream did not grant the requested set of streams.

    Reports the streams actually granted against the supported ones.
    """

    def __init__(
        self,
        granted: Iterable[str],
        supported: Iterable[str] = ("trade_updates", "account_updates"),
    ) -> None:
        self.granted = frozenset(granted)
        self.supported = tuple(supported)
        super().__init__(
            f"unable to subscribe to {list(self.supported)} streams; "
            f"subscribed streams: {sorted(self.granted)}"
        )
