"""Listenable: one in-flight request, readable by blocking or by callback.

The underlying concurrent.futures.Future holds the single httpx.Response.
The typed outcome is computed once from it and memoized, so ``wait()`` and
any number of ``on_complete`` handlers observe the same result or error.
Every failure, including transport faults and decode errors, reaches the
caller as an APIError.
"""

from __future__ import annotations

import threading
from concurrent.futures import Future
from typing import Generic, Protocol, TypeVar

import httpx
import structlog

from alpaca_client.errors import APIError, InternalError
from alpaca_client.http.transformer import Transformer

logger = structlog.get_logger()

T = TypeVar("T")
T_contra = TypeVar("T_contra", contravariant=True)


class ResponseHandler(Protocol[T_contra]):
    """Receives exactly one of on_success / on_error, exactly once."""

    def on_success(self, result: T_contra) -> None: ...

    def on_error(self, error: APIError) -> None: ...


class Listenable(Generic[T]):
    """Typed handle to a pending HTTP response."""

    def __init__(
        self,
        transformer: Transformer[T],
        future: Future[httpx.Response],
    ) -> None:
        self._transformer = transformer
        self._future = future
        self._lock = threading.Lock()
        self._resolved = False
        self._result: T | None = None
        self._error: APIError | None = None

    def done(self) -> bool:
        """True once the underlying request has completed."""
        return self._future.done()

    def wait(self) -> T:
        """Block until the response arrives; return the entity or raise."""
        return self._outcome()

    def on_complete(self, handler: ResponseHandler[T]) -> None:
        """Register a handler; fires on the completing worker thread.

        If the request already finished, the handler runs immediately on
        the calling thread.
        """
        self._future.add_done_callback(lambda _: self._deliver(handler))

    def _deliver(self, handler: ResponseHandler[T]) -> None:
        try:
            result = self._outcome()
        except APIError as e:
            self._notify(handler, "on_error", e)
            return
        self._notify(handler, "on_success", result)

    @staticmethod
    def _notify(handler: ResponseHandler[T], method: str, value: object) -> None:
        try:
            getattr(handler, method)(value)
        except Exception:
            logger.exception("Response handler raised", handler=repr(handler))

    def _outcome(self) -> T:
        with self._lock:
            if not self._resolved:
                self._resolve()
                self._resolved = True
        if self._error is not None:
            raise self._error
        return self._result  # type: ignore[return-value]

    def _resolve(self) -> None:
        try:
            response = self._future.result()
        except Exception as e:
            self._error = InternalError.wrap(e)
            return
        try:
            self._result = self._transformer.transform(response)
        except APIError as e:
            self._error = e
        except Exception as e:
            self._error = InternalError.wrap(e)
