"""HttpClient: executes request descriptors on a worker pool.

Requests are sent with a shared httpx.Client from a ThreadPoolExecutor, so
each call returns immediately with a Future that the pool completes. The
worker threads are the "transport" threads that fire Listenable callbacks.
"""

from __future__ import annotations

from concurrent.futures import Future, ThreadPoolExecutor
from typing import Self, TypeVar

import httpx
import structlog

from alpaca_client.errors import CredentialsError
from alpaca_client.http.listenable import Listenable
from alpaca_client.http.request import (
    HttpMethod,
    RequestBuilder,
    RequestDescriptor,
    auth_headers,
)
from alpaca_client.http.transformer import Transformer

logger = structlog.get_logger()

T = TypeVar("T")


class HttpClient:
    """Authenticated REST client bound to one base URL."""

    def __init__(
        self,
        base_url: str,
        key_id: str,
        secret_key: str,
        *,
        timeout: float = 30.0,
        max_workers: int = 4,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not key_id:
            raise CredentialsError(
                "API key is required. Set ALPACA_API_KEY environment variable.",
            )
        if not secret_key:
            raise CredentialsError(
                "API secret key is required. "
                "Set ALPACA_SECRET_KEY environment variable.",
            )
        self.base_url = base_url
        self._headers = auth_headers(key_id, secret_key)
        self._client = httpx.Client(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="alpaca-http",
        )

    def prepare(self, method: HttpMethod, *segments: str) -> RequestBuilder:
        """Start a request carrying this client's auth headers."""
        return RequestBuilder(method, *segments, headers=self._headers)

    def execute(self, request: RequestDescriptor) -> Future[httpx.Response]:
        """Submit the request; the Future resolves to the raw response."""
        return self._executor.submit(self._send, request)

    def listen(
        self,
        request: RequestDescriptor,
        transformer: Transformer[T],
    ) -> Listenable[T]:
        """Execute and wrap the pending response for typed retrieval."""
        return Listenable(transformer, self.execute(request))

    def _send(self, request: RequestDescriptor) -> httpx.Response:
        with structlog.contextvars.bound_contextvars(
            method=request.method.value,
            path=request.path,
        ):
            logger.debug("Sending request")
            response = self._client.request(
                request.method.value,
                request.path,
                params=dict(request.params) or None,
                content=request.body,
                headers=dict(request.headers),
            )
            logger.debug(
                "Received response",
                status_code=response.status_code,
                request_id=response.headers.get("X-Request-ID"),
            )
            return response

    def close(self) -> None:
        """Wait for in-flight requests, then release connections."""
        self._executor.shutdown(wait=True)
        self._client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        self.close()
