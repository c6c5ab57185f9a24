"""StreamingAPI: account and order updates over a WebSocket.

Bridges the push channel to synchronous listeners:
- The handshake (authenticate, then listen) runs on the caller's thread
- Frames are read by a dedicated daemon thread and dispatched to the
  SubscriptionManager on that thread
- A frame that fails to decode is dropped with a warning; the connection
  stays up. There is no automatic reconnect.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable
from typing import Any, Self

import structlog
from websockets.exceptions import ConnectionClosed, WebSocketException
from websockets.sync.client import ClientConnection, connect

from alpaca_client.errors import (
    AuthenticationError,
    CredentialsError,
    InternalError,
    StreamDecodeError,
    SubscriptionError,
)
from alpaca_client.streaming.messages import (
    AUTHORIZATION,
    LISTENING,
    StreamDecoder,
    authenticate_message,
    granted_streams,
    is_authorized,
    listen_message,
    parse_frame,
)
from alpaca_client.streaming.registry import Listener, SubscriptionManager
from alpaca_client.streaming.types import EventKind, Stream

logger = structlog.get_logger()

Connector = Callable[..., ClientConnection]


class StreamingAPI:
    """One streaming connection and the listeners attached to it.

    The SubscriptionManager lives as long as this object; listeners may be
    added before or after ``connect()``.
    """

    def __init__(
        self,
        url: str,
        key_id: str,
        secret_key: str,
        *,
        handshake_timeout: float = 10.0,
        registry: SubscriptionManager | None = None,
        connector: Connector = connect,
    ) -> None:
        if not key_id or not secret_key:
            raise CredentialsError(
                "API key and secret key are required for streaming. "
                "Set ALPACA_API_KEY and ALPACA_SECRET_KEY.",
            )
        self._url = url
        self._key_id = key_id
        self._secret_key = secret_key
        self._handshake_timeout = handshake_timeout
        self._registry = registry or SubscriptionManager()
        self._decoder = StreamDecoder(self._registry)
        self._connector = connector
        self._ws: ClientConnection | None = None
        self._reader: threading.Thread | None = None
        self._connected_event = threading.Event()
        self._lifecycle_lock = threading.Lock()
        self._streams: frozenset[Stream] = frozenset()

    @property
    def registry(self) -> SubscriptionManager:
        return self._registry

    @property
    def streams(self) -> frozenset[Stream]:
        """Streams granted on the current connection."""
        return self._streams

    def is_connected(self) -> bool:
        return self._connected_event.is_set()

    def subscribe(self, listener: Listener, kind: EventKind) -> None:
        self._registry.subscribe(listener, kind)

    def unsubscribe(self, listener: Listener, kind: EventKind) -> bool:
        return self._registry.unsubscribe(listener, kind)

    def connect(self, streams: Iterable[Stream] | None = None) -> None:
        """Open the socket, authenticate and negotiate the stream set.

        Raises:
            AuthenticationError: The server rejected the credentials.
            SubscriptionError: The granted streams differ from the request.
            InternalError: The socket failed or the handshake was malformed.
        """
        with self._lifecycle_lock:
            if self._connected_event.is_set():
                logger.warning("StreamingAPI already connected")
                return

            requested = frozenset(streams) if streams is not None else frozenset(Stream)
            try:
                ws = self._connector(self._url, open_timeout=self._handshake_timeout)
            except (OSError, TimeoutError, WebSocketException) as e:
                raise InternalError.wrap(e) from e

            try:
                self._authenticate(ws)
                self._negotiate(ws, requested)
            except BaseException:
                ws.close()
                raise

            self._ws = ws
            self._streams = requested
            self._connected_event.set()
            self._reader = threading.Thread(
                target=self._read_loop,
                args=(ws,),
                name="alpaca-stream",
                daemon=True,
            )
            self._reader.start()
            logger.info(
                "StreamingAPI connected",
                streams=sorted(s.value for s in requested),
            )

    def disconnect(self) -> None:
        """Close the socket and wait for the reader thread to finish."""
        with self._lifecycle_lock:
            if self._ws is None:
                return

            self._ws.close()
            # A listener may disconnect from the reader thread itself.
            if (
                self._reader is not None
                and self._reader is not threading.current_thread()
                and self._reader.is_alive()
            ):
                self._reader.join(timeout=5.0)
                if self._reader.is_alive():
                    logger.critical(
                        "Stream reader thread did not terminate",
                        thread=self._reader.name,
                    )

            self._ws = None
            self._reader = None
            self._streams = frozenset()
            self._connected_event.clear()
            logger.info("StreamingAPI disconnected")

    def _authenticate(self, ws: ClientConnection) -> None:
        ws.send(authenticate_message(self._key_id, self._secret_key))
        message = self._receive_control(ws, AUTHORIZATION)
        if not is_authorized(message):
            raise AuthenticationError(0, "stream authorization rejected")

    def _negotiate(self, ws: ClientConnection, requested: frozenset[Stream]) -> None:
        ws.send(listen_message(requested))
        granted = granted_streams(self._receive_control(ws, LISTENING))
        if granted != {s.value for s in requested}:
            raise SubscriptionError(granted)

    def _receive_control(self, ws: ClientConnection, tag: str) -> dict[str, Any]:
        try:
            frame = ws.recv(timeout=self._handshake_timeout)
            message = parse_frame(frame)
        except (TimeoutError, WebSocketException, StreamDecodeError) as e:
            raise InternalError.wrap(e) from e
        if message["stream"] != tag:
            raise InternalError(
                0,
                f"expected '{tag}' message, got '{message['stream']}'",
            )
        return message

    def _read_loop(self, ws: ClientConnection) -> None:
        """Target for the reader thread. Blocks until the socket closes."""
        try:
            for frame in ws:
                try:
                    self._decoder.handle(frame)
                except StreamDecodeError as e:
                    logger.warning("Dropping undecodable stream frame", error=str(e))
        except ConnectionClosed as e:
            logger.warning("Stream connection closed", code=e.rcvd.code if e.rcvd else None)
        except Exception:
            logger.exception("Stream reader thread died unexpectedly")
        finally:
            ws.close()
            self._connected_event.clear()

    def __enter__(self) -> Self:
        self.connect()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        try:
            self.disconnect()
        except Exception:
            logger.exception("Error during disconnect in __exit__")
