"""Stream wire messages and envelope decoding.

Every server frame is a JSON object ``{"stream": <tag>, "data": {...}}``.
Decoding is two-pass: read the ``stream`` tag, then validate ``data``
against the payload type for that tag. Besides the event streams, the
server sends two control tags during the handshake: ``authorization`` and
``listening``.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError

from alpaca_client.errors import StreamDecodeError
from alpaca_client.streaming.registry import SubscriptionManager
from alpaca_client.streaming.types import STREAM_PAYLOADS, Event, Stream

AUTHORIZATION = "authorization"
LISTENING = "listening"
AUTHORIZED = "authorized"


@dataclass(frozen=True)
class StreamUpdate:
    """Decoded envelope: the stream tag and its typed payload."""

    stream: Stream
    data: Event

    def to_json(self) -> str:
        return json.dumps(
            {
                "stream": self.stream.value,
                "data": self.data.model_dump(mode="json", by_alias=True),
            }
        )


def parse_frame(frame: str | bytes) -> dict[str, Any]:
    """Parse one text or binary frame into a message with a ``stream`` tag."""
    try:
        text = frame.decode("utf-8") if isinstance(frame, bytes) else frame
        message = json.loads(text)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise StreamDecodeError(f"frame is not valid JSON: {e}") from e
    if not isinstance(message, dict) or not isinstance(message.get("stream"), str):
        raise StreamDecodeError("frame has no 'stream' tag")
    return message


def decode_update(message: dict[str, Any]) -> StreamUpdate:
    """Branch on the ``stream`` tag and decode the payload it names."""
    tag = message["stream"]
    try:
        stream = Stream(tag)
    except ValueError as e:
        raise StreamDecodeError(f"unknown stream: {tag!r}") from e
    payload_type = STREAM_PAYLOADS[stream]
    try:
        data = payload_type.model_validate(message.get("data"))
    except ValidationError as e:
        raise StreamDecodeError(f"invalid {stream.value} payload: {e}") from e
    return StreamUpdate(stream=stream, data=data)


def _data(message: dict[str, Any]) -> dict[str, Any]:
    data = message.get("data")
    return data if isinstance(data, dict) else {}


def is_authorized(message: dict[str, Any]) -> bool:
    data = _data(message)
    return message.get("stream") == AUTHORIZATION and data.get("status") == AUTHORIZED


def granted_streams(message: dict[str, Any]) -> frozenset[str]:
    """Stream tags acknowledged by a ``listening`` message."""
    data = _data(message)
    return frozenset(data.get("streams") or ())


def authenticate_message(key_id: str, secret_key: str) -> str:
    return json.dumps(
        {
            "action": "authenticate",
            "data": {"key_id": key_id, "secret_key": secret_key},
        }
    )


def listen_message(streams: Iterable[Stream]) -> str:
    """Subscription request naming the streams to receive."""
    return json.dumps(
        {
            "action": "listen",
            "data": {"streams": sorted(s.value for s in streams)},
        }
    )


class StreamDecoder:
    """Decodes frames and routes their payloads through a registry."""

    def __init__(self, registry: SubscriptionManager) -> None:
        self._registry = registry

    def handle(self, frame: str | bytes) -> StreamUpdate:
        """Decode ``frame`` and dispatch its payload by the payload's kind.

        Raises:
            StreamDecodeError: If the frame is unparseable or its tag unknown.
        """
        update = decode_update(parse_frame(frame))
        self._registry.dispatch(update.data)
        return update
