"""Account and order updates pushed over a WebSocket."""

from alpaca_client.streaming.messages import StreamDecoder, StreamUpdate
from alpaca_client.streaming.registry import EventListener, SubscriptionManager
from alpaca_client.streaming.stream import StreamingAPI
from alpaca_client.streaming.types import (
    AccountUpdate,
    Event,
    EventKind,
    Stream,
    TradeEventType,
    TradeUpdate,
)

__all__ = [
    "AccountUpdate",
    "Event",
    "EventKind",
    "EventListener",
    "Stream",
    "StreamDecoder",
    "StreamUpdate",
    "StreamingAPI",
    "SubscriptionManager",
    "TradeEventType",
    "TradeUpdate",
]
