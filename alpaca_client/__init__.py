"""Client library for the Alpaca brokerage REST and streaming API.

Re-exports the public entry points for convenient imports:
    from alpaca_client import AlpacaAPI, ClientConfig, OrderRequest, AlpacaError
"""

from alpaca_client.api import (
    Account,
    AlpacaAPI,
    Asset,
    Bar,
    Calendar,
    Clock,
    Order,
    OrderRequest,
    OrderType,
    Position,
    Side,
    TimeInForce,
    Timeframe,
)
from alpaca_client.config import ClientConfig
from alpaca_client.errors import (
    AlpacaError,
    APIError,
    AuthenticationError,
    CredentialsError,
    EntityNotFoundError,
    ForbiddenError,
    InternalError,
    RateLimitError,
    StreamDecodeError,
    SubscriptionError,
    UnprocessableError,
)
from alpaca_client.http import Listenable
from alpaca_client.streaming import (
    AccountUpdate,
    EventKind,
    Stream,
    StreamingAPI,
    SubscriptionManager,
    TradeEventType,
    TradeUpdate,
)

__all__ = [
    "APIError",
    "Account",
    "AccountUpdate",
    "AlpacaAPI",
    "AlpacaError",
    "Asset",
    "AuthenticationError",
    "Bar",
    "Calendar",
    "ClientConfig",
    "Clock",
    "CredentialsError",
    "EntityNotFoundError",
    "EventKind",
    "ForbiddenError",
    "InternalError",
    "Listenable",
    "Order",
    "OrderRequest",
    "OrderType",
    "Position",
    "RateLimitError",
    "Side",
    "Stream",
    "StreamDecodeError",
    "StreamingAPI",
    "SubscriptionError",
    "SubscriptionManager",
    "TimeInForce",
    "Timeframe",
    "TradeEventType",
    "TradeUpdate",
    "UnprocessableError",
]
