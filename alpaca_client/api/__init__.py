"""REST endpoint groups and the entities they return.

    from alpaca_client.api import AlpacaAPI, OrderRequest, Side
"""

from alpaca_client.api.account import AccountAPI
from alpaca_client.api.asset import AssetAPI
from alpaca_client.api.bar import BarAPI, Timeframe
from alpaca_client.api.calendar import CalendarAPI
from alpaca_client.api.client import AlpacaAPI
from alpaca_client.api.clock import ClockAPI
from alpaca_client.api.order import Direction, OrderAPI, OrderQueryStatus
from alpaca_client.api.position import PositionAPI
from alpaca_client.api.types import (
    Account,
    AccountStatus,
    Asset,
    AssetClass,
    AssetStatus,
    Bar,
    Calendar,
    Clock,
    Entity,
    Exchange,
    Order,
    OrderRequest,
    OrderStatus,
    OrderType,
    Position,
    PositionSide,
    Side,
    TimeInForce,
)

__all__ = [
    "Account",
    "AccountAPI",
    "AccountStatus",
    "AlpacaAPI",
    "Asset",
    "AssetAPI",
    "AssetClass",
    "AssetStatus",
    "Bar",
    "BarAPI",
    "Calendar",
    "CalendarAPI",
    "Clock",
    "ClockAPI",
    "Direction",
    "Entity",
    "Exchange",
    "Order",
    "OrderAPI",
    "OrderQueryStatus",
    "OrderRequest",
    "OrderStatus",
    "OrderType",
    "Position",
    "PositionAPI",
    "PositionSide",
    "Side",
    "TimeInForce",
    "Timeframe",
]
