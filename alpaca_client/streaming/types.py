"""Stream event types.

Events are frozen pydantic models like the REST entities. Each event class
names its EventKind, the key listeners are registered under.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import ClassVar

from alpaca_client.api.types import AccountStatus, Entity, Order


class Stream(str, Enum):
    """Stream tags carried in the ``stream`` field of each envelope."""

    TRADE_UPDATES = "trade_updates"
    ACCOUNT_UPDATES = "account_updates"


class EventKind(Enum):
    """Closed set of push-event categories; the registry key."""

    TRADE_UPDATE = "trade_update"
    ACCOUNT_UPDATE = "account_update"


class TradeEventType(str, Enum):
    """Trade update event types from the broker stream."""

    NEW = "new"
    PARTIAL_FILL = "partial_fill"
    FILL = "fill"
    DONE_FOR_DAY = "done_for_day"
    CANCELED = "canceled"
    EXPIRED = "expired"
    PENDING_CANCEL = "pending_cancel"
    STOPPED = "stopped"
    REJECTED = "rejected"
    SUSPENDED = "suspended"
    PENDING_NEW = "pending_new"
    CALCULATED = "calculated"


class Event(Entity):
    """Base for stream payloads."""

    KIND: ClassVar[EventKind]


class TradeUpdate(Event):
    """Order lifecycle event; ``qty``/``price`` are set for fills."""

    KIND: ClassVar[EventKind] = EventKind.TRADE_UPDATE

    event: TradeEventType
    qty: Decimal | None = None
    price: Decimal | None = None
    timestamp: datetime | None = None
    order: Order


class AccountUpdate(Event):
    """Account snapshot pushed when balances or status change."""

    KIND: ClassVar[EventKind] = EventKind.ACCOUNT_UPDATE

    id: str
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None
    status: AccountStatus
    currency: str
    cash: Decimal
    cash_withdrawable: Decimal | None = None


STREAM_PAYLOADS: dict[Stream, type[Event]] = {
    Stream.TRADE_UPDATES: TradeUpdate,
    Stream.ACCOUNT_UPDATES: AccountUpdate,
}
