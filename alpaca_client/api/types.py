"""REST entity types.

Frozen pydantic models: immutable, compared structurally, decoded from and
encoded back to the wire JSON (field names match the API's snake_case keys;
Bar keeps its single-letter keys as aliases). All monetary values use
Decimal (never float).
"""

from __future__ import annotations

import datetime as dt
from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

MAX_CLIENT_ORDER_ID_LENGTH = 48


class Entity(BaseModel):
    """Base for every decoded entity."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_json(self) -> str:
        """Serialize with wire field names."""
        return self.model_dump_json(by_alias=True)


class AccountStatus(str, Enum):
    """Account lifecycle status."""

    ONBOARDING = "ONBOARDING"
    SUBMISSION_FAILED = "SUBMISSION_FAILED"
    SUBMITTED = "SUBMITTED"
    ACCOUNT_UPDATED = "ACCOUNT_UPDATED"
    APPROVAL_PENDING = "APPROVAL_PENDING"
    ACTIVE = "ACTIVE"
    REJECTED = "REJECTED"


class AssetClass(str, Enum):
    US_EQUITY = "us_equity"


class AssetStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class Exchange(str, Enum):
    AMEX = "AMEX"
    ARCA = "ARCA"
    BATS = "BATS"
    NYSE = "NYSE"
    NASDAQ = "NASDAQ"
    NYSEARCA = "NYSEARCA"
    OTC = "OTC"


class Side(str, Enum):
    """Order side."""

    BUY = "buy"
    SELL = "sell"


class PositionSide(str, Enum):
    LONG = "long"
    SHORT = "short"


class OrderType(str, Enum):
    """Supported order types."""

    MARKET = "market"
    LIMIT = "limit"
    STOP = "stop"
    STOP_LIMIT = "stop_limit"


class TimeInForce(str, Enum):
    """Time-in-force for orders."""

    DAY = "day"
    GTC = "gtc"
    OPG = "opg"
    CLS = "cls"
    IOC = "ioc"
    FOK = "fok"


class OrderStatus(str, Enum):
    """Order status as reported by the broker."""

    NEW = "new"
    PARTIALLY_FILLED = "partially_filled"
    FILLED = "filled"
    DONE_FOR_DAY = "done_for_day"
    CANCELED = "canceled"
    EXPIRED = "expired"
    REPLACED = "replaced"
    PENDING_CANCEL = "pending_cancel"
    PENDING_REPLACE = "pending_replace"
    ACCEPTED = "accepted"
    PENDING_NEW = "pending_new"
    ACCEPTED_FOR_BIDDING = "accepted_for_bidding"
    STOPPED = "stopped"
    REJECTED = "rejected"
    SUSPENDED = "suspended"
    CALCULATED = "calculated"
    HELD = "held"


# --- Entities ---


class Account(Entity):
    """Brokerage account: status, funds and trading flags."""

    id: str
    account_number: str
    status: AccountStatus
    currency: str
    buying_power: Decimal
    regt_buying_power: Decimal
    daytrading_buying_power: Decimal
    cash: Decimal
    cash_withdrawable: Decimal | None = None
    portfolio_value: Decimal
    pattern_day_trader: bool
    trading_blocked: bool
    transfers_blocked: bool
    account_blocked: bool
    trade_suspended_by_user: bool
    created_at: datetime
    shorting_enabled: bool | None = None
    multiplier: Decimal | None = None
    long_market_value: Decimal | None = None
    short_market_value: Decimal | None = None
    equity: Decimal | None = None
    last_equity: Decimal | None = None
    initial_margin: Decimal | None = None
    maintenance_margin: Decimal | None = None
    last_maintenance_margin: Decimal | None = None
    daytrade_count: int | None = None
    sma: Decimal | None = None


class Asset(Entity):
    """A tradable (or data-only) instrument."""

    id: str
    asset_class: AssetClass = Field(alias="class")
    exchange: Exchange
    symbol: str
    name: str | None = None
    status: AssetStatus
    tradable: bool
    marginable: bool = False
    shortable: bool = False
    easy_to_borrow: bool = False


class Bar(Entity):
    """OHLCV bar; ``t`` is the bar start as Unix seconds on the wire."""

    time: datetime = Field(alias="t")
    open_price: Decimal = Field(alias="o")
    high_price: Decimal = Field(alias="h")
    low_price: Decimal = Field(alias="l")
    close_price: Decimal = Field(alias="c")
    volume: int = Field(alias="v")

    @field_serializer("time")
    def serialize_time(self, value: datetime) -> int:
        return int(value.timestamp())

    @field_serializer("open_price", "high_price", "low_price", "close_price")
    def serialize_price(self, value: Decimal) -> float:
        return float(value)


class Calendar(Entity):
    """One market day with its open and close times (exchange local)."""

    date: dt.date
    open: dt.time
    close: dt.time

    @field_serializer("open", "close")
    def serialize_session_time(self, value: dt.time) -> str:
        return value.strftime("%H:%M")


class Clock(Entity):
    """Current market timestamp and the next open/close."""

    timestamp: datetime
    is_open: bool
    next_open: datetime
    next_close: datetime


class Order(Entity):
    """An order as tracked by the broker."""

    id: str
    client_order_id: str
    created_at: datetime
    updated_at: datetime | None = None
    submitted_at: datetime | None = None
    filled_at: datetime | None = None
    expired_at: datetime | None = None
    canceled_at: datetime | None = None
    failed_at: datetime | None = None
    asset_id: str
    symbol: str
    asset_class: AssetClass
    qty: Decimal
    filled_qty: Decimal
    type: OrderType
    order_type: OrderType | None = None
    side: Side
    time_in_force: TimeInForce
    limit_price: Decimal | None = None
    stop_price: Decimal | None = None
    filled_avg_price: Decimal | None = None
    status: OrderStatus
    extended_hours: bool = False


class Position(Entity):
    """An open position in one asset."""

    asset_id: str
    symbol: str
    exchange: Exchange
    asset_class: AssetClass
    avg_entry_price: Decimal
    qty: Decimal
    side: PositionSide
    market_value: Decimal
    cost_basis: Decimal
    unrealized_pl: Decimal
    unrealized_plpc: Decimal
    unrealized_intraday_pl: Decimal
    unrealized_intraday_plpc: Decimal
    current_price: Decimal
    lastday_price: Decimal
    change_today: Decimal


# --- Requests ---


class OrderRequest(BaseModel):
    """Immutable order request: what to submit to the broker."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    qty: Decimal = Field(gt=Decimal("0"))
    side: Side
    type: OrderType
    time_in_force: TimeInForce
    limit_price: Decimal | None = Field(default=None, gt=Decimal("0"))
    stop_price: Decimal | None = Field(default=None, gt=Decimal("0"))
    client_order_id: str | None = Field(
        default=None,
        max_length=MAX_CLIENT_ORDER_ID_LENGTH,
    )
    extended_hours: bool = False

    @field_validator("symbol")
    @classmethod
    def validate_symbol(cls, v: str) -> str:
        if not v.strip():
            raise ValueError(f"Invalid symbol: {v!r}")
        return v

    @model_validator(mode="after")
    def validate_prices(self) -> OrderRequest:
        """Price fields must match the order type."""
        needs_limit = self.type in (OrderType.LIMIT, OrderType.STOP_LIMIT)
        needs_stop = self.type in (OrderType.STOP, OrderType.STOP_LIMIT)
        if needs_limit and self.limit_price is None:
            raise ValueError(f"{self.type.value} order requires limit_price")
        if needs_stop and self.stop_price is None:
            raise ValueError(f"{self.type.value} order requires stop_price")
        if not needs_limit and self.limit_price is not None:
            raise ValueError(f"{self.type.value} order must not set limit_price")
        if not needs_stop and self.stop_price is not None:
            raise ValueError(f"{self.type.value} order must not set stop_price")
        return self

    @model_validator(mode="after")
    def validate_time_in_force(self) -> OrderRequest:
        if self.type == OrderType.MARKET and self.time_in_force == TimeInForce.FOK:
            raise ValueError("market order does not support time_in_force=fok")
        if self.extended_hours and (
            self.type != OrderType.LIMIT or self.time_in_force != TimeInForce.DAY
        ):
            raise ValueError(
                "extended_hours is only allowed for limit orders with "
                "time_in_force=day"
            )
        return self

    def to_json(self) -> str:
        """Request body; unset optional fields are omitted."""
        return self.model_dump_json(exclude_none=True)

