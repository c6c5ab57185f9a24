"""Tests for the REST endpoint groups through the AlpacaAPI facade.

All requests are answered by httpx.MockTransport; no network access.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import UTC, date, datetime
from decimal import Decimal

import httpx
import pytest

from alpaca_client.api.bar import Timeframe
from alpaca_client.api.client import AlpacaAPI
from alpaca_client.api.order import Direction, OrderQueryStatus
from alpaca_client.api.types import (
    AccountStatus,
    AssetStatus,
    OrderRequest,
    OrderStatus,
    OrderType,
    PositionSide,
    Side,
    TimeInForce,
)
from alpaca_client.errors import (
    AuthenticationError,
    EntityNotFoundError,
    ForbiddenError,
    UnprocessableError,
)
from tests.factories import (
    make_account,
    make_asset,
    make_bar,
    make_clock,
    make_order,
    make_position,
)

Handler = Callable[[httpx.Request], httpx.Response]
ApiFactory = Callable[[Handler], AlpacaAPI]


class Recorder:
    """Mock transport handler that records requests and replays one response."""

    def __init__(self, response: httpx.Response) -> None:
        self.response = response
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


class TestAccountAPI:
    """Test GET /account."""

    def test_get_active_account(self, make_api: ApiFactory) -> None:
        recorder = Recorder(httpx.Response(200, json=make_account()))
        api = make_api(recorder)

        account = api.account.get().wait()

        assert account.status is AccountStatus.ACTIVE
        assert account.buying_power == Decimal("4000.32")
        assert account.trading_blocked is False
        assert recorder.last.method == "GET"
        assert recorder.last.url.host == "paper-api.alpaca.markets"
        assert recorder.last.url.path == "/v2/account"

    def test_bad_credentials(self, make_api: ApiFactory) -> None:
        api = make_api(Recorder(httpx.Response(401, json={"message": "unauthorized."})))
        with pytest.raises(AuthenticationError) as exc_info:
            api.account.get().wait()
        assert exc_info.value.status_code == 401


class TestClockAndCalendar:
    """Test GET /clock and GET /calendar."""

    def test_clock(self, make_api: ApiFactory) -> None:
        recorder = Recorder(httpx.Response(200, json=make_clock(is_open=False)))
        clock = make_api(recorder).clock.get().wait()
        assert clock.is_open is False
        assert recorder.last.url.path == "/v2/clock"

    def test_calendar_sends_date_range(self, make_api: ApiFactory) -> None:
        body = [
            {"date": "2026-02-09", "open": "09:30", "close": "16:00"},
            {"date": "2026-02-10", "open": "09:30", "close": "13:00"},
        ]
        recorder = Recorder(httpx.Response(200, json=body))
        days = make_api(recorder).calendar.get(date(2026, 2, 9), date(2026, 2, 10)).wait()

        assert [d.date for d in days] == [date(2026, 2, 9), date(2026, 2, 10)]
        assert days[1].close.hour == 13
        assert recorder.last.url.path == "/v2/calendar"
        assert recorder.last.url.params["start"] == "2026-02-09"
        assert recorder.last.url.params["end"] == "2026-02-10"

    def test_calendar_rejects_reversed_range(self, make_api: ApiFactory) -> None:
        recorder = Recorder(httpx.Response(200, json=[]))
        with pytest.raises(ValueError, match="start"):
            make_api(recorder).calendar.get(date(2026, 2, 10), date(2026, 2, 9))
        assert recorder.requests == []


class TestAssetAPI:
    """Test GET /assets and GET /assets/{symbol}."""

    def test_get_all_sends_filters(self, make_api: ApiFactory) -> None:
        recorder = Recorder(httpx.Response(200, json=[make_asset()]))
        assets = make_api(recorder).assets.get_all(status=AssetStatus.INACTIVE).wait()

        assert assets[0].symbol == "AAPL"
        assert recorder.last.url.params["status"] == "inactive"
        assert recorder.last.url.params["asset_class"] == "us_equity"

    def test_get_by_symbol(self, make_api: ApiFactory) -> None:
        recorder = Recorder(httpx.Response(200, json=make_asset()))
        asset = make_api(recorder).assets.get("AAPL").wait()
        assert asset.tradable is True
        assert recorder.last.url.path == "/v2/assets/AAPL"

    def test_empty_symbol_rejected(self, make_api: ApiFactory) -> None:
        with pytest.raises(ValueError, match="symbol"):
            make_api(Recorder(httpx.Response(200))).assets.get("  ")


class TestPositionAPI:
    """Test GET /positions."""

    def test_get_all(self, make_api: ApiFactory) -> None:
        recorder = Recorder(httpx.Response(200, json=[make_position()]))
        positions = make_api(recorder).positions.get_all().wait()
        assert len(positions) == 1
        assert positions[0].side is PositionSide.LONG
        assert positions[0].qty == Decimal("5")

    def test_unknown_position(self, make_api: ApiFactory) -> None:
        recorder = Recorder(
            httpx.Response(404, json={"code": 40410000, "message": "position does not exist"})
        )
        with pytest.raises(EntityNotFoundError) as exc_info:
            make_api(recorder).positions.get("TSLA").wait()
        assert exc_info.value.message == "position does not exist"
        assert recorder.last.url.path == "/v2/positions/TSLA"


class TestOrderAPI:
    """Test the orders endpoint group."""

    def test_get_all_defaults(self, make_api: ApiFactory) -> None:
        recorder = Recorder(httpx.Response(200, json=[make_order()]))
        orders = make_api(recorder).orders.get_all().wait()

        assert orders[0].status is OrderStatus.NEW
        params = recorder.last.url.params
        assert params["status"] == "open"
        assert params["limit"] == "50"
        assert params["direction"] == "desc"
        assert "after" not in params
        assert "until" not in params

    def test_get_all_with_window(self, make_api: ApiFactory) -> None:
        recorder = Recorder(httpx.Response(200, json=[]))
        make_api(recorder).orders.get_all(
            status=OrderQueryStatus.CLOSED,
            limit=500,
            after=datetime(2026, 2, 1, 14, 30, tzinfo=UTC),
            until=datetime(2026, 2, 2, 21, 0, tzinfo=UTC),
            direction=Direction.ASC,
        ).wait()

        params = recorder.last.url.params
        assert params["status"] == "closed"
        assert params["limit"] == "500"
        assert params["after"] == "2026-02-01T14:30:00Z"
        assert params["until"] == "2026-02-02T21:00:00Z"
        assert params["direction"] == "asc"

    @pytest.mark.parametrize("limit", [0, 501])
    def test_get_all_limit_out_of_range(self, make_api: ApiFactory, limit: int) -> None:
        with pytest.raises(ValueError, match="limit"):
            make_api(Recorder(httpx.Response(200))).orders.get_all(limit=limit)

    def test_get_all_reversed_window(self, make_api: ApiFactory) -> None:
        with pytest.raises(ValueError, match="after"):
            make_api(Recorder(httpx.Response(200))).orders.get_all(
                after=datetime(2026, 2, 2, tzinfo=UTC),
                until=datetime(2026, 2, 1, tzinfo=UTC),
            )

    def test_place_posts_request_body(self, make_api: ApiFactory) -> None:
        recorder = Recorder(
            httpx.Response(
                200,
                json=make_order(type="limit", limit_price="150.25", time_in_force="gtc"),
            )
        )
        request = OrderRequest(
            symbol="AAPL",
            qty=Decimal("15"),
            side=Side.BUY,
            type=OrderType.LIMIT,
            time_in_force=TimeInForce.GTC,
            limit_price=Decimal("150.25"),
        )

        order = make_api(recorder).orders.place(request).wait()

        assert order.limit_price == Decimal("150.25")
        assert recorder.last.method == "POST"
        assert recorder.last.url.path == "/v2/orders"
        body = json.loads(recorder.last.content)
        assert body["symbol"] == "AAPL"
        assert body["type"] == "limit"
        assert body["limit_price"] == "150.25"
        assert "stop_price" not in body

    def test_place_without_buying_power(self, make_api: ApiFactory) -> None:
        recorder = Recorder(
            httpx.Response(
                403,
                json={"code": 40310000, "message": "insufficient buying power"},
                extensions={"reason_phrase": b"Buying power is not sufficient"},
            )
        )
        request = OrderRequest(
            symbol="AAPL",
            qty=Decimal("100000"),
            side=Side.BUY,
            type=OrderType.MARKET,
            time_in_force=TimeInForce.DAY,
        )

        with pytest.raises(ForbiddenError) as exc_info:
            make_api(recorder).orders.place(request).wait()

        assert exc_info.value.status_code == 403
        assert exc_info.value.reason == "Buying power is not sufficient"

    def test_unknown_order(self, make_api: ApiFactory) -> None:
        recorder = Recorder(httpx.Response(404, json={"message": "order not found"}))
        with pytest.raises(EntityNotFoundError):
            make_api(recorder).orders.get("does-not-exist").wait()
        assert recorder.last.url.path == "/v2/orders/does-not-exist"

    def test_get_by_client_order_id(self, make_api: ApiFactory) -> None:
        recorder = Recorder(httpx.Response(200, json=make_order(client_order_id="my-id")))
        order = make_api(recorder).orders.get_by_client_order_id("my-id").wait()
        assert order.client_order_id == "my-id"
        assert recorder.last.url.path == "/v2/orders:by_client_order_id"
        assert recorder.last.url.params["client_order_id"] == "my-id"

    def test_cancel_no_content(self, make_api: ApiFactory) -> None:
        recorder = Recorder(httpx.Response(204))
        result = make_api(recorder).orders.cancel("61e69015").wait()
        assert result is None
        assert recorder.last.method == "DELETE"
        assert recorder.last.url.path == "/v2/orders/61e69015"

    def test_cancel_not_cancelable(self, make_api: ApiFactory) -> None:
        recorder = Recorder(httpx.Response(422, json={"message": "order is not cancelable"}))
        with pytest.raises(UnprocessableError):
            make_api(recorder).orders.cancel("61e69015").wait()

    def test_empty_order_id_rejected(self, make_api: ApiFactory) -> None:
        with pytest.raises(ValueError, match="order_id"):
            make_api(Recorder(httpx.Response(200))).orders.cancel("")


class TestBarAPI:
    """Test GET /bars/{timeframe} on the data host."""

    def test_inclusive_window(self, make_api: ApiFactory) -> None:
        recorder = Recorder(httpx.Response(200, json={"AAPL": [make_bar()], "TSLA": []}))
        bars = make_api(recorder).bars.get(
            ["AAPL", "TSLA"],
            Timeframe.ONE_MINUTE,
            datetime(2026, 2, 10, 14, 30, tzinfo=UTC),
            datetime(2026, 2, 10, 15, 30, tzinfo=UTC),
            limit=10,
        ).wait()

        assert bars["AAPL"][0].volume == 1200
        assert bars["AAPL"][0].time == datetime.fromtimestamp(1770735600, tz=UTC)
        assert bars["TSLA"] == []
        sent = recorder.last
        assert sent.url.host == "data.alpaca.markets"
        assert sent.url.path == "/v1/bars/1Min"
        assert sent.url.params["symbols"] == "AAPL,TSLA"
        assert sent.url.params["limit"] == "10"
        assert sent.url.params["start"] == "2026-02-10T14:30:00Z"
        assert sent.url.params["end"] == "2026-02-10T15:30:00Z"

    def test_exclusive_window(self, make_api: ApiFactory) -> None:
        recorder = Recorder(httpx.Response(200, json={"AAPL": []}))
        make_api(recorder).bars.get(
            "AAPL",
            Timeframe.DAY,
            datetime(2026, 2, 1, tzinfo=UTC),
            datetime(2026, 2, 10, tzinfo=UTC),
            time_inclusive=False,
        ).wait()

        params = recorder.last.url.params
        assert params["after"] == "2026-02-01T00:00:00Z"
        assert params["until"] == "2026-02-10T00:00:00Z"
        assert "start" not in params
        assert "end" not in params

    @pytest.mark.parametrize("limit", [0, 1001])
    def test_limit_out_of_range(self, make_api: ApiFactory, limit: int) -> None:
        with pytest.raises(ValueError, match="limit"):
            make_api(Recorder(httpx.Response(200))).bars.get(
                "AAPL",
                Timeframe.DAY,
                datetime(2026, 2, 1, tzinfo=UTC),
                datetime(2026, 2, 10, tzinfo=UTC),
                limit=limit,
            )

    def test_start_after_end(self, make_api: ApiFactory) -> None:
        with pytest.raises(ValueError, match="start"):
            make_api(Recorder(httpx.Response(200))).bars.get(
                "AAPL",
                Timeframe.DAY,
                datetime(2026, 2, 10, tzinfo=UTC),
                datetime(2026, 2, 1, tzinfo=UTC),
            )

    def test_no_symbols(self, make_api: ApiFactory) -> None:
        with pytest.raises(ValueError, match="symbol"):
            make_api(Recorder(httpx.Response(200))).bars.get(
                [],
                Timeframe.DAY,
                datetime(2026, 2, 1, tzinfo=UTC),
                datetime(2026, 2, 10, tzinfo=UTC),
            )


class TestAlpacaAPI:
    """Test the facade wiring."""

    def test_live_urls(self) -> None:
        from alpaca_client.config import ClientConfig

        recorder = Recorder(httpx.Response(200, json=make_clock()))
        config = ClientConfig(api_key="k", secret_key="s", paper=False)
        with AlpacaAPI(config, transport=httpx.MockTransport(recorder)) as api:
            api.clock.get().wait()
        assert recorder.last.url.host == "api.alpaca.markets"

    def test_streaming_shares_given_registry(self, make_api: ApiFactory) -> None:
        from alpaca_client.streaming.registry import SubscriptionManager

        registry = SubscriptionManager()
        streaming = make_api(Recorder(httpx.Response(200))).streaming(registry=registry)
        assert streaming.registry is registry
        assert streaming.is_connected() is False
