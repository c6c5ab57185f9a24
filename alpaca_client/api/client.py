"""AlpacaAPI: one entry point over the REST endpoints and the stream.

Trading endpoints share one HttpClient bound to the versioned trading host;
bars go to the market data host through a second client. Both clients are
closed together.
"""

from __future__ import annotations

from typing import Self

import httpx
import structlog

from alpaca_client.api.account import AccountAPI
from alpaca_client.api.asset import AssetAPI
from alpaca_client.api.bar import BarAPI
from alpaca_client.api.calendar import CalendarAPI
from alpaca_client.api.clock import ClockAPI
from alpaca_client.api.order import OrderAPI
from alpaca_client.api.position import PositionAPI
from alpaca_client.config import ClientConfig
from alpaca_client.http.client import HttpClient
from alpaca_client.streaming.registry import SubscriptionManager
from alpaca_client.streaming.stream import Connector, StreamingAPI

logger = structlog.get_logger()


class AlpacaAPI:
    """Facade exposing every endpoint group as an attribute.

    Example:
        with AlpacaAPI(ClientConfig()) as api:
            account = api.account.get().wait()
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.config = config or ClientConfig()
        self._trading = HttpClient(
            self.config.trading_url,
            self.config.api_key,
            self.config.secret_key,
            timeout=self.config.timeout,
            max_workers=self.config.max_workers,
            transport=transport,
        )
        self._data = HttpClient(
            self.config.data_url,
            self.config.api_key,
            self.config.secret_key,
            timeout=self.config.timeout,
            max_workers=self.config.max_workers,
            transport=transport,
        )

        self.account = AccountAPI(self._trading)
        self.assets = AssetAPI(self._trading)
        self.calendar = CalendarAPI(self._trading)
        self.clock = ClockAPI(self._trading)
        self.orders = OrderAPI(self._trading)
        self.positions = PositionAPI(self._trading)
        self.bars = BarAPI(self._data)
        logger.debug(
            "AlpacaAPI created",
            trading_url=self.config.trading_url,
            data_url=self.config.data_url,
            paper=self.config.paper,
        )

    def streaming(
        self,
        registry: SubscriptionManager | None = None,
        connector: Connector | None = None,
    ) -> StreamingAPI:
        """Create a StreamingAPI for this account; call ``connect()`` on it."""
        kwargs = {} if connector is None else {"connector": connector}
        return StreamingAPI(
            self.config.streaming_url,
            self.config.api_key,
            self.config.secret_key,
            handshake_timeout=self.config.handshake_timeout,
            registry=registry,
            **kwargs,
        )

    def close(self) -> None:
        self._trading.close()
        self._data.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object | None,
    ) -> None:
        self.close()
