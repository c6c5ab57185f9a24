"""Orders endpoint: monitor, place and cancel orders.

Each order has a client-side id, generated by the server when not given.
Updates on open orders are also pushed over the trade_updates stream,
which is the recommended way to track order state.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from alpaca_client.api.types import Order, OrderRequest
from alpaca_client.http.client import HttpClient
from alpaca_client.http.listenable import Listenable
from alpaca_client.http.request import HttpMethod
from alpaca_client.http.transformer import (
    GenericTransformer,
    NoContentTransformer,
    ValueTransformer,
)
from alpaca_client.utils.time import ensure_utc, format_timestamp_seconds
from alpaca_client.utils.validation import require_non_empty, require_range

ENDPOINT = "orders"
BY_CLIENT_ORDER_ID_ENDPOINT = "orders:by_client_order_id"
MAX_ORDERS_PER_PAGE = 500


class OrderQueryStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"
    ALL = "all"


class Direction(str, Enum):
    ASC = "asc"
    DESC = "desc"


class OrderAPI:
    def __init__(self, http_client: HttpClient) -> None:
        self._http = http_client

    def get_all(
        self,
        status: OrderQueryStatus = OrderQueryStatus.OPEN,
        limit: int = 50,
        after: datetime | None = None,
        until: datetime | None = None,
        direction: Direction = Direction.DESC,
    ) -> Listenable[list[Order]]:
        """List orders filtered by status and submission time window.

        Args:
            status: Order status to query.
            limit: Maximum number of orders, 1 to 500.
            after: Only orders submitted after this time (exclusive).
            until: Only orders submitted until this time (exclusive).
            direction: Chronological order by submission time.

        Raises:
            ValueError: If ``limit`` is out of range or ``after`` is later
                than ``until``.
        """
        require_range(limit, "limit", 1, MAX_ORDERS_PER_PAGE)
        if (
            after is not None
            and until is not None
            and ensure_utc(after) > ensure_utc(until)
        ):
            raise ValueError(
                f"'after' must be before 'until'; after: {after}, until: {until}"
            )

        builder = (
            self._http.prepare(HttpMethod.GET, ENDPOINT)
            .add_query_param("status", status.value)
            .add_query_param("limit", str(limit))
            .add_query_param("direction", direction.value)
        )
        if after is not None:
            builder.add_query_param("after", format_timestamp_seconds(after))
        if until is not None:
            builder.add_query_param("until", format_timestamp_seconds(until))
        return self._http.listen(builder.build(), GenericTransformer(list[Order]))

    def place(self, order: OrderRequest) -> Listenable[Order]:
        """Submit a new order.

        Fails with ForbiddenError when buying power is insufficient and with
        UnprocessableError when the parameters are rejected.
        """
        request = (
            self._http.prepare(HttpMethod.POST, ENDPOINT)
            .set_body(order.to_json())
            .build()
        )
        return self._http.listen(request, ValueTransformer(Order))

    def get(self, order_id: str) -> Listenable[Order]:
        require_non_empty(order_id, "order_id")
        request = self._http.prepare(HttpMethod.GET, ENDPOINT, order_id).build()
        return self._http.listen(request, ValueTransformer(Order))

    def get_by_client_order_id(self, client_order_id: str) -> Listenable[Order]:
        require_non_empty(client_order_id, "client_order_id")
        request = (
            self._http.prepare(HttpMethod.GET, BY_CLIENT_ORDER_ID_ENDPOINT)
            .add_query_param("client_order_id", client_order_id)
            .build()
        )
        return self._http.listen(request, ValueTransformer(Order))

    def cancel(self, order_id: str) -> Listenable[None]:
        """Cancel an open order.

        Fails with EntityNotFoundError for an unknown order and with
        UnprocessableError when the order is no longer cancelable.
        """
        require_non_empty(order_id, "order_id")
        request = self._http.prepare(HttpMethod.DELETE, ENDPOINT, order_id).build()
        return self._http.listen(request, NoContentTransformer())
