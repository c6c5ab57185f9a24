"""Positions endpoint.

Open positions with cost basis and live market value. A closed position
is no longer queryable.
"""

from __future__ import annotations

from alpaca_client.api.types import Position
from alpaca_client.http.client import HttpClient
from alpaca_client.http.listenable import Listenable
from alpaca_client.http.request import HttpMethod
from alpaca_client.http.transformer import GenericTransformer, ValueTransformer
from alpaca_client.utils.validation import require_non_empty

ENDPOINT = "positions"


class PositionAPI:
    def __init__(self, http_client: HttpClient) -> None:
        self._http = http_client

    def get_all(self) -> Listenable[list[Position]]:
        """Return all open positions."""
        request = self._http.prepare(HttpMethod.GET, ENDPOINT).build()
        return self._http.listen(request, GenericTransformer(list[Position]))

    def get(self, symbol: str) -> Listenable[Position]:
        """Return the open position for ``symbol``.

        Fails with EntityNotFoundError when there is no such position.
        """
        require_non_empty(symbol, "symbol")
        request = self._http.prepare(HttpMethod.GET, ENDPOINT, symbol).build()
        return self._http.listen(request, ValueTransformer(Position))
