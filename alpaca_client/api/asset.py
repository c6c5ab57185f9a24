"""Assets endpoint: the master list of instruments.

Some assets are data-only and carry ``tradable=False``.
"""

from __future__ import annotations

from alpaca_client.api.types import Asset, AssetClass, AssetStatus
from alpaca_client.http.client import HttpClient
from alpaca_client.http.listenable import Listenable
from alpaca_client.http.request import HttpMethod
from alpaca_client.http.transformer import GenericTransformer, ValueTransformer
from alpaca_client.utils.validation import require_non_empty

ENDPOINT = "assets"


class AssetAPI:
    def __init__(self, http_client: HttpClient) -> None:
        self._http = http_client

    def get_all(
        self,
        status: AssetStatus = AssetStatus.ACTIVE,
        asset_class: AssetClass = AssetClass.US_EQUITY,
    ) -> Listenable[list[Asset]]:
        request = (
            self._http.prepare(HttpMethod.GET, ENDPOINT)
            .add_query_param("status", status.value)
            .add_query_param("asset_class", asset_class.value)
            .build()
        )
        return self._http.listen(request, GenericTransformer(list[Asset]))

    def get(self, symbol: str) -> Listenable[Asset]:
        """Return the asset for ``symbol`` (EntityNotFoundError if unknown)."""
        require_non_empty(symbol, "symbol")
        request = self._http.prepare(HttpMethod.GET, ENDPOINT, symbol).build()
        return self._http.listen(request, ValueTransformer(Asset))
