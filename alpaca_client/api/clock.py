"""Clock endpoint: market timestamp and next open/close."""

from __future__ import annotations

from alpaca_client.api.types import Clock
from alpaca_client.http.client import HttpClient
from alpaca_client.http.listenable import Listenable
from alpaca_client.http.request import HttpMethod
from alpaca_client.http.transformer import ValueTransformer

ENDPOINT = "clock"


class ClockAPI:
    def __init__(self, http_client: HttpClient) -> None:
        self._http = http_client

    def get(self) -> Listenable[Clock]:
        request = self._http.prepare(HttpMethod.GET, ENDPOINT).build()
        return self._http.listen(request, ValueTransformer(Clock))
