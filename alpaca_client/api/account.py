"""Account endpoint.

The account carries status, funds available for trading and withdrawal,
and the flags that can block trading or transfers.
"""

from __future__ import annotations

from alpaca_client.api.types import Account
from alpaca_client.http.client import HttpClient
from alpaca_client.http.listenable import Listenable
from alpaca_client.http.request import HttpMethod
from alpaca_client.http.transformer import ValueTransformer

ENDPOINT = "account"


class AccountAPI:
    def __init__(self, http_client: HttpClient) -> None:
        self._http = http_client

    def get(self) -> Listenable[Account]:
        """Return the account associated with the API key."""
        request = self._http.prepare(HttpMethod.GET, ENDPOINT).build()
        return self._http.listen(request, ValueTransformer(Account))
