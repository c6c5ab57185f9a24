"""Calendar endpoint.

Serves market days with their open and close times, accounting for early
closures. Queried by an inclusive date range.
"""

from __future__ import annotations

from datetime import date

from alpaca_client.api.types import Calendar
from alpaca_client.http.client import HttpClient
from alpaca_client.http.listenable import Listenable
from alpaca_client.http.request import HttpMethod
from alpaca_client.http.transformer import GenericTransformer
from alpaca_client.utils.time import format_date

ENDPOINT = "calendar"


class CalendarAPI:
    def __init__(self, http_client: HttpClient) -> None:
        self._http = http_client

    def get(self, start: date, end: date) -> Listenable[list[Calendar]]:
        """Return market days between ``start`` and ``end`` (inclusive).

        Raises:
            ValueError: If ``start`` is after ``end``.
        """
        if start > end:
            raise ValueError(
                f"'start' can't be after 'end'; start: {start}, end: {end}"
            )
        request = (
            self._http.prepare(HttpMethod.GET, ENDPOINT)
            .add_query_param("start", format_date(start))
            .add_query_param("end", format_date(end))
            .build()
        )
        return self._http.listen(request, GenericTransformer(list[Calendar]))
