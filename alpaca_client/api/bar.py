"""Bars endpoint (market data host).

Returns OHLCV bars per symbol for a timeframe. The time window is either
inclusive (start/end) or exclusive (after/until).
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from enum import Enum

from alpaca_client.api.types import Bar
from alpaca_client.http.client import HttpClient
from alpaca_client.http.listenable import Listenable
from alpaca_client.http.request import HttpMethod
from alpaca_client.http.transformer import GenericTransformer
from alpaca_client.utils.time import ensure_utc, format_timestamp_seconds
from alpaca_client.utils.validation import require_non_empty, require_range

ENDPOINT = "bars"
MAX_BARS = 1000
MAX_SYMBOLS = 200


class Timeframe(str, Enum):
    MINUTE = "minute"
    ONE_MINUTE = "1Min"
    FIVE_MINUTES = "5Min"
    FIFTEEN_MINUTES = "15Min"
    DAY = "day"
    ONE_DAY = "1D"


class BarAPI:
    def __init__(self, http_client: HttpClient) -> None:
        self._http = http_client

    def get(
        self,
        symbols: str | Sequence[str],
        timeframe: Timeframe,
        start: datetime,
        end: datetime,
        time_inclusive: bool = True,
        limit: int = 100,
    ) -> Listenable[dict[str, list[Bar]]]:
        """Return bars keyed by symbol.

        Raises:
            ValueError: If no symbol is given, there are more than 200,
                ``limit`` is outside 1 to 1000, or ``start`` is after ``end``.
        """
        names = [symbols] if isinstance(symbols, str) else list(symbols)
        if not names:
            raise ValueError("at least one symbol is required")
        for name in names:
            require_non_empty(name, "symbols")
        require_range(len(names), "symbols", 1, MAX_SYMBOLS)
        require_range(limit, "limit", 1, MAX_BARS)
        if ensure_utc(start) > ensure_utc(end):
            raise ValueError(
                f"'start' can't be after 'end'; start: {start}, end: {end}"
            )

        start_key, end_key = ("start", "end") if time_inclusive else ("after", "until")
        request = (
            self._http.prepare(HttpMethod.GET, ENDPOINT, timeframe.value)
            .add_query_param("symbols", ",".join(names))
            .add_query_param("limit", str(limit))
            .add_query_param(start_key, format_timestamp_seconds(start))
            .add_query_param(end_key, format_timestamp_seconds(end))
            .build()
        )
        return self._http.listen(request, GenericTransformer(dict[str, list[Bar]]))
