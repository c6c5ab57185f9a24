"""Shared test fixtures for alpaca-client."""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from pathlib import Path

import httpx
import pytest

from alpaca_client.api.client import AlpacaAPI
from alpaca_client.config import ClientConfig
from alpaca_client.http.client import HttpClient

Handler = Callable[[httpx.Request], httpx.Response]

TEST_KEY_ID = "test-key"
TEST_SECRET_KEY = "test-secret"


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Keep ALPACA_* variables and any .env file out of the tests."""
    for name in list(os.environ):
        if name.startswith("ALPACA_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def client_config() -> ClientConfig:
    return ClientConfig(api_key=TEST_KEY_ID, secret_key=TEST_SECRET_KEY)


@pytest.fixture
def make_http_client() -> Iterator[Callable[[Handler], HttpClient]]:
    """Build HttpClients whose requests are answered by ``handler``."""
    clients: list[HttpClient] = []

    def factory(handler: Handler) -> HttpClient:
        client = HttpClient(
            "https://paper-api.alpaca.markets/v2",
            TEST_KEY_ID,
            TEST_SECRET_KEY,
            transport=httpx.MockTransport(handler),
        )
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.close()


@pytest.fixture
def make_api(
    client_config: ClientConfig,
) -> Iterator[Callable[[Handler], AlpacaAPI]]:
    """Build AlpacaAPI facades backed by a MockTransport."""
    apis: list[AlpacaAPI] = []

    def factory(handler: Handler) -> AlpacaAPI:
        api = AlpacaAPI(client_config, transport=httpx.MockTransport(handler))
        apis.append(api)
        return api

    yield factory
    for api in apis:
        api.close()
