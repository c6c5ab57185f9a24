"""Click CLI commands for alpaca-client."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import TypeVar

import click

from alpaca_client.api.client import AlpacaAPI
from alpaca_client.config import ClientConfig
from alpaca_client.errors import AlpacaError
from alpaca_client.http.listenable import Listenable
from alpaca_client.streaming.types import AccountUpdate, EventKind, Stream, TradeUpdate
from alpaca_client.utils.logging import MASK, setup_logging

T = TypeVar("T")


def _run(call: Callable[[AlpacaAPI], Listenable[T]]) -> T:
    """Build a client from the environment and wait on one request."""
    try:
        config = ClientConfig()
        setup_logging(config.log_level, config.log_format)
        with AlpacaAPI(config) as api:
            return call(api).wait()
    except AlpacaError as e:
        raise click.ClickException(str(e)) from e


@click.group()
def cli() -> None:
    """alpaca-client: command line access to an Alpaca account."""


@cli.command()
def account() -> None:
    """Show account status and buying power."""
    acct = _run(lambda api: api.account.get())

    click.echo(f"Account:       {acct.account_number}")
    click.echo(f"Status:        {acct.status.value}")
    click.echo(f"Currency:      {acct.currency}")
    click.echo(f"Cash:          {acct.cash:,.2f}")
    click.echo(f"Buying Power:  {acct.buying_power:,.2f}")
    click.echo(f"Portfolio:     {acct.portfolio_value:,.2f}")
    if acct.trading_blocked or acct.account_blocked:
        click.echo("Trading is blocked on this account.")


@cli.command()
def clock() -> None:
    """Show whether the market is open and the next session times."""
    clk = _run(lambda api: api.clock.get())

    click.echo(f"Timestamp:   {clk.timestamp.isoformat()}")
    click.echo(f"Open:        {'yes' if clk.is_open else 'no'}")
    click.echo(f"Next Open:   {clk.next_open.isoformat()}")
    click.echo(f"Next Close:  {clk.next_close.isoformat()}")


@cli.command()
def positions() -> None:
    """List open positions."""
    held = _run(lambda api: api.positions.get_all())

    if not held:
        click.echo("No open positions.")
        return
    for p in held:
        click.echo(
            f"{p.symbol:<8} {p.side.value:<5} {p.qty:>10} @ {p.avg_entry_price:,.2f}"
            f"  P/L {p.unrealized_pl:,.2f}"
        )


@cli.command()
def config() -> None:
    """Show current configuration (credentials masked)."""
    cfg = ClientConfig()

    click.echo("=== alpaca-client Configuration ===\n")

    click.echo(f"API Key:      {MASK if cfg.api_key else '(not set)'}")
    click.echo(f"Secret Key:   {MASK if cfg.secret_key else '(not set)'}")
    click.echo(f"Paper:        {cfg.paper}")
    click.echo("")

    click.echo("[Endpoints]")
    click.echo(f"  Trading:    {cfg.trading_url}")
    click.echo(f"  Data:       {cfg.data_url}")
    click.echo(f"  Stream:     {cfg.streaming_url}")
    click.echo("")

    click.echo(f"Timeout:      {cfg.timeout}")
    click.echo(f"Max Workers:  {cfg.max_workers}")
    click.echo(f"Log Level:    {cfg.log_level}")
    click.echo(f"Log Format:   {cfg.log_format}")


@cli.command()
@click.option(
    "--streams",
    default="trade_updates,account_updates",
    help="Comma-separated streams (default: trade_updates,account_updates).",
)
def stream(streams: str) -> None:
    """Print trade and account updates until interrupted."""
    try:
        requested = [Stream(s.strip()) for s in streams.split(",") if s.strip()]
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--streams") from e

    def print_trade(event: TradeUpdate) -> None:
        click.echo(
            f"[trade] {event.event.value} {event.order.symbol} "
            f"{event.order.side.value} {event.order.qty} ({event.order.status.value})"
        )

    def print_account(event: AccountUpdate) -> None:
        click.echo(f"[account] {event.id} cash={event.cash}")

    try:
        cfg = ClientConfig()
        setup_logging(cfg.log_level, cfg.log_format)
        with AlpacaAPI(cfg) as api:
            streaming = api.streaming()
            streaming.subscribe(print_trade, EventKind.TRADE_UPDATE)
            streaming.subscribe(print_account, EventKind.ACCOUNT_UPDATE)
            streaming.connect(requested)
            click.echo(f"Listening on {', '.join(s.value for s in requested)}...")
            try:
                while streaming.is_connected():
                    time.sleep(1.0)
            except KeyboardInterrupt:
                pass
            finally:
                streaming.disconnect()
    except AlpacaError as e:
        raise click.ClickException(str(e)) from e
