"""Download command implementation."""

import logging
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import click
from rich.console import Console
from rich.table import Table

from ...core.constants import MAX_RETRIES_LIMIT, PREVIEW_HEAD_ROWS, PREVIEW_TAIL_ROWS
from ...exceptions import InvalidCommandError
from ...infrastructure.providers.yahoo import ChartMeta
from ...infrastructure.storage.csv_storage import CsvBarWriter
from ...models import FetchRequest, Interval, PriceBar
from ...services.statistics import PriceSummary, compute_summary
from ..error_handlers import handle_cli_errors
from ..utils.config_utils import (
    create_client,
    default_output_path,
    ensure_csv_suffix,
    get_config,
    get_default_date_range,
    resolve_cache_path,
)

console = Console()
logger = logging.getLogger(__name__)

INTERVAL_CHOICES = [interval.value for interval in Interval]


def _fmt(value) -> str:
    return "" if value is None else f"{value:.2f}"


def _bar_row(bar: PriceBar) -> List[str]:
    return [
        f"{bar.date:%Y-%m-%d %H:%M}" if bar.date.hour or bar.date.minute else f"{bar.date:%Y-%m-%d}",
        _fmt(bar.open),
        _fmt(bar.high),
        _fmt(bar.low),
        _fmt(bar.close),
        _fmt(bar.adjusted_close),
        "" if bar.volume is None else f"{bar.volume:,}",
    ]


def show_preview(bars: List[PriceBar], meta: Optional[ChartMeta] = None) -> None:
    """First bars, then the last bars when the series is long enough to elide the middle."""
    title = f"Price bars ({meta.currency})" if meta and meta.currency else "Price bars"
    table = Table(title=title)
    for name in ("Date", "Open", "High", "Low", "Close", "Adj Close", "Volume"):
        table.add_column(name, justify="left" if name == "Date" else "right")

    head = bars[:PREVIEW_HEAD_ROWS]
    for bar in head:
        table.add_row(*_bar_row(bar))

    if len(bars) > PREVIEW_HEAD_ROWS + PREVIEW_TAIL_ROWS:
        hidden = len(bars) - PREVIEW_HEAD_ROWS - PREVIEW_TAIL_ROWS
        table.add_row(f"... {hidden} more ...", *[""] * 6)
        tail = bars[-PREVIEW_TAIL_ROWS:]
    else:
        tail = bars[PREVIEW_HEAD_ROWS:]
    for bar in tail:
        table.add_row(*_bar_row(bar))

    console.print(table)


def show_statistics(summary: Optional[PriceSummary]) -> None:
    if summary is None:
        console.print("\nNo valid data for statistics calculation.")
        return

    console.print(f"\n[bold]Statistics for {summary.ticker}[/bold]")
    if summary.period_return is not None:
        pct = summary.period_return_pct
        pct_text = f" ({pct:+.2f}%)" if pct is not None else ""
        console.print(f"  Period Return:       {summary.period_return:+.2f}{pct_text}")
        console.print(f"  Start Price:         ${summary.start_price:.2f}")
        console.print(f"  End Price:           ${summary.end_price:.2f}")
    console.print(f"  Period High:         ${summary.period_high:.2f}")
    console.print(f"  Period Low:          ${summary.period_low:.2f}")
    console.print(f"  Price Range:         ${summary.price_range:.2f}")
    console.print(f"  Average Volume:      {summary.average_volume:,.0f}")
    console.print(f"  Total Trading Days:  {summary.trading_days:,}")


@click.command()
@click.option(
    "--ticker", "-t",
    required=True,
    help="Ticker symbol (e.g. AAPL, MSFT, ^GSPC)"
)
@click.option(
    "--start",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="Start date (YYYY-MM-DD). Default: one year ago"
)
@click.option(
    "--end",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    help="End date (YYYY-MM-DD). Default: today"
)
@click.option(
    "--interval", "-i",
    type=click.Choice(INTERVAL_CHOICES, case_sensitive=False),
    default=None,
    help="Bar interval. Default: from config (1d)"
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output CSV file. Default: <TICKER>_<start>_<end>.csv in the output directory"
)
@click.option(
    "--headless/--no-headless",
    default=None,
    help="Run the browser without a window (default: from config)"
)
@click.option(
    "--no-cache",
    is_flag=True,
    help="Ignore the cached session and do not write a new one"
)
@click.option(
    "--max-retries",
    type=click.IntRange(0, MAX_RETRIES_LIMIT),
    default=None,
    help="Rate-limit retries before giving up (default: from config)"
)
@click.option(
    "--no-save",
    is_flag=True,
    help="Do not write the CSV file"
)
@click.pass_context
@handle_cli_errors
def download(
    ctx: click.Context,
    ticker: str,
    start: Optional[datetime],
    end: Optional[datetime],
    interval: Optional[str],
    output: Optional[Path],
    headless: Optional[bool],
    no_cache: bool,
    max_retries: Optional[int],
    no_save: bool,
) -> None:
    """Download historical prices for one ticker.

    \b
    Examples:
        chartgate download -t AAPL
        chartgate download -t TSLA --output tesla_prices.csv
    """
    config = get_config(ctx)

    default_start, default_end = get_default_date_range()
    start = start or default_start
    end = end or default_end
    if start >= end:
        raise InvalidCommandError("download", "--start", "Start date must be before end date")

    try:
        request = FetchRequest(
            ticker=ticker,
            start=start,
            end=end,
            interval=interval or config.fetch.default_interval,
            max_retries=config.fetch.max_retries if max_retries is None else max_retries,
        )
    except ValueError as e:
        raise InvalidCommandError("download", "--ticker/--interval", str(e)) from e

    if output is None:
        output = default_output_path(request.ticker, start, end, config.general.output_directory)
    output = ensure_csv_suffix(output)

    cache_path = None if no_cache else resolve_cache_path(config)

    console.print(f"[bold]Fetching {request.ticker}[/bold] "
                  f"{start:%Y-%m-%d} to {end:%Y-%m-%d} (interval {request.interval})")

    with create_client(config, cache_path) as client:
        client.authenticate(headless=headless, use_cache=not no_cache)
        outcome = client.run(request)
        bars = outcome.unwrap()

    console.print(f"\nSuccessfully retrieved {len(bars)} price bars\n")
    show_preview(bars, outcome.meta)
    show_statistics(compute_summary(request.ticker, bars))

    if not no_save:
        CsvBarWriter(request.interval).write(bars, output)
        console.print(f"\n[green]Data saved to: {output}[/green]")
