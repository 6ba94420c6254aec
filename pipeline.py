"""
Market overview orchestrator and command-line entry point.

Headline indicators are fetched in the foreground while sector aggregation
runs in the background; the two halves meet before anything is rendered.
"""
import argparse
import logging
import sys
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Mapping, Sequence, Tuple

from config import LogConfig
from aggregate import SectorSummaryMap, aggregate
from extract import Quote, QuoteError, get_quote
from load import SUBTITLE, Renderer
from tickers import MARKET_INDICATORS, SECTORS
from transform import QuoteFetcher

logger = logging.getLogger(__name__)


class OverviewError(Exception):
    """Fatal error: the run cannot produce any output."""
    pass


@dataclass(frozen=True)
class MarketSnapshot:
    indicators: Tuple[Quote, ...]
    sectors: SectorSummaryMap


def configure_logging():
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if LogConfig.FILE_NAME:
        handlers.append(logging.FileHandler(LogConfig.FILE_NAME))

    logging.basicConfig(
        level=LogConfig.LEVEL,
        format=LogConfig.FORMAT,
        datefmt=LogConfig.DATE_FORMAT,
        handlers=handlers
    )


class Pipeline:
    """Runs one market overview or ticker lookup against a quote source."""

    def __init__(
        self,
        fetch: QuoteFetcher = get_quote,
        sectors: Mapping[str, Sequence[str]] = SECTORS,
        indicators: Sequence[str] = MARKET_INDICATORS
    ):
        self.fetch = fetch
        self.sectors = sectors
        self.indicators = indicators
        self.executor = None
        self.sector_future = None
        self.cancelled = threading.Event()

    def __enter__(self):
        """Context manager entry - start the background worker."""
        self.executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="aggregation")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - stop any background work still pending."""
        if exc_type is not None:
            self.cancelled.set()
        if self.executor:
            self.executor.shutdown(wait=False, cancel_futures=True)
            self.executor = None

    def _start_aggregation(self) -> Future:
        if self.executor is None:
            raise RuntimeError("Pipeline must be used as a context manager")
        return self.executor.submit(aggregate, self.sectors, self.fetch, cancelled=self.cancelled)

    def _fetch_indicators(self) -> Tuple[Quote, ...]:
        quotes = []
        for ticker in self.indicators:
            try:
                quotes.append(self.fetch(ticker))
            except QuoteError as e:
                raise OverviewError(f"Headline indicator {ticker} unavailable: {e}") from e
        return tuple(quotes)

    def run_market_overview(self) -> MarketSnapshot:
        """
        Build the full market snapshot.

        Returns:
            MarketSnapshot with headline quotes in configured order and the
            sector summaries

        Raises:
            OverviewError: If a headline indicator or the sector aggregation fails
        """
        start_time = time.perf_counter()
        sector_future = self.sector_future = self._start_aggregation()

        try:
            indicators = self._fetch_indicators()
        except OverviewError:
            self.cancelled.set()
            sector_future.cancel()
            raise

        logger.info(f"Fetched {len(indicators)} headline indicators, waiting for sectors")

        try:
            sectors = sector_future.result()
        except Exception as e:
            raise OverviewError(f"Sector aggregation failed: {e}") from e

        logger.info(
            f"✓ Market overview ready in {time.perf_counter() - start_time:.2f}s "
            f"({len(sectors)}/{len(self.sectors)} sectors)"
        )
        return MarketSnapshot(indicators=indicators, sectors=sectors)

    def run_for_ticker(self, ticker: str) -> Quote:
        """
        Fetch the detail quote for one ticker, bypassing sector aggregation.

        Raises:
            OverviewError: If the quote cannot be fetched
        """
        try:
            return self.fetch(ticker)
        except QuoteError as e:
            raise OverviewError(f"Failed to fetch {ticker}: {e}") from e


def build_market_overview(
    fetch: QuoteFetcher = get_quote,
    sectors: Mapping[str, Sequence[str]] = SECTORS,
    indicators: Sequence[str] = MARKET_INDICATORS
) -> MarketSnapshot:
    with Pipeline(fetch, sectors, indicators) as pipeline:
        return pipeline.run_market_overview()


def build_ticker_detail(ticker: str, fetch: QuoteFetcher = get_quote) -> Quote:
    with Pipeline(fetch) as pipeline:
        return pipeline.run_for_ticker(ticker)


def main(argv=None, fetch: QuoteFetcher = get_quote, renderer: Renderer | None = None) -> int:
    """
    Print the market overview, or a single ticker's detail view.

    Returns:
        Process exit status: 0 on success, 1 on a fatal fetch error
    """
    parser = argparse.ArgumentParser(prog="oikonomia", description=SUBTITLE)
    parser.add_argument(
        "ticker", nargs="?",
        help="Ticker symbol to show in detail (omit for the market overview)"
    )
    args = parser.parse_args(argv)

    configure_logging()

    try:
        if args.ticker:
            quote = build_ticker_detail(args.ticker.strip().upper(), fetch)
        else:
            snapshot = build_market_overview(fetch)
    except OverviewError as e:
        logger.error(f"✗ {e}")
        return 1

    renderer = renderer or Renderer()
    renderer.render_header()
    if args.ticker:
        renderer.render_ticker(quote)
    else:
        renderer.render_overview(snapshot)
    return 0


if __name__ == "__main__":
    sys.exit(main())
