import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict

import yfinance as yf
from config import QuoteConfig

logger = logging.getLogger(__name__)


class QuoteError(Exception):
    """Base exception for a single failed quote fetch."""

    def __init__(self, ticker: str, message: str):
        super().__init__(f"{ticker}: {message}")
        self.ticker = ticker


class QuoteNotFoundError(QuoteError):
    pass


class QuoteNetworkError(QuoteError):
    pass


class QuoteTimeoutError(QuoteError):
    pass


@dataclass(frozen=True)
class Quote:
    """Market data snapshot for one ticker at fetch time."""
    ticker: str
    regular_market_price: float
    regular_market_change_percent: float
    regular_market_open: float = 0.0
    regular_market_day_high: float = 0.0
    regular_market_day_low: float = 0.0
    fifty_two_week_high: float = 0.0
    fifty_two_week_low: float = 0.0
    fifty_two_week_change_percent: float = 0.0
    market_cap: float = 0.0
    regular_market_volume: float = 0.0
    average_daily_volume_3month: float = 0.0


def _number(info: Dict[str, Any], key: str) -> float:
    value = info.get(key)
    try:
        return float(value) if value is not None else 0.0
    except (TypeError, ValueError):
        return 0.0


def _fifty_two_week_change(info: Dict[str, Any]) -> float:
    # Yahoo reports 52WeekChange as a fraction, fiftyTwoWeekChangePercent as percent
    if info.get("fiftyTwoWeekChangePercent") is not None:
        return _number(info, "fiftyTwoWeekChangePercent")
    return _number(info, "52WeekChange") * 100


def quote_from_info(ticker: str, info: Dict[str, Any] | None) -> Quote:
    """
    Map a Yahoo Finance info payload onto a Quote.

    Raises:
        QuoteNotFoundError: If the payload carries no price for the ticker
    """
    if not info:
        raise QuoteNotFoundError(ticker, "no quote data returned")

    price = info.get("regularMarketPrice")
    if price is None:
        price = info.get("currentPrice")
    if price is None:
        raise QuoteNotFoundError(ticker, "quote has no market price")
    try:
        price = float(price)
    except (TypeError, ValueError):
        raise QuoteNotFoundError(ticker, f"unusable market price {price!r}")

    return Quote(
        ticker=info.get("symbol") or ticker,
        regular_market_price=price,
        regular_market_change_percent=_number(info, "regularMarketChangePercent"),
        regular_market_open=_number(info, "regularMarketOpen"),
        regular_market_day_high=_number(info, "regularMarketDayHigh"),
        regular_market_day_low=_number(info, "regularMarketDayLow"),
        fifty_two_week_high=_number(info, "fiftyTwoWeekHigh"),
        fifty_two_week_low=_number(info, "fiftyTwoWeekLow"),
        fifty_two_week_change_percent=_fifty_two_week_change(info),
        market_cap=_number(info, "marketCap"),
        regular_market_volume=_number(info, "regularMarketVolume"),
        average_daily_volume_3month=_number(info, "averageDailyVolume3Month"),
    )


def _fetch_info(ticker: str) -> Dict[str, Any]:
    return yf.Ticker(ticker).info


def get_quote(ticker: str, timeout: float = QuoteConfig.TIMEOUT) -> Quote:
    """
    Fetch the current quote for a ticker.

    The provider call runs on a worker thread so a hung request is abandoned
    after `timeout` seconds instead of blocking the caller.

    Args:
        ticker: Stock ticker symbol
        timeout: Maximum seconds to wait for the provider

    Returns:
        Quote for the ticker

    Raises:
        QuoteTimeoutError: If the provider did not answer in time
        QuoteNotFoundError: If the provider returned no usable quote
        QuoteNetworkError: For any other provider failure
    """
    logger.debug(f"Fetching quote for {ticker} (timeout={timeout}s)")

    # Daemon worker: an abandoned call must not hold up interpreter exit
    outcome: Dict[str, Any] = {}

    def worker():
        try:
            outcome["info"] = _fetch_info(ticker)
        except Exception as e:
            outcome["error"] = e

    thread = threading.Thread(target=worker, name=f"quote-{ticker}", daemon=True)
    thread.start()
    thread.join(timeout)

    if thread.is_alive():
        logger.warning(f"Quote request for {ticker} timed out after {timeout}s")
        raise QuoteTimeoutError(ticker, f"timed out after {timeout}s")

    if "error" in outcome:
        e = outcome["error"]
        logger.warning(f"Quote request for {ticker} failed: {e}")
        raise QuoteNetworkError(ticker, str(e)) from e

    return quote_from_info(ticker, outcome.get("info"))
