import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable

import pandas as pd
from extract import Quote, QuoteError, get_quote

logger = logging.getLogger(__name__)

QuoteFetcher = Callable[[str], Quote]


class ChangeDirection(Enum):
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


def classify_change(value: float) -> ChangeDirection:
    """Classify a percent change by sign; exactly zero is neutral."""
    if value > 0:
        return ChangeDirection.POSITIVE
    if value < 0:
        return ChangeDirection.NEGATIVE
    return ChangeDirection.NEUTRAL


@dataclass(frozen=True)
class SectorSummary:
    average_change_percent: float
    average_52wk_change_percent: float
    tickers_fetched: int


def reduce_sector(
    sector: str,
    tickers: Iterable[str],
    fetch: QuoteFetcher = get_quote,
    cancelled: threading.Event | None = None
) -> SectorSummary | None:
    """
    Fetch every ticker of a sector in turn and average the successful quotes.

    Failed tickers are logged and left out of the averages.

    Args:
        sector: Sector name, used for logging
        tickers: Ticker symbols belonging to the sector
        fetch: Quote source called once per ticker
        cancelled: When set, stop before the next ticker and return None

    Returns:
        SectorSummary over the fetched tickers, or None if every fetch failed
    """
    records = []

    for ticker in tickers:
        if cancelled is not None and cancelled.is_set():
            logger.info(f"Sector {sector} cancelled before {ticker}")
            return None

        try:
            quote = fetch(ticker)
        except QuoteError as e:
            logger.warning(f"Error fetching {ticker} ({sector}): {e}")
            continue

        records.append({
            "change": quote.regular_market_change_percent,
            "change_52wk": quote.fifty_two_week_change_percent,
        })

    if not records:
        logger.warning(f"No quotes fetched for sector {sector}, omitting it")
        return None

    means = pd.DataFrame(records).mean()

    logger.info(f"Sector {sector}: averaged {len(records)} tickers")
    return SectorSummary(
        average_change_percent=float(means["change"]),
        average_52wk_change_percent=float(means["change_52wk"]),
        tickers_fetched=len(records),
    )
