"""
Sector aggregation: one reducer task per sector, joined into a single map.
"""
import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, Mapping, Sequence

from config import AggregationConfig
from extract import get_quote
from transform import QuoteFetcher, SectorSummary, reduce_sector

logger = logging.getLogger(__name__)

SectorSummaryMap = Dict[str, SectorSummary]


class AggregationError(Exception):
    """Raised when sector aggregation as a whole cannot produce a result."""
    pass


def aggregate(
    sectors: Mapping[str, Sequence[str]],
    fetch: QuoteFetcher = get_quote,
    max_workers: int | None = AggregationConfig.MAX_WORKERS,
    cancelled: threading.Event | None = None
) -> SectorSummaryMap:
    """
    Reduce every sector concurrently and collect the summaries.

    Each reducer hands its summary back through its future; only this
    function writes the resulting map. Returns after all reducers finish.

    Args:
        sectors: Sector name -> ticker symbols
        fetch: Quote source passed to every reducer
        max_workers: Thread count, defaults to one per sector
        cancelled: Shared flag that stops every reducer between tickers

    Returns:
        Sector name -> SectorSummary for sectors with at least one quote

    Raises:
        AggregationError: If a reducer task failed unexpectedly
    """
    summaries: SectorSummaryMap = {}
    if not sectors:
        return summaries

    workers = max_workers or len(sectors)
    started = time.perf_counter()
    logger.info(f"Aggregating {len(sectors)} sectors with {workers} workers")

    failure = None
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="sector") as executor:
        future_to_sector = {
            executor.submit(reduce_sector, sector, tickers, fetch, cancelled): sector
            for sector, tickers in sectors.items()
        }

        for future in as_completed(future_to_sector):
            sector = future_to_sector[future]
            try:
                summary = future.result()
            except Exception as e:
                logger.error(f"Sector {sector} failed: {e}", exc_info=True)
                if failure is None:
                    failure = AggregationError(f"Sector {sector} failed: {e}")
                    failure.__cause__ = e
                continue

            if summary is not None:
                summaries[sector] = summary

    if failure is not None:
        raise failure

    elapsed = time.perf_counter() - started
    logger.info(
        f"Aggregated {len(summaries)}/{len(sectors)} sectors in {elapsed:.2f}s"
    )
    return summaries
