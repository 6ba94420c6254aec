import logging
import threading

import pytest

from extract import QuoteNetworkError, QuoteTimeoutError
from transform import ChangeDirection, SectorSummary, classify_change, reduce_sector
from tests.mocks.quote_mocks import FakeQuoteSource, make_quote


@pytest.mark.parametrize("value, expected", [
    (0.0, ChangeDirection.NEUTRAL),
    (-0.0, ChangeDirection.NEUTRAL),
    (0.0001, ChangeDirection.POSITIVE),
    (-0.0001, ChangeDirection.NEGATIVE),
    (12.5, ChangeDirection.POSITIVE),
    (-3.0, ChangeDirection.NEGATIVE),
])
def test_classify_change(value, expected):
    assert classify_change(value) is expected


def test_reduce_sector_averages_all_tickers():
    """Mean over three successful quotes."""
    fetch = FakeQuoteSource({
        "JPM": make_quote("JPM", change=1.0, change_52wk=10.0),
        "GS": make_quote("GS", change=-2.0, change_52wk=20.0),
        "BAC": make_quote("BAC", change=3.0, change_52wk=30.0),
    })

    summary = reduce_sector("Finance", ["JPM", "GS", "BAC"], fetch)

    assert summary.average_change_percent == pytest.approx(0.6667, abs=0.001)
    assert summary.average_52wk_change_percent == pytest.approx(20.0)
    assert summary.tickers_fetched == 3


def test_reduce_sector_skips_failed_ticker(caplog):
    """A failed ticker is logged and excluded from the average."""
    fetch = FakeQuoteSource({
        "JPM": QuoteNetworkError("JPM", "connection reset"),
        "GS": make_quote("GS", change=2.0, change_52wk=5.0),
    })

    with caplog.at_level(logging.WARNING):
        summary = reduce_sector("Finance", ["JPM", "GS"], fetch)

    assert summary == SectorSummary(
        average_change_percent=2.0,
        average_52wk_change_percent=5.0,
        tickers_fetched=1,
    )
    assert "JPM" in caplog.text
    assert "connection reset" in caplog.text


def test_reduce_sector_all_failed_returns_none():
    fetch = FakeQuoteSource({"JPM": QuoteTimeoutError("JPM", "timed out")})

    assert reduce_sector("Finance", ["JPM"], fetch) is None


def test_reduce_sector_empty_ticker_list_returns_none():
    assert reduce_sector("Empty", [], FakeQuoteSource({})) is None


def test_reduce_sector_fetches_in_order_and_continues_after_failure():
    fetch = FakeQuoteSource({
        "A": make_quote("A", change=1.0),
        "C": make_quote("C", change=3.0),
    })

    summary = reduce_sector("Letters", ["A", "B", "C"], fetch)

    assert fetch.calls == ["A", "B", "C"]
    assert summary.average_change_percent == pytest.approx(2.0)


def test_reduce_sector_stops_when_cancelled():
    cancelled = threading.Event()
    quotes = {t: make_quote(t, change=1.0) for t in ["A", "B", "C"]}

    def fetch(ticker):
        if ticker == "A":
            cancelled.set()
        return quotes[ticker]

    assert reduce_sector("Letters", ["A", "B", "C"], fetch, cancelled) is None
