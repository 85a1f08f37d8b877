"""Tests for sector quotes and price history."""

import pandas as pd
import pytest
import requests

from political_impact.data import market_data_fetcher as mdf
from political_impact.data.api_clients import RateLimiter, TWELVE_DATA, ALPHA_VANTAGE
from political_impact.data.market_data_fetcher import (
    MarketDataFetcher,
    DataSource,
    POLITICAL_STOCKS,
)
from political_impact.exceptions import InvalidArgument, MarketDataError, RateLimitExceeded


class StubTwelveData:
    """Returns canned /quote payloads, or raises the mapped exception."""

    def __init__(self, quotes):
        self.quotes = quotes
        self.requested = []

    def get(self, endpoint, params=None):
        symbol = params['symbol']
        self.requested.append(symbol)
        result = self.quotes[symbol]
        if isinstance(result, Exception):
            raise result
        return result


class StubAlphaVantage:
    def query(self, params):
        return {'Global Quote': {
            '05. price': '445.67',
            '09. change': '1.89',
            '10. change percent': '0.4300%',
        }}


def _quote(close, change_pct):
    return {'close': str(close), 'change': '1.0', 'percent_change': str(change_pct)}


def test_synthetic_quotes_are_deterministic():
    first = MarketDataFetcher(source=DataSource.SYNTHETIC).fetch_stock_data(['UNH', 'JNJ'])
    second = MarketDataFetcher(source=DataSource.SYNTHETIC).fetch_stock_data(['UNH', 'JNJ'])

    assert [q.symbol for q in first] == ['UNH', 'JNJ']
    assert [q.price for q in first] == [q.price for q in second]
    for quote in first:
        assert 50 <= quote.price <= 250
        assert -4 <= quote.change_percent <= 4


def test_batch_limited_to_ten_symbols():
    symbols = POLITICAL_STOCKS['healthcare'] + POLITICAL_STOCKS['energy'] + POLITICAL_STOCKS['tech']
    quotes = MarketDataFetcher().fetch_stock_data(symbols)
    assert len(quotes) == 10


def test_live_quotes_skip_failed_symbols():
    stub = StubTwelveData({
        'XOM': _quote(118.45, 2.78),
        'CVX': requests.ConnectionError('timeout'),
        'COP': MarketDataError('symbol not found'),
        'SLB': _quote(45.1, -1.2),
    })
    fetcher = MarketDataFetcher(source=DataSource.LIVE, twelve_data=stub)

    quotes = fetcher.fetch_stock_data(['XOM', 'CVX', 'COP', 'SLB'])

    assert [q.symbol for q in quotes] == ['XOM', 'SLB']
    assert quotes[0].price == pytest.approx(118.45)
    assert quotes[1].change_percent == pytest.approx(-1.2)


def test_rate_limit_stops_batch():
    stub = StubTwelveData({
        'XOM': _quote(118.45, 2.78),
        'CVX': RateLimitExceeded(TWELVE_DATA),
        'COP': _quote(100.0, 0.5),
    })
    fetcher = MarketDataFetcher(source=DataSource.LIVE, twelve_data=stub)

    quotes = fetcher.fetch_stock_data(['XOM', 'CVX', 'COP'])

    assert [q.symbol for q in quotes] == ['XOM']
    assert stub.requested == ['XOM', 'CVX']


def test_alpha_vantage_provider():
    fetcher = MarketDataFetcher(
        source=DataSource.LIVE,
        alpha_vantage=StubAlphaVantage(),
        quote_provider=ALPHA_VANTAGE
    )
    (quote,) = fetcher.fetch_stock_data(['LMT'])
    assert quote.price == pytest.approx(445.67)
    assert quote.change_percent == pytest.approx(0.43)


def test_unknown_quote_provider():
    with pytest.raises(InvalidArgument):
        MarketDataFetcher(quote_provider='bloomberg')


def test_sector_performance_averages():
    stub = StubTwelveData({
        'LMT': _quote(445.67, 0.5),
        'RTX': _quote(95.0, -1.5),
        'BA': _quote(180.0, 0.4),
    })
    fetcher = MarketDataFetcher(source=DataSource.LIVE, twelve_data=stub)

    snapshots = fetcher.get_sector_performance(['defense'])

    defense = snapshots['defense']
    assert [s.symbol for s in defense.stocks] == ['LMT', 'RTX', 'BA']
    assert defense.avg_change == pytest.approx((0.5 - 1.5 + 0.4) / 3)
    assert defense.sentiment == 'negative'


def test_sector_performance_without_quotes_has_no_nan():
    stub = StubTwelveData({s: requests.Timeout() for s in POLITICAL_STOCKS['tech']})
    fetcher = MarketDataFetcher(source=DataSource.LIVE, twelve_data=stub)

    snapshot = fetcher.get_sector_performance(['tech'])['tech']

    assert snapshot.stocks == []
    assert snapshot.avg_change == 0.0
    assert snapshot.sentiment == 'negative'


def test_sector_performance_defaults_skip_indices():
    snapshots = MarketDataFetcher().get_sector_performance()
    assert 'indices' not in snapshots
    assert set(snapshots) == set(POLITICAL_STOCKS) - {'indices'}

    df = MarketDataFetcher().get_sector_dataframe(snapshots)
    assert len(df) == 3 * len(snapshots)

    with pytest.raises(InvalidArgument):
        MarketDataFetcher().get_sector_performance(['indices'])


def test_synthetic_history_shape():
    df = MarketDataFetcher().fetch_historical_data('CAT', period='3mo')
    assert list(df.columns) == ['open', 'high', 'low', 'close', 'volume']
    assert len(df) == 63
    assert (df['high'] >= df['close']).all()
    assert (df['low'] <= df['close']).all()


def test_live_history_uses_yfinance(monkeypatch):
    index = pd.date_range('2024-01-01', periods=3, freq='B')
    history = pd.DataFrame({
        'Open': [1.0, 2.0, 3.0],
        'High': [1.5, 2.5, 3.5],
        'Low': [0.5, 1.5, 2.5],
        'Close': [1.2, 2.2, 3.2],
        'Volume': [100, 200, 300],
        'Dividends': [0, 0, 0],
        'Stock Splits': [0, 0, 0],
    }, index=index)

    class FakeTicker:
        def __init__(self, symbol):
            self.symbol = symbol

        def history(self, period, interval):
            return history

    monkeypatch.setattr(mdf.yf, 'Ticker', FakeTicker)

    df = MarketDataFetcher(source=DataSource.LIVE).fetch_historical_data('CAT')
    assert list(df.columns) == ['open', 'high', 'low', 'close', 'volume']
    assert df['close'].tolist() == [1.2, 2.2, 3.2]


def test_api_status_reflects_shared_limiter():
    limiter = RateLimiter({TWELVE_DATA: 5, ALPHA_VANTAGE: 5})
    limiter.record_call(TWELVE_DATA)
    fetcher = MarketDataFetcher(rate_limiter=limiter)
    assert fetcher.get_api_status()[TWELVE_DATA]['used'] == 1
