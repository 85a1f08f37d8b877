"""
Market Data Fetcher

Fetches price snapshots and history for politically sensitive stocks.
The data source (live quote services or synthetic data) is chosen up
front; a failed live request never silently turns into synthetic data.
"""

import zlib
from datetime import datetime
from typing import Dict, List, Optional, Any, Sequence
from dataclasses import dataclass, field
from enum import Enum

import pandas as pd
import numpy as np
import requests
import yfinance as yf
from loguru import logger

from .api_clients import RateLimiter, TwelveDataClient, AlphaVantageClient, TWELVE_DATA, ALPHA_VANTAGE
from .political_events import coerce_enum
from ..exceptions import InvalidArgument, MarketDataError, RateLimitExceeded


# Key political-sensitive stocks by sector
POLITICAL_STOCKS = {
    # Healthcare - sensitive to healthcare policy
    'healthcare': ['UNH', 'JNJ', 'PFE', 'ABBV', 'MRK'],

    # Energy - sensitive to environmental/energy policy
    'energy': ['XOM', 'CVX', 'COP', 'SLB', 'MPC'],

    # Defense - sensitive to foreign policy/defense spending
    'defense': ['LMT', 'RTX', 'BA', 'NOC', 'GD'],

    # Financial - sensitive to regulatory policy
    'financial': ['JPM', 'BAC', 'WFC', 'GS', 'MS'],

    # Tech - sensitive to antitrust/tech regulation
    'tech': ['AAPL', 'MSFT', 'GOOGL', 'AMZN', 'META'],

    # Infrastructure - sensitive to infrastructure spending
    'infrastructure': ['CAT', 'DE', 'UNP', 'CSX', 'NSC'],

    # Market indices (S&P 500, Dow, Nasdaq)
    'indices': ['^GSPC', '^DJI', '^IXIC'],
}

INDEX_GROUP = 'indices'


class DataSource(Enum):
    """Where market data comes from."""
    LIVE = "live"
    SYNTHETIC = "synthetic"


@dataclass
class StockQuote:
    """Latest price snapshot for a symbol."""
    symbol: str
    price: float
    change: float
    change_percent: float
    timestamp: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            'symbol': self.symbol,
            'price': round(self.price, 2),
            'change': round(self.change, 2),
            'change_percent': round(self.change_percent, 2),
            'timestamp': self.timestamp.isoformat(),
        }


@dataclass
class SectorSnapshot:
    """Quotes for a sector and their average move."""
    sector: str
    stocks: List[StockQuote] = field(default_factory=list)
    avg_change: float = 0.0
    sentiment: str = 'negative'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'sector': self.sector,
            'stocks': [s.to_dict() for s in self.stocks],
            'avg_change': round(self.avg_change, 3),
            'sentiment': self.sentiment,
        }


class MarketDataFetcher:
    """Fetch quotes and price history for political sector stocks."""

    MAX_SYMBOLS_PER_BATCH = 10
    QUOTE_PROVIDERS = (TWELVE_DATA, ALPHA_VANTAGE)

    def __init__(
        self,
        source: DataSource = DataSource.SYNTHETIC,
        rate_limiter: Optional[RateLimiter] = None,
        twelve_data: Optional[TwelveDataClient] = None,
        alpha_vantage: Optional[AlphaVantageClient] = None,
        quote_provider: str = TWELVE_DATA,
        seed: int = 42
    ):
        """Initialize the market data fetcher.

        Args:
            source: LIVE for the quote services, SYNTHETIC for generated data
            rate_limiter: Limiter shared by the live clients
            twelve_data: Twelve Data client (built from rate_limiter if omitted)
            alpha_vantage: Alpha Vantage client (built from rate_limiter if omitted)
            quote_provider: 'twelve_data' or 'alpha_vantage'
            seed: Base seed for synthetic data
        """
        if quote_provider not in self.QUOTE_PROVIDERS:
            raise InvalidArgument(f"Unknown quote provider {quote_provider!r}")

        self.source = source
        self.rate_limiter = rate_limiter or RateLimiter()
        self.twelve_data = twelve_data or TwelveDataClient(self.rate_limiter)
        self.alpha_vantage = alpha_vantage or AlphaVantageClient(self.rate_limiter)
        self.quote_provider = quote_provider
        self.seed = seed

    @classmethod
    def from_config(cls, config) -> 'MarketDataFetcher':
        """Build a fetcher from a ConfigLoader."""
        market_cfg = config.market_data
        timeout = market_cfg.get('timeout', 10)
        limiter = RateLimiter(config.rate_limits or None)

        source = coerce_enum(DataSource, market_cfg.get('source', DataSource.SYNTHETIC.value), 'data source')

        return cls(
            source=source,
            rate_limiter=limiter,
            twelve_data=TwelveDataClient(limiter, api_key=config.twelve_data_key, timeout=timeout),
            alpha_vantage=AlphaVantageClient(limiter, api_key=config.alpha_vantage_key, timeout=timeout),
            quote_provider=market_cfg.get('quote_provider', TWELVE_DATA),
        )

    def _rng(self, symbol: str) -> np.random.Generator:
        """Deterministic generator per symbol."""
        return np.random.default_rng(self.seed + zlib.crc32(symbol.encode()))

    def fetch_stock_data(self, symbols: Sequence[str]) -> List[StockQuote]:
        """Fetch current quotes.

        Args:
            symbols: Ticker symbols; only the first 10 are fetched

        Returns:
            Quotes for every symbol that could be fetched
        """
        symbols = list(symbols)[:self.MAX_SYMBOLS_PER_BATCH]

        if self.source is DataSource.SYNTHETIC:
            return [self._synthetic_quote(s) for s in symbols]

        results = []
        for symbol in symbols:
            try:
                results.append(self._fetch_live_quote(symbol))
            except RateLimitExceeded as e:
                logger.warning(f"{e}, returning {len(results)} of {len(symbols)} quotes")
                break
            except (requests.RequestException, MarketDataError, KeyError, ValueError) as e:
                logger.error(f"Failed to fetch {symbol} from {self.quote_provider}: {e}")

        logger.info(f"Fetched {len(results)} live quotes")
        return results

    def _fetch_live_quote(self, symbol: str) -> StockQuote:
        if self.quote_provider == ALPHA_VANTAGE:
            data = self.alpha_vantage.query({'function': 'GLOBAL_QUOTE', 'symbol': symbol})
            quote = data['Global Quote']
            return StockQuote(
                symbol=symbol,
                price=float(quote['05. price']),
                change=float(quote['09. change']),
                change_percent=float(quote['10. change percent'].rstrip('%')),
                timestamp=datetime.now(),
            )

        data = self.twelve_data.get('/quote', {'symbol': symbol, 'interval': '1day'})
        return StockQuote(
            symbol=symbol,
            price=float(data['close']),
            change=float(data.get('change', 0)),
            change_percent=float(data.get('percent_change', 0)),
            timestamp=datetime.now(),
        )

    def _synthetic_quote(self, symbol: str) -> StockQuote:
        """Generate a demo quote for a symbol."""
        rng = self._rng(symbol)
        price = float(rng.uniform(50, 250))
        change_percent = float(rng.uniform(-4, 4))
        return StockQuote(
            symbol=symbol,
            price=price,
            change=price * change_percent / 100,
            change_percent=change_percent,
            timestamp=datetime.now(),
        )

    def fetch_historical_data(self, symbol: str, period: str = "6mo") -> pd.DataFrame:
        """Fetch daily OHLCV history.

        Args:
            symbol: Ticker symbol
            period: yfinance period (1mo, 3mo, 6mo, 1y, 2y, 5y)

        Returns:
            DataFrame with open/high/low/close/volume columns
        """
        if self.source is DataSource.SYNTHETIC:
            return self._generate_demo_price_data(symbol, period)

        df = yf.Ticker(symbol).history(period=period, interval="1d")
        if df.empty:
            logger.warning(f"No data returned for {symbol}")
            return df

        # Clean column names
        df.columns = [c.lower().replace(' ', '_') for c in df.columns]
        logger.info(f"Fetched {len(df)} bars for {symbol}")
        return df[['open', 'high', 'low', 'close', 'volume']]

    def _generate_demo_price_data(self, symbol: str, period: str = "6mo") -> pd.DataFrame:
        """Generate demo price data for testing."""
        logger.debug(f"Generating demo price data for {symbol}")

        period_days = {
            '1mo': 21, '3mo': 63, '6mo': 126,
            '1y': 252, '2y': 504, '5y': 1260
        }.get(period, 126)

        dates = pd.bdate_range(end=datetime.now().date(), periods=period_days)
        rng = self._rng(symbol)

        base = float(rng.uniform(50, 250))
        returns = rng.normal(0.0003, 0.012, len(dates))
        close = base * np.exp(np.cumsum(returns))

        high = close * (1 + np.abs(rng.normal(0, 1, len(dates))) * 0.01)
        low = close * (1 - np.abs(rng.normal(0, 1, len(dates))) * 0.01)
        open_price = close + rng.normal(0, 1, len(dates)) * close * 0.005
        volume = rng.integers(1_000_000, 50_000_000, len(dates))

        return pd.DataFrame({
            'open': open_price,
            'high': high,
            'low': low,
            'close': close,
            'volume': volume
        }, index=dates)

    def get_sector_performance(
        self,
        sectors: Optional[Sequence[str]] = None,
        per_sector: int = 3
    ) -> Dict[str, SectorSnapshot]:
        """Get average price moves for each political sector.

        Args:
            sectors: Sector names. Defaults to all sectors except indices.
            per_sector: Stocks to sample per sector

        Returns:
            SectorSnapshot per sector
        """
        if sectors is None:
            sectors = [s for s in POLITICAL_STOCKS if s != INDEX_GROUP]

        snapshots = {}
        for sector in sectors:
            if sector not in POLITICAL_STOCKS or sector == INDEX_GROUP:
                raise InvalidArgument(f"Unknown sector {sector!r}")

            stocks = self.fetch_stock_data(POLITICAL_STOCKS[sector][:per_sector])
            avg_change = float(np.mean([s.change_percent for s in stocks])) if stocks else 0.0

            snapshots[sector] = SectorSnapshot(
                sector=sector,
                stocks=stocks,
                avg_change=avg_change,
                sentiment='positive' if avg_change > 0 else 'negative',
            )

        return snapshots

    def get_sector_dataframe(self, snapshots: Dict[str, SectorSnapshot]) -> pd.DataFrame:
        """Flatten sector snapshots into one row per stock."""
        rows = []
        for sector, snapshot in snapshots.items():
            for stock in snapshot.stocks:
                rows.append({'sector': sector, **stock.to_dict()})
        return pd.DataFrame(rows)

    def get_api_status(self) -> Dict[str, Dict[str, int]]:
        """Get rate-limit usage for the live quote services."""
        return self.rate_limiter.status()
