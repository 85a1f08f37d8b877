"""Event catalog and market data modules."""
from .political_events import EventCatalog, PoliticalEvent
from .market_data_fetcher import MarketDataFetcher, DataSource
from .api_clients import RateLimiter

__all__ = ['EventCatalog', 'PoliticalEvent', 'MarketDataFetcher', 'DataSource', 'RateLimiter']
